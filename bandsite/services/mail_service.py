"""
이메일 발송 서비스 (문의 접수 알림)
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
import smtplib
import ssl
import asyncio
import logging

from bandsite.core.config import settings


logger = logging.getLogger(__name__)


def _build_contact_notification(message: dict) -> tuple[str, str, str]:
    """문의 알림 메일 제목/텍스트/HTML 생성"""
    kind = str(message.get("type", "general")).upper()
    subject_line = message.get("subject") or "(no subject)"
    subject = f"[{settings.SITE_NAME}] New {kind} message: {subject_line}"
    text = (
        f"A new {message.get('type')} message was submitted on {settings.SITE_NAME}.\n\n"
        f"From: {message.get('name')} <{message.get('email')}>\n"
        f"Subject: {subject_line}\n\n"
        f"{message.get('message')}\n"
    )
    html = f"""
    <div style="font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; color:#111;">
      <h2>New {escape(kind)} message</h2>
      <ul>
        <li><strong>Name:</strong> {escape(str(message.get('name')))}</li>
        <li><strong>Email:</strong> {escape(str(message.get('email')))}</li>
        <li><strong>Subject:</strong> {escape(str(subject_line))}</li>
      </ul>
      <hr style="margin:20px 0;border:none;border-top:1px solid #e5e7eb;" />
      <div style="background:#f9fafb;padding:16px;border-radius:8px;white-space:pre-wrap;">{escape(str(message.get('message')))}</div>
    </div>
    """
    return subject, text, html


def _send_email_sync(to_email: str, subject: str, text: str, html: str) -> None:
    """동기 SMTP 전송 (스레드 풀에서 실행)"""
    if not settings.SMTP_HOST:
        # 개발 환경: 실제 발송 없이 로그로 대체
        logger.info("[DEV] email not sent (SMTP not configured) subject=%s to=%s", subject, to_email)
        return

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{settings.EMAIL_FROM_NAME} <{settings.EMAIL_FROM_ADDRESS}>"
    msg["To"] = to_email
    msg.attach(MIMEText(text, "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))

    context = ssl.create_default_context()
    if settings.SMTP_USE_SSL:
        with smtplib.SMTP_SSL(settings.SMTP_HOST, settings.SMTP_PORT, context=context) as server:
            if settings.SMTP_USERNAME and settings.SMTP_PASSWORD:
                server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
            server.sendmail(settings.EMAIL_FROM_ADDRESS, [to_email], msg.as_string())
    else:
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
            if settings.SMTP_USE_TLS:
                server.starttls(context=context)
            if settings.SMTP_USERNAME and settings.SMTP_PASSWORD:
                server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
            server.sendmail(settings.EMAIL_FROM_ADDRESS, [to_email], msg.as_string())


async def send_contact_notification(message: dict) -> bool:
    """문의 접수 알림 (비동기, 실패해도 예외를 올리지 않는다)"""
    to_email = settings.NOTIFICATION_EMAIL or settings.EMAIL_FROM_ADDRESS
    subject, text, html = _build_contact_notification(message)
    try:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _send_email_sync, to_email, subject, text, html)
        return True
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"contact notification failed: {e}", exc_info=True)
        return False
