"""
결제 공급자 설정 (stripe / square / paypal)

- 비밀 값은 Fernet 으로 암호화해 `enc:` 접두사로 저장한다.
- 관리자 조회 시에는 마스킹, 공개 조회는 {configured, activeProvider} 만.
- 마스킹된 값("••" 포함)이 다시 들어오면 기존 저장 값을 유지한다.
"""

import base64
import copy
import hashlib
import logging
from typing import Any, Dict

from cryptography.fernet import Fernet, InvalidToken

from bandsite.core.config import settings
from bandsite.services.content_store import ContentStore


logger = logging.getLogger(__name__)

CONTENT_KEY = "payment_config"
ENC_PREFIX = "enc:"
MASK_CHAR = "•"

PROVIDERS = ("stripe", "square", "paypal")

ENCRYPTED_FIELDS = {
    "stripe": ("secretKey", "webhookSecret"),
    "square": ("accessToken", "webhookSignatureKey"),
    "paypal": ("clientSecret",),
}

# isConfigured 판단에 필요한 필드
REQUIRED_FIELDS = {
    "stripe": ("publishableKey", "secretKey"),
    "square": ("applicationId", "accessToken", "locationId"),
    "paypal": ("clientId", "clientSecret"),
}

DEFAULT_PAYMENT_CONFIG: Dict[str, Any] = {
    "activeProvider": None,
    "stripe": {"publishableKey": "", "secretKey": "", "webhookSecret": "", "mode": "test", "isConfigured": False},
    "square": {
        "applicationId": "",
        "accessToken": "",
        "locationId": "",
        "webhookSignatureKey": "",
        "mode": "sandbox",
        "isConfigured": False,
    },
    "paypal": {"clientId": "", "clientSecret": "", "mode": "sandbox", "isConfigured": False},
}


def _fernet() -> Fernet:
    key = settings.PAYMENT_ENCRYPTION_KEY
    if not key:
        # 개발 환경: 세션 시크릿에서 파생 (운영은 validate_settings 가 키를 강제)
        digest = hashlib.sha256(settings.SESSION_SECRET_KEY.encode("utf-8")).digest()
        key = base64.urlsafe_b64encode(digest).decode("ascii")
    return Fernet(key.encode("ascii") if isinstance(key, str) else key)


def is_encrypted(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(ENC_PREFIX)


def encrypt(value: str) -> str:
    return ENC_PREFIX + _fernet().encrypt(value.encode("utf-8")).decode("ascii")


def decrypt(value: str) -> str:
    if not is_encrypted(value):
        return value
    try:
        return _fernet().decrypt(value[len(ENC_PREFIX):].encode("ascii")).decode("utf-8")
    except InvalidToken:
        logger.error("[payment-config] stored secret could not be decrypted (key changed?)")
        raise


def mask_secret(value: str) -> str:
    if not value or len(value) < 8:
        return MASK_CHAR * 8
    return value[:7] + MASK_CHAR * min(20, len(value) - 7)


def normalize(raw: Any) -> Dict[str, Any]:
    config = copy.deepcopy(DEFAULT_PAYMENT_CONFIG)
    if not isinstance(raw, dict):
        return config
    active = raw.get("activeProvider")
    config["activeProvider"] = active if active in PROVIDERS else None
    for provider in PROVIDERS:
        if isinstance(raw.get(provider), dict):
            config[provider].update(raw[provider])
    return config


def _plaintext(value: Any) -> str:
    if not isinstance(value, str) or not value:
        return ""
    try:
        return decrypt(value)
    except InvalidToken:
        return ""


def masked_view(config: Dict[str, Any]) -> Dict[str, Any]:
    """관리자 조회용: 비밀 필드는 복호화 후 마스킹"""
    view = copy.deepcopy(config)
    for provider, fields in ENCRYPTED_FIELDS.items():
        for field in fields:
            value = view[provider].get(field)
            if isinstance(value, str) and value:
                view[provider][field] = mask_secret(_plaintext(value) or value)
    return view


def public_view(config: Dict[str, Any]) -> Dict[str, Any]:
    active = config.get("activeProvider")
    configured = bool(active in PROVIDERS and config.get(active, {}).get("isConfigured"))
    return {"configured": configured, "activeProvider": active if configured else None}


def merge_incoming(incoming: Dict[str, Any], existing: Dict[str, Any]) -> Dict[str, Any]:
    """저장할 설정을 만든다. 마스킹 값은 기존 값 유지, 평문 비밀은 암호화."""
    result = normalize(incoming)
    for provider in PROVIDERS:
        section = result[provider]
        for field in ENCRYPTED_FIELDS[provider]:
            value = section.get(field)
            if not isinstance(value, str) or not value:
                continue
            if "••" in value:
                section[field] = existing.get(provider, {}).get(field, "")
            elif not is_encrypted(value):
                section[field] = encrypt(value)
        section["isConfigured"] = all(section.get(f) for f in REQUIRED_FIELDS[provider])
    return result


def check_provider(config: Dict[str, Any], provider: str) -> Dict[str, Any]:
    """저장된 자격 증명의 형식만 점검한다 (실제 결제 API 호출 없음)."""
    section = {k: (_plaintext(v) if k in ENCRYPTED_FIELDS[provider] else v) for k, v in config[provider].items()}
    valid = False
    if provider == "stripe":
        sk, pk = section.get("secretKey") or "", section.get("publishableKey") or ""
        if not sk or not pk:
            message = "Missing publishable key or secret key"
        elif section.get("mode") == "test" and not (sk.startswith("sk_test_") and pk.startswith("pk_test_")):
            message = "Test mode keys should start with sk_test_ and pk_test_"
        elif section.get("mode") == "live" and not (sk.startswith("sk_live_") and pk.startswith("pk_live_")):
            message = "Live mode keys should start with sk_live_ and pk_live_"
        else:
            valid = True
            message = "Stripe credentials look valid. Full validation will occur during checkout."
    elif provider == "square":
        if not section.get("accessToken") or not section.get("applicationId"):
            message = "Missing application ID or access token"
        elif not section.get("locationId"):
            message = "Missing location ID (required for processing payments)"
        else:
            valid = True
            message = "Square credentials look valid. Full validation will occur during checkout."
    else:
        if not section.get("clientId") or not section.get("clientSecret"):
            message = "Missing client ID or client secret"
        else:
            valid = True
            message = "PayPal credentials look valid. Full validation will occur during checkout."
    return {"success": valid, "message": message}


async def load_config(store: ContentStore) -> Dict[str, Any]:
    return normalize(await store.read_or_default(CONTENT_KEY, None))


async def save_config(store: ContentStore, incoming: Dict[str, Any]) -> Dict[str, Any]:
    return await store.mutate(CONTENT_KEY, lambda raw: merge_incoming(incoming, normalize(raw)), None)


async def has_saved_config(store: ContentStore) -> bool:
    return (await store.read_or_default(CONTENT_KEY, None)) is not None
