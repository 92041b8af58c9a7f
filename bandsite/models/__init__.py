"""
모델 패키지
"""

from .site_content import SiteContent
from .contact_message import ContactMessage
from .subscriber import Subscriber
from .analytics import PageView, TrackPlay

__all__ = [
    "SiteContent",
    "ContactMessage",
    "Subscriber",
    "PageView",
    "TrackPlay",
]
