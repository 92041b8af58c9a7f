"""
가시성 설정 트리 (page / section / element)

모든 값은 boolean이고 기본값은 전부 True(노출).
저장 형태: content key `visibility` 에 {"config": <tree>, "updatedAt": iso}
"""

import copy
import logging
from typing import Any, Dict, List

from bandsite.core.errors import InvalidVisibilityPath, ValidationFailed


logger = logging.getLogger(__name__)

CONTENT_KEY = "visibility"
REQUIRED_GROUPS = ("pages", "navigation", "sections", "elements")

PAGE_NAMES = ("home", "about", "contact", "shows", "music", "media", "store")


def _all_true(*names: str) -> Dict[str, bool]:
    return {name: True for name in names}


DEFAULT_VISIBILITY_CONFIG: Dict[str, Any] = {
    "pages": _all_true(*PAGE_NAMES),
    "navigation": {
        "header": {
            "logo": True,
            "links": _all_true("shows", "music", "store", "about", "contact"),
        },
        "footer": {
            "visible": True,
            "brand": True,
            "socialLinks": _all_true("instagram", "facebook", "youtube", "spotify"),
            "quickLinks": True,
            "contact": True,
            "copyright": True,
        },
    },
    "sections": {
        "home": _all_true("hero", "marquee", "nextShow", "latestRelease", "socialFeed"),
        "about": _all_true("bio", "bandMembers", "influences", "philosophy", "contactCta"),
        "contact": _all_true("info", "form", "socialLinks"),
        "shows": _all_true("upcoming", "past", "bookingCta"),
        "music": _all_true("featuredRelease", "discography", "streamingLinks"),
        "media": _all_true("socialLinks", "photos", "videos", "flyers", "pressKit"),
        "store": _all_true("productGrid", "filters", "cart", "freeShippingBanner"),
    },
    "elements": {
        "buttons": _all_true(
            "heroSeeShows",
            "heroListenNow",
            "releaseViewMore",
            "aboutContactCta",
            "contactSendMessage",
            "showsBookingCta",
            "musicStreamingButtons",
            "mediaInstagramLink",
            "mediaPressKit",
            "storeAddToCart",
            "storeViewCart",
        ),
        "features": _all_true(
            "animations",
            "marqueeScroll",
            "hoverEffects",
            "mobileMenu",
            "cartSidebar",
            "productModal",
            "contactFormSubject",
        ),
    },
}


def default_config() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_VISIBILITY_CONFIG)


def get_config_value(config: Dict[str, Any], path: str) -> bool:
    """점(.) 경로를 따라가며 가장 구체적인 boolean을 반환한다.

    경로가 중간에 끊기거나 없으면 가장 가까운 boolean 조상 값을,
    그것도 없으면 True(노출)를 반환한다.
    """
    node: Any = config
    nearest = True
    for segment in [s for s in (path or "").split(".") if s]:
        if isinstance(node, bool):
            return node
        if not isinstance(node, dict) or segment not in node:
            return nearest
        node = node[segment]
        if isinstance(node, bool):
            nearest = node
    return node if isinstance(node, bool) else nearest


def set_config_value(config: Dict[str, Any], path: str, value: bool) -> Dict[str, Any]:
    """경로의 값을 바꾼 깊은 사본을 반환한다. 트리에 없는 경로면 InvalidVisibilityPath"""
    if not isinstance(value, bool):
        raise ValidationFailed("Validation failed", {"value": ["must be a boolean"]})
    segments = [s for s in (path or "").split(".") if s]
    if not segments:
        raise InvalidVisibilityPath(path)

    updated = copy.deepcopy(config)
    node: Any = updated
    for segment in segments[:-1]:
        if not isinstance(node, dict) or not isinstance(node.get(segment), dict):
            raise InvalidVisibilityPath(path)
        node = node[segment]
    leaf = segments[-1]
    if not isinstance(node, dict) or not isinstance(node.get(leaf), bool):
        raise InvalidVisibilityPath(path)
    node[leaf] = value
    return updated


def _coerce(raw: Any, default: Any) -> Any:
    if isinstance(default, dict):
        source = raw if isinstance(raw, dict) else {}
        return {key: _coerce(source.get(key), sub) for key, sub in default.items()}
    return raw if isinstance(raw, bool) else default


def coerce_visibility_config(raw: Any) -> Dict[str, Any]:
    """기본 트리 모양으로 맞춘다. 모르는 키는 버리고, boolean이 아닌 값은 기본값으로."""
    return _coerce(raw, DEFAULT_VISIBILITY_CONFIG)


def missing_groups(raw: Any) -> List[str]:
    if not isinstance(raw, dict):
        return list(REQUIRED_GROUPS)
    return [group for group in REQUIRED_GROUPS if not isinstance(raw.get(group), dict)]


def stored_config(document: Any) -> Dict[str, Any]:
    """저장 문서({config, updatedAt})에서 트리를 꺼내 정규화한다."""
    raw = document.get("config") if isinstance(document, dict) else None
    return coerce_visibility_config(raw)


def is_page_accessible(config: Dict[str, Any], page: str) -> bool:
    """페이지 자체와 헤더 링크가 모두 켜져 있어야 접근 가능"""
    return (
        get_config_value(config, f"pages.{page}")
        and get_config_value(config, f"navigation.header.links.{page}")
    )


def get_disabled_pages(config: Dict[str, Any]) -> List[str]:
    """404 처리할 경로 목록. pages 그룹만 본다 (헤더 링크는 무관)"""
    disabled = []
    for page in PAGE_NAMES:
        if not get_config_value(config, f"pages.{page}"):
            disabled.append("/" if page == "home" else f"/{page}")
    return disabled
