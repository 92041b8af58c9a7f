"""
콘텐츠 도메인별 기본값/정규화

저장된 문서가 없거나 모양이 깨져 있어도 API는 항상 정해진 모양을 돌려준다.
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict

from bandsite.services.content_store import ContentStore


def _list_or(value: Any, fallback: list) -> list:
    return value if isinstance(value, list) else copy.deepcopy(fallback)


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class ContentDomain:
    key: str
    defaults: Dict[str, Any]
    normalizer: Callable[[Any, Dict[str, Any]], Dict[str, Any]]

    def default(self) -> Dict[str, Any]:
        return copy.deepcopy(self.defaults)

    def normalize(self, raw: Any) -> Dict[str, Any]:
        return self.normalizer(raw, self.defaults)


def _normalize_lists(*fields: str) -> Callable[[Any, Dict[str, Any]], Dict[str, Any]]:
    """지정 필드가 모두 리스트인 문서용 정규화 (그 외 필드는 보존)"""

    def _normalize(raw: Any, defaults: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(_dict(raw))
        for field in fields:
            doc[field] = _list_or(doc.get(field), defaults.get(field, []))
        return doc

    return _normalize


def _normalize_homepage(raw: Any, defaults: Dict[str, Any]) -> Dict[str, Any]:
    doc = _dict(raw)
    hero = _dict(doc.get("hero"))
    show = _dict(doc.get("featuredShow"))
    release = _dict(doc.get("featuredRelease"))
    d_hero, d_show, d_release = defaults["hero"], defaults["featuredShow"], defaults["featuredRelease"]
    return {
        "hero": {
            "title": hero.get("title") or d_hero["title"],
            "tagline": _list_or(hero.get("tagline"), d_hero["tagline"]),
            "marqueeText": hero.get("marqueeText") or d_hero["marqueeText"],
        },
        "featuredShow": {
            "enabled": show["enabled"] if isinstance(show.get("enabled"), bool) else d_show["enabled"],
            "showId": show.get("showId") or None,
        },
        "featuredRelease": {
            "enabled": release["enabled"] if isinstance(release.get("enabled"), bool) else d_release["enabled"],
            "releaseId": release.get("releaseId") or None,
            "placeholderText": release.get("placeholderText") or d_release["placeholderText"],
        },
    }


def _normalize_products(raw: Any, defaults: Dict[str, Any]) -> Dict[str, Any]:
    doc = dict(_dict(raw))
    doc["products"] = _list_or(doc.get("products"), [])
    rates = _dict(doc.get("shippingRates"))
    d_rates = defaults["shippingRates"]
    merged = copy.deepcopy(d_rates)
    for method in ("standard", "express"):
        if isinstance(rates.get(method), dict):
            merged[method] = {**d_rates[method], **rates[method]}
    if isinstance(rates.get("freeShippingThreshold"), int):
        merged["freeShippingThreshold"] = rates["freeShippingThreshold"]
    doc["shippingRates"] = merged
    return doc


def _merge_strings(raw: Any, defaults: Dict[str, Any]) -> Dict[str, Any]:
    """기본 키는 문자열로 보장하고 추가 키는 보존"""
    doc = {**copy.deepcopy(defaults), **_dict(raw)}
    for field, fallback in defaults.items():
        if not isinstance(doc.get(field), str):
            doc[field] = fallback
    return doc


ABOUT = ContentDomain(
    key="about",
    defaults={"members": [], "influences": [], "philosophy": [], "bio": []},
    normalizer=_normalize_lists("members", "influences", "philosophy", "bio"),
)

# 공개 페이지는 문서가 비어 있을 때 밴드 소개 문구를 채워 보여준다.
ABOUT_PUBLIC = ContentDomain(
    key="about",
    defaults={
        "members": [],
        "influences": [
            "Black Sabbath",
            "Slayer",
            "Municipal Waste",
            "Power Trip",
            "Suicidal Tendencies",
            "D.R.I.",
        ],
        "philosophy": [
            {"title": "CHAOS", "description": "Embrace the madness. Let the riffs consume you."},
            {"title": "COMMUNITY", "description": "The pit is family. We protect our own."},
            {"title": "AUTHENTICITY", "description": "No posers. Just pure squirrelcore fury."},
        ],
        "bio": [
            "Unholy Rodents emerged from the depths of Central Florida with one mission: "
            "to unleash squirrelcore upon the world.",
            "What started as a joke about squirrels worshipping Satan quickly evolved into a "
            "full-blown musical movement blending thrash, punk, and pure chaos.",
            "Hail Squatan. Stay Nuts.",
        ],
    },
    normalizer=_normalize_lists("members", "influences", "philosophy", "bio"),
)

HOMEPAGE = ContentDomain(
    key="homepage",
    defaults={
        "hero": {
            "title": "UNHOLY RODENTS",
            "tagline": ["SQUIRRELCORE FROM THE DEPTHS OF THE SQUNDERWORLD", "HAIL SQUATAN"],
            "marqueeText": "HAIL SQUATAN /// STAY NUTS /// SQUIRRELCORE",
        },
        "featuredShow": {"enabled": True, "showId": None},
        "featuredRelease": {
            "enabled": True,
            "releaseId": None,
            "placeholderText": "New music is in the works. Stay tuned for announcements about our upcoming releases.",
        },
    },
    normalizer=_normalize_homepage,
)

MEDIA = ContentDomain(
    key="media",
    defaults={"photos": [], "videos": [], "flyers": []},
    normalizer=_normalize_lists("photos", "videos", "flyers"),
)

MUSIC = ContentDomain(
    key="music",
    defaults={"releases": [], "streamingPlatforms": []},
    normalizer=_normalize_lists("releases", "streamingPlatforms"),
)

SHOWS = ContentDomain(
    key="shows",
    defaults={"upcomingShows": [], "pastShows": []},
    normalizer=_normalize_lists("upcomingShows", "pastShows"),
)

DEFAULT_SHIPPING_RATES = {
    "standard": {"name": "Standard Shipping", "price": 599, "estimatedDays": "5-7 business days"},
    "express": {"name": "Express Shipping", "price": 1299, "estimatedDays": "2-3 business days"},
    "freeShippingThreshold": 7500,
}

PRODUCTS = ContentDomain(
    key="products",
    defaults={"products": [], "shippingRates": DEFAULT_SHIPPING_RATES},
    normalizer=_normalize_products,
)

ORDERS = ContentDomain(
    key="orders",
    defaults={"orders": []},
    normalizer=_normalize_lists("orders"),
)

SOCIALS = ContentDomain(
    key="socials",
    defaults={
        "instagram": "",
        "facebook": "",
        "youtube": "",
        "spotify": "",
        "tiktok": "",
        "twitter": "",
        "bandcamp": "",
    },
    normalizer=_merge_strings,
)

SITE_CONFIG = ContentDomain(
    key="site-config",
    defaults={"ogImage": ""},
    normalizer=_merge_strings,
)


async def load(store: ContentStore, domain: ContentDomain) -> Dict[str, Any]:
    """저장된 문서를 읽어 정규화한다. 없으면 기본값."""
    raw = await store.read_or_default(domain.key, None)
    return domain.normalize(raw)


async def update(store: ContentStore, domain: ContentDomain, fn: Callable[[Dict[str, Any]], Dict[str, Any]]) -> Dict[str, Any]:
    """정규화된 문서에 fn을 적용해 저장한다 (키 단위 잠금)."""
    return await store.mutate(domain.key, lambda raw: fn(domain.normalize(raw)), None)
