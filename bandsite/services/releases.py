"""
발매작 공개 응답 가공

- password 필드는 어떤 공개 응답에도 포함되지 않는다.
- private 발매작은 비밀번호가 일치할 때만 audioUrl/lyrics 를 내려준다.
- unlisted 발매작은 목록에서 빠지고 slug 로만 접근 가능하다.
"""

import hmac
from typing import Any, Dict, List, Optional

from bandsite.core.errors import NotFoundError


def _password_matches(stored: Any, supplied: Optional[str]) -> bool:
    if not isinstance(stored, str) or supplied is None:
        return False
    return hmac.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))


def redact_release(release: Dict[str, Any], password: Optional[str] = None) -> Dict[str, Any]:
    """공개용 사본. private 이고 비밀번호가 틀리면 트랙을 {title, duration} 으로 줄인다."""
    public = {k: v for k, v in release.items() if k != "password"}
    if release.get("visibility") == "private" and not _password_matches(release.get("password"), password):
        tracks = release.get("tracks") if isinstance(release.get("tracks"), list) else []
        public["tracks"] = [
            {"title": t.get("title", ""), "duration": t.get("duration", "")}
            for t in tracks
            if isinstance(t, dict)
        ]
        public["requiresPassword"] = True
    return public


def public_release_list(releases: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """공개 목록: unlisted 제외, 나머지는 redact"""
    return [
        redact_release(r)
        for r in releases
        if isinstance(r, dict) and r.get("visibility") != "unlisted"
    ]


def find_release_by_slug(releases: List[Dict[str, Any]], slug: str) -> Dict[str, Any]:
    for release in releases:
        if isinstance(release, dict) and release.get("slug") == slug:
            return release
    raise NotFoundError("Release not found")
