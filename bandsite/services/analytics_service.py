"""
방문/재생 기록 및 집계
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bandsite.models.analytics import PageView, TrackPlay
from bandsite.schemas.analytics import PageViewEvent, PlayEvent


logger = logging.getLogger(__name__)


def _clip(value: Any, limit: int) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)[:limit]


def _since(days: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=days)


async def record_pageview(db: AsyncSession, event: PageViewEvent, *, user_agent: Optional[str], ip: Optional[str]) -> None:
    db.add(PageView(
        path=event.path[:500],
        referrer=_clip(event.referrer, 1000),
        user_agent=_clip(user_agent, 500),
        ip=_clip(ip, 45),
        session_id=_clip(event.sessionId, 100),
    ))
    await db.commit()


async def record_play(db: AsyncSession, event: PlayEvent, *, ip: Optional[str]) -> None:
    db.add(TrackPlay(
        track_id=event.trackId[:200],
        track_name=event.trackName[:500],
        release_id=_clip(event.releaseId, 200),
        release_name=_clip(event.releaseName, 500),
        session_id=_clip(event.sessionId, 100),
        ip=_clip(ip, 45),
    ))
    await db.commit()


async def play_counts(db: AsyncSession) -> Dict[str, Dict[str, int]]:
    """트랙/발매작별 누적 재생 수 (공개)"""
    tracks = await db.execute(
        select(TrackPlay.track_id, func.count(TrackPlay.id)).group_by(TrackPlay.track_id)
    )
    releases = await db.execute(
        select(TrackPlay.release_id, func.count(TrackPlay.id))
        .where(TrackPlay.release_id.is_not(None))
        .group_by(TrackPlay.release_id)
    )
    return {
        "tracks": {track_id: count for track_id, count in tracks.all()},
        "releases": {release_id: count for release_id, count in releases.all()},
    }


async def _count(db: AsyncSession, stmt) -> int:
    return int((await db.execute(stmt)).scalar() or 0)


async def overview(db: AsyncSession, days: int) -> Dict[str, Any]:
    since = _since(days)
    return {
        "totalPageViews": await _count(db, select(func.count(PageView.id))),
        "totalPlays": await _count(db, select(func.count(TrackPlay.id))),
        "recentPageViews": await _count(db, select(func.count(PageView.id)).where(PageView.created_at >= since)),
        "recentPlays": await _count(db, select(func.count(TrackPlay.id)).where(TrackPlay.created_at >= since)),
        "uniqueVisitors": await _count(
            db,
            select(func.count(func.distinct(PageView.session_id))).where(
                PageView.created_at >= since,
                PageView.session_id.is_not(None),
            ),
        ),
        "period": days,
    }


async def pageview_trends(db: AsyncSession, days: int) -> Dict[str, Any]:
    since = _since(days)
    day = func.date(PageView.created_at)
    daily = await db.execute(
        select(day, func.count(PageView.id)).where(PageView.created_at >= since).group_by(day).order_by(day)
    )
    views = func.count(PageView.id)
    top_pages = await db.execute(
        select(PageView.path, views).where(PageView.created_at >= since)
        .group_by(PageView.path).order_by(views.desc()).limit(20)
    )
    top_referrers = await db.execute(
        select(PageView.referrer, views)
        .where(PageView.created_at >= since, PageView.referrer.is_not(None))
        .group_by(PageView.referrer).order_by(views.desc()).limit(10)
    )
    return {
        "daily": [{"date": str(d), "views": c} for d, c in daily.all()],
        "topPages": [{"path": p, "views": c} for p, c in top_pages.all()],
        "topReferrers": [{"referrer": r, "views": c} for r, c in top_referrers.all()],
    }


async def play_trends(db: AsyncSession, days: int) -> Dict[str, Any]:
    since = _since(days)
    day = func.date(TrackPlay.created_at)
    plays = func.count(TrackPlay.id)
    daily = await db.execute(
        select(day, plays).where(TrackPlay.created_at >= since).group_by(day).order_by(day)
    )
    top_tracks = await db.execute(
        select(TrackPlay.track_id, TrackPlay.track_name, plays)
        .where(TrackPlay.created_at >= since)
        .group_by(TrackPlay.track_id, TrackPlay.track_name)
        .order_by(plays.desc()).limit(20)
    )
    top_releases = await db.execute(
        select(TrackPlay.release_id, TrackPlay.release_name, plays)
        .where(TrackPlay.created_at >= since, TrackPlay.release_id.is_not(None))
        .group_by(TrackPlay.release_id, TrackPlay.release_name)
        .order_by(plays.desc()).limit(10)
    )
    return {
        "daily": [{"date": str(d), "plays": c} for d, c in daily.all()],
        "topTracks": [{"trackId": t, "trackName": n, "plays": c} for t, n, c in top_tracks.all()],
        "topReleases": [{"releaseId": r, "releaseName": n, "plays": c} for r, n, c in top_releases.all()],
        "totalPlays": await _count(db, select(func.count(TrackPlay.id))),
    }


async def realtime(db: AsyncSession) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    five_minutes = now - timedelta(minutes=5)
    hour = now - timedelta(hours=1)
    recent = await db.execute(
        select(TrackPlay.track_name, TrackPlay.release_name, TrackPlay.created_at)
        .where(TrackPlay.created_at >= hour)
        .order_by(TrackPlay.created_at.desc())
        .limit(10)
    )
    return {
        "activeVisitors": await _count(
            db,
            select(func.count(func.distinct(PageView.session_id))).where(
                PageView.created_at >= five_minutes,
                PageView.session_id.is_not(None),
            ),
        ),
        "lastHourViews": await _count(db, select(func.count(PageView.id)).where(PageView.created_at >= hour)),
        "lastHourPlays": await _count(db, select(func.count(TrackPlay.id)).where(TrackPlay.created_at >= hour)),
        "recentPlays": [
            {
                "trackName": name,
                "releaseName": release,
                "playedAt": played_at.isoformat() if played_at else None,
            }
            for name, release, played_at in recent.all()
        ],
    }
