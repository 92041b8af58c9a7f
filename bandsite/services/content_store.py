"""
콘텐츠 문서 저장소

키 하나에 JSON 문서 하나. 스키마 검증은 하지 않는다.
- read(key): 없으면 ContentNotFound
- write(key, value): upsert
- patch(key, updates): 한 단계 얕은 병합
- append(key, field, item): 리스트 필드에 항목 추가
- mutate(key, fn): 키 단위 잠금 아래 read-modify-write

구현체: SQL 테이블(site_contents), 키별 JSON 파일, 원격 콘텐츠 API.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
import os
import re
import tempfile
import weakref
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Tuple

import aiohttp
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bandsite.core.config import settings
from bandsite.core.database import get_db
from bandsite.core.errors import ContentNotFound, ContentStoreError, InvalidContentKey, UpstreamError
from bandsite.core.ids import to_iso
from bandsite.core.paths import get_content_dir
from bandsite.models.site_content import SiteContent


logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,100}$")

# (이벤트 루프 id, 키) 단위 잠금. 아무도 잡고 있지 않은 잠금은 GC 가 정리한다.
_locks: "weakref.WeakValueDictionary[Tuple[int, str], asyncio.Lock]" = weakref.WeakValueDictionary()


def _lock_for(key: str) -> asyncio.Lock:
    slot = (id(asyncio.get_running_loop()), key)
    lock = _locks.get(slot)
    if lock is None:
        lock = asyncio.Lock()
        _locks[slot] = lock
    return lock


def validate_key(key: str) -> str:
    if not isinstance(key, str) or not KEY_PATTERN.match(key):
        raise InvalidContentKey(key)
    return key


class ContentStore:
    """저장소 공통 인터페이스 + 합성 연산"""

    async def read(self, key: str) -> Any:
        raise NotImplementedError

    async def _write(self, key: str, value: Any) -> None:
        raise NotImplementedError

    async def write(self, key: str, value: Any) -> None:
        """전체 교체. mutate 와 같은 키 잠금을 잡는다."""
        async with _lock_for(key):
            await self._write(key, value)

    async def read_record(self, key: str) -> Dict[str, Any]:
        """관리자 조회용 {key, value, updatedAt}. 없으면 value=None"""
        try:
            value = await self.read(key)
        except ContentNotFound:
            return {"key": key, "value": None}
        return {"key": key, "value": value, "updatedAt": None}

    async def read_or_default(self, key: str, default: Any = None) -> Any:
        try:
            return await self.read(key)
        except ContentNotFound:
            return copy.deepcopy(default)

    async def mutate(self, key: str, fn: Callable[[Any], Any], default: Any = None) -> Any:
        """현재 값(없으면 default)의 사본을 fn에 넘기고, 반환값을 저장한다.

        같은 프로세스 안에서는 같은 키에 대한 mutate/write 가 직렬화된다.
        fn이 예외를 던지면 아무것도 저장하지 않는다.
        """
        async with _lock_for(key):
            current = await self.read_or_default(key, default)
            updated = fn(copy.deepcopy(current))
            await self._write(key, updated)
            return updated

    async def patch(self, key: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """한 단계 얕은 병합. 중첩 객체는 통째로 교체된다."""

        def _merge(current: Any) -> Dict[str, Any]:
            base = current if isinstance(current, dict) else {}
            return {**base, **updates}

        return await self.mutate(key, _merge, {})

    async def append(self, key: str, field: str, item: Any, *, prepend: bool = False) -> Dict[str, Any]:
        def _append(current: Any) -> Dict[str, Any]:
            doc = current if isinstance(current, dict) else {}
            items = doc.get(field)
            items = list(items) if isinstance(items, list) else []
            if prepend:
                items.insert(0, item)
            else:
                items.append(item)
            doc[field] = items
            return doc

        return await self.mutate(key, _append, {})


class SqlContentStore(ContentStore):
    """site_contents 테이블 (키당 한 행)"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_row(self, key: str) -> Optional[SiteContent]:
        try:
            result = await self.session.execute(select(SiteContent).where(SiteContent.key == key))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"[content] read failed key={key}: {e}", exc_info=True)
            raise ContentStoreError(f"read failed: {key}") from e

    async def read(self, key: str) -> Any:
        row = await self._get_row(validate_key(key))
        if row is None:
            raise ContentNotFound(key)
        return row.value

    async def read_record(self, key: str) -> Dict[str, Any]:
        row = await self._get_row(validate_key(key))
        if row is None:
            return {"key": key, "value": None}
        return {
            "key": key,
            "value": row.value,
            "updatedAt": to_iso(row.updated_at) if row.updated_at else None,
        }

    async def _write(self, key: str, value: Any) -> None:
        row = await self._get_row(validate_key(key))
        try:
            if row is None:
                self.session.add(SiteContent(key=key, value=value))
            else:
                row.value = value
            await self.session.commit()
        except SQLAlchemyError as e:
            try:
                await self.session.rollback()
            except SQLAlchemyError:
                logger.warning(f"[content] rollback failed key={key}")
            logger.error(f"[content] write failed key={key}: {e}", exc_info=True)
            raise ContentStoreError(f"write failed: {key}") from e


class FileContentStore(ContentStore):
    """디렉토리 아래 `<key>.json` 파일 하나씩"""

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        os.makedirs(self.data_dir, exist_ok=True)

    def _path(self, key: str) -> str:
        return os.path.join(self.data_dir, f"{validate_key(key)}.json")

    def _read_sync(self, path: str, key: str) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            raise ContentNotFound(key)
        except json.JSONDecodeError as e:
            logger.error(f"[content] malformed JSON key={key}: {e}")
            raise ContentStoreError(f"malformed JSON: {key}") from e
        except OSError as e:
            logger.error(f"[content] read failed key={key}: {e}")
            raise ContentStoreError(f"read failed: {key}") from e

    def _write_sync(self, path: str, key: str, value: Any) -> None:
        # 임시 파일에 쓰고 os.replace 로 교체 (POSIX에서 원자적)
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            logger.error(f"[content] write failed key={key}: {e}")
            raise ContentStoreError(f"write failed: {key}") from e

    async def read(self, key: str) -> Any:
        path = self._path(key)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_sync, path, key)

    async def read_record(self, key: str) -> Dict[str, Any]:
        record = await super().read_record(key)
        if record.get("value") is not None:
            try:
                mtime = os.path.getmtime(self._path(key))
                record["updatedAt"] = to_iso(datetime.fromtimestamp(mtime, tz=timezone.utc))
            except OSError:
                pass
        return record

    async def _write(self, key: str, value: Any) -> None:
        path = self._path(key)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_sync, path, key, value)


class RemoteContentStore(ContentStore):
    """원격 콘텐츠 API (GET /content/{key}, PUT /admin/content/{key})"""

    def __init__(self, base_url: str, *, api_key: Optional[str] = None, timeout_seconds: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["X-Internal-API-Key"] = self.api_key
        return headers

    async def read(self, key: str) -> Any:
        url = f"{self.base_url}/content/{validate_key(key)}"
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(url, headers=self.headers, timeout=self.timeout) as resp:
                    if resp.status == 404:
                        raise ContentNotFound(key)
                    if resp.status >= 400:
                        text = await resp.text()
                        logger.warning(f"[content] upstream GET {key} -> {resp.status}: {text[:200]}")
                        raise UpstreamError(f"upstream returned {resp.status}")
                    raw = await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"[content] upstream GET {key} failed: {e}")
            raise UpstreamError("content backend unreachable") from e
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"[content] upstream returned malformed JSON for {key}")
            raise ContentStoreError(f"malformed JSON: {key}") from e

    async def _write(self, key: str, value: Any) -> None:
        url = f"{self.base_url}/admin/content/{validate_key(key)}"
        try:
            async with aiohttp.ClientSession() as session:
                async with session.put(url, headers=self.headers, json={"value": value}, timeout=self.timeout) as resp:
                    if resp.status >= 400:
                        text = await resp.text()
                        logger.warning(f"[content] upstream PUT {key} -> {resp.status}: {text[:200]}")
                        raise UpstreamError(f"upstream returned {resp.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"[content] upstream PUT {key} failed: {e}")
            raise UpstreamError("content backend unreachable") from e


def build_content_store(db: Optional[AsyncSession] = None) -> ContentStore:
    backend = settings.CONTENT_BACKEND
    if backend == "file":
        return FileContentStore(get_content_dir())
    if backend == "remote":
        return RemoteContentStore(
            settings.CONTENT_API_URL,
            api_key=settings.CONTENT_API_KEY,
            timeout_seconds=settings.CONTENT_API_TIMEOUT_SECONDS,
        )
    if db is None:
        raise ContentStoreError("SQL content store requires a database session")
    return SqlContentStore(db)


async def get_content_store(db: AsyncSession = Depends(get_db)) -> ContentStore:
    """콘텐츠 저장소 의존성 (CONTENT_BACKEND 로 구현체 선택)"""
    return build_content_store(db)


__all__ = [
    "ContentStore",
    "SqlContentStore",
    "FileContentStore",
    "RemoteContentStore",
    "build_content_store",
    "get_content_store",
    "validate_key",
]
