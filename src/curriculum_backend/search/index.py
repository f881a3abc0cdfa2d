"""
Secondary search index kept next to the relational store.

Documents live in the aiocache backend (Redis in deployments, memory in
development) under ``search:<namespace>:doc:<id>``; the set of indexed
ids is kept under ``search:<namespace>:ids``. The index is best-effort:
it is never the source of truth and writes to it are not transactional
with the store.

Membership of the id set is updated atomically: on Redis through
``SADD``/``SREM`` on a real set, on other backends under a per-namespace
lock held across the read and the write back.
"""

import asyncio
import logging
import weakref
from typing import Any, Dict, Iterable, List, Optional

from aiocache import BaseCache

logger = logging.getLogger(__name__)

# event loop -> namespace -> lock
_membership_locks = weakref.WeakKeyDictionary()


def _membership_lock(namespace: str) -> asyncio.Lock:
    locks = _membership_locks.setdefault(asyncio.get_running_loop(), {})
    if namespace not in locks:
        locks[namespace] = asyncio.Lock()
    return locks[namespace]


def _decode(member: Any) -> str:
    return member.decode("utf-8") if isinstance(member, bytes) else str(member)


class SearchIndex:

    def __init__(self, cache: BaseCache, namespace: str):
        self.cache = cache
        self.namespace = namespace

    def _doc_key(self, entity_id: Any) -> str:
        return f"search:{self.namespace}:doc:{entity_id}"

    @property
    def _ids_key(self) -> str:
        return f"search:{self.namespace}:ids"

    @property
    def _uses_redis_sets(self) -> bool:
        return getattr(self.cache, "NAME", None) == "redis"

    async def _ids(self) -> List[str]:
        if self._uses_redis_sets:
            members = await self.cache.raw("smembers", self._ids_key) or set()
            return sorted((_decode(member) for member in members), key=lambda m: (len(m), m))
        return list(await self.cache.get(self._ids_key) or [])

    async def _add_id(self, entity_id: Any) -> None:
        if self._uses_redis_sets:
            await self.cache.raw("sadd", self._ids_key, str(entity_id))
            return

        async with _membership_lock(self.namespace):
            ids = await self._ids()
            if str(entity_id) not in ids:
                ids.append(str(entity_id))
                await self.cache.set(self._ids_key, ids)

    async def _remove_id(self, entity_id: Any) -> None:
        if self._uses_redis_sets:
            await self.cache.raw("srem", self._ids_key, str(entity_id))
            return

        async with _membership_lock(self.namespace):
            ids = await self._ids()
            if str(entity_id) in ids:
                ids.remove(str(entity_id))
                await self.cache.set(self._ids_key, ids)

    async def index(self, entity_id: Any, document: Dict[str, Any]) -> None:
        """Insert or replace the document for ``entity_id``."""
        await self.cache.set(self._doc_key(entity_id), dict(document))
        await self._add_id(entity_id)

    async def delete_by_id(self, entity_id: Any) -> None:
        await self.cache.delete(self._doc_key(entity_id))
        await self._remove_id(entity_id)

    async def get(self, entity_id: Any) -> Optional[Dict[str, Any]]:
        return await self.cache.get(self._doc_key(entity_id))

    async def query(self, text: str, fields: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        """Documents where any of ``fields`` (default: every string field) contains ``text``."""
        ids = await self._ids()
        if not ids:
            return []

        documents = await self.cache.multi_get([self._doc_key(entity_id) for entity_id in ids])
        fields = list(fields) if fields else None

        matches = []
        for document in documents:
            if document is None:
                continue
            values = [document.get(field) for field in fields] if fields else list(document.values())
            if any(isinstance(value, str) and text in value for value in values):
                matches.append(document)
        return matches

    async def clear(self) -> None:
        for entity_id in await self._ids():
            await self.cache.delete(self._doc_key(entity_id))

        if self._uses_redis_sets:
            await self.cache.raw("delete", self._ids_key)
        else:
            await self.cache.delete(self._ids_key)
