"""
Relation hydration.

Entities store foreign keys as plain ids. The functions here turn those ids
into sibling entities on demand; `LazyRelation` caches one resolved value
until it is explicitly set or invalidated. The cache lives on view objects,
never on ORM rows.

Tolerance policy:
- optional plural (project images): unresolvable ids are dropped;
- optional singular (SEO open-graph image): absent or unresolvable -> None;
- required singular (retouche before/after): unresolvable -> BrokenReferenceException.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Iterable, Sequence
from typing import Any, Generic, Protocol, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portfolio.commons.exceptions import BaseCoreException
from portfolio.commons.ids import parse_id

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class BrokenReferenceException(BaseCoreException):
    pass


class EntityLookup(Protocol[T_co]):
    async def find_by_id(self, session: AsyncSession, entity_id: UUID) -> T_co | None: ...


class BulkEntityLookup(EntityLookup[T_co], Protocol[T_co]):
    async def find_by_ids(
        self, session: AsyncSession, entity_ids: Sequence[UUID]
    ) -> list[T_co]: ...


def parse_id_list(raw: str | None) -> list[UUID]:
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(data, list):
        return []
    ids: list[UUID] = []
    for item in data:
        parsed = parse_id(item)
        if parsed is not None:
            ids.append(parsed)
    return ids


def dump_id_list(ids: Iterable[UUID]) -> str:
    return json.dumps([str(i) for i in ids])


async def resolve_many(
    session: AsyncSession, repo: BulkEntityLookup[T], ids: Sequence[UUID]
) -> list[T]:
    if not ids:
        return []
    found = await repo.find_by_ids(session, ids)
    by_id = {getattr(item, "id"): item for item in found}
    # Keep the stored order; ids that no longer resolve are skipped.
    return [by_id[i] for i in ids if i in by_id]


async def resolve_required(
    session: AsyncSession,
    repo: EntityLookup[T],
    entity_id: UUID | None,
    *,
    relation: str,
) -> T:
    if entity_id is None:
        raise BrokenReferenceException(f"{relation} is not set")
    item = await repo.find_by_id(session, entity_id)
    if item is None:
        raise BrokenReferenceException(f"{relation} not found", str(entity_id))
    return item


async def resolve_optional(
    session: AsyncSession, repo: EntityLookup[T], entity_id: UUID | None
) -> T | None:
    if entity_id is None:
        return None
    return await repo.find_by_id(session, entity_id)


_UNSET: Any = object()


class LazyRelation(Generic[T]):
    """Resolves on first `get`, then serves the cached value until invalidated."""

    def __init__(self, resolver: Callable[[AsyncSession], Awaitable[T]]) -> None:
        self._resolver = resolver
        self._value: T = _UNSET

    @property
    def is_loaded(self) -> bool:
        return self._value is not _UNSET

    async def get(self, session: AsyncSession) -> T:
        if self._value is _UNSET:
            self._value = await self._resolver(session)
        return self._value

    def set(self, value: T) -> None:
        self._value = value

    def invalidate(self) -> None:
        self._value = _UNSET
