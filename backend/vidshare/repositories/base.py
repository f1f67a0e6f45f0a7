"""
Repository base for SQLAlchemy 2.x selects.

Repositories translate domain questions into statements and stage changes on
the session they were given. They flush when a primary key or constraint
check is needed but never commit; that belongs to the unit of work.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import Session

from vidshare.core.extensions import db

E = TypeVar("E")


@dataclass(slots=True)
class Pagination:
    """1-based ``page``, page size ``limit`` and public sort tokens (``-views``)."""

    page: int
    limit: int
    sort: list[str]


@dataclass(slots=True)
class Page(Generic[E]):
    items: Sequence[E]
    total: int
    page: int
    limit: int


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """``["-createdAt", "views"]`` -> ``[("createdAt", True), ("views", False)]``; blanks dropped."""
    pairs = ((token.strip(), token.strip().startswith("-")) for token in raw)
    return [(token.lstrip("-").strip(), desc) for token, desc in pairs if token.lstrip("-").strip()]


def paginate_select(session: Session, stmt: Select[Any], *, page: int, limit: int) -> tuple[list[Any], int]:
    """
    Execute one page of an ordered select.

    :returns: ``(scalars for the page, row count of the unpaged select)``.
    """
    page, limit = max(int(page), 1), max(int(limit), 1)
    counted = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = session.scalar(counted) or 0
    rows = session.scalars(stmt.limit(limit).offset((page - 1) * limit))
    return list(rows), int(total)


class BaseRepository(Generic[E]):
    """
    Persistence for one mapped class.

    Subclasses set ``model`` and may override the hooks below: eager loading
    applied to reads, the public sort whitelist, the fallback order, and the
    attributes ``assign_updates`` may touch.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else db.session

    # hooks

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def _sortable_fields(self) -> Mapping[str, ColumnElement[Any]]:
        return {}

    def _default_sort(self) -> Sequence[Any]:
        return ()

    def _updatable_fields(self) -> set[str]:
        return set()

    # reads

    def get(self, entity_id: Any) -> E | None:
        stmt = select(self.model).where(self.model.id == entity_id)
        return self.session.scalars(self._default_eagerload(stmt)).first()

    def find_one(self, **filters: Any) -> E | None:
        stmt = select(self.model).filter_by(**filters)
        return self.session.scalars(self._default_eagerload(stmt)).first()

    def exists(self, **filters: Any) -> bool:
        stmt = select(self.model.id).filter_by(**filters).limit(1)
        return self.session.scalar(stmt) is not None

    # writes

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its ``id`` is assigned."""
        self.session.add(instance)
        self.flush()
        return instance

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    def assign_updates(self, instance: E, fields: Mapping[str, Any], *, flush: bool = True) -> E:
        """
        ``setattr`` each of ``fields`` on ``instance`` so ``@validates`` hooks run.

        :raises ValueError: When a key is outside ``_updatable_fields()``.
        """
        rejected = sorted(set(fields) - self._updatable_fields())
        if rejected:
            raise ValueError(f"Unknown or non-updatable fields: {rejected}")
        for name, value in fields.items():
            setattr(instance, name, value)
        if flush:
            self.flush()
        return instance

    # listing

    def _order_clauses(self, tokens: Iterable[str]) -> list[Any]:
        whitelist = self._sortable_fields()
        clauses = [
            whitelist[name].desc() if desc else whitelist[name].asc()
            for name, desc in parse_sort_tokens(tokens)
            if name in whitelist
        ]
        # Unknown tokens are ignored; ``id`` breaks ties so pages never overlap.
        return (clauses or list(self._default_sort())) + [self.model.id.asc()]

    def _page(self, stmt: Select[Any], pagination: Pagination) -> Page[Any]:
        ordered = stmt.order_by(*self._order_clauses(pagination.sort))
        items, total = paginate_select(
            self.session, ordered, page=pagination.page, limit=pagination.limit
        )
        return Page(items=items, total=total, page=pagination.page, limit=pagination.limit)
