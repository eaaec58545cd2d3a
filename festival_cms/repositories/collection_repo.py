"""Repository layer for collection persistence.

Provides an abstraction over direct SQLAlchemy session usage for any of the
content tables, so the collection store and routers stay generic. Column
names are checked here; anything the table does not have is rejected before
a statement is built.
"""
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Sequence
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select


class StoreError(Exception):
    """Base class for collection store failures."""


class RecordNotFoundError(StoreError):
    """Raised when a record could not be located."""


class RecordConflictError(StoreError):
    """Raised when a write violates a uniqueness or reference constraint."""


class InvalidFieldError(StoreError):
    """Raised when a filter, ordering or value names an unknown column."""


IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})


class CollectionRepository:
    def __init__(self, session: AsyncSession, model: type):
        self.session = session
        self.model = model
        self.columns = {c.key for c in model.__table__.columns}

    def _column(self, name: str):
        if name not in self.columns:
            raise InvalidFieldError(
                f"Unknown field '{name}' for {self.model.__tablename__}"
            )
        return getattr(self.model, name)

    def _writable(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        for name in values:
            self._column(name)
        return {k: v for k, v in values.items() if k not in IMMUTABLE_FIELDS}

    def _query(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ):
        stmt = select(self.model)
        for name, value in (filters or {}).items():
            column = self._column(name)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        if order_by:
            column = self._column(order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt

    # CREATE -----------------------------------------------------------------
    async def create(self, values: Mapping[str, Any]):
        record = self.model(**self._writable(values))
        self.session.add(record)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise RecordConflictError(str(exc.orig)) from exc
        await self.session.refresh(record)
        return record

    # READ -------------------------------------------------------------------
    async def list(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> Sequence[Any]:
        result = await self.session.execute(
            self._query(filters, order_by, descending, limit)
        )
        return result.scalars().all()

    async def first(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ):
        result = await self.session.execute(
            self._query(filters, order_by, descending, limit=1)
        )
        record = result.scalar_one_or_none()
        if not record:
            raise RecordNotFoundError(
                f"No {self.model.__tablename__} record matches"
            )
        return record

    async def get(self, pk: str):
        record = await self.session.get(self.model, pk)
        if not record:
            raise RecordNotFoundError(
                f"{self.model.__tablename__} record '{pk}' not found"
            )
        return record

    # UPDATE -----------------------------------------------------------------
    async def update_record(self, pk: str, values: Mapping[str, Any]):
        changes = self._writable(values)
        record = await self.get(pk)
        for name, value in changes.items():
            setattr(record, name, value)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise RecordConflictError(str(exc.orig)) from exc
        await self.session.refresh(record)
        return record

    # DELETE -----------------------------------------------------------------
    async def delete_record(self, pk: str):
        record = await self.get(pk)
        snapshot = record.to_dict()
        await self.session.delete(record)
        await self.session.commit()
        return snapshot
