# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Record-level store operations over an async session.

Every write commits immediately, so each insert or update is durable on
its own and a failure in a later write never undoes an earlier one.
SQLAlchemy errors are translated into a small typed taxonomy:

- RecordNotFoundError: find_one found nothing.
- ConflictUniqueConstraintError: the database rejected a write with an
  integrity violation (unique keys such as profiles.email or
  students(profile_id, teacher_code)).
- TransientStoreError: any other database failure. Safe to retry.

Example:
    store = RecordStore(session)
    profile = await store.find_by_unique_key(Profile, email="ana@example.com")
    student = await store.insert(Student(profile_id=profile.id, teacher_code="PROFAB12CD"))
"""

import logging
from typing import Any, Iterable, Optional, Sequence, TypeVar

from sqlalchemy import Row, Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from edutranscribe.infrastructure.database.connection import DatabaseError
from edutranscribe.infrastructure.database.models import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class StoreError(DatabaseError):
    """Base exception for record store operations."""


class RecordNotFoundError(StoreError):
    """Raised when a record looked up by key does not exist."""

    def __init__(self, model: type[Base], key: dict[str, Any]) -> None:
        self.model_name = model.__name__
        self.key = key
        super().__init__(f"{self.model_name} not found: {key}")


class ConflictUniqueConstraintError(StoreError):
    """Raised when a write violates a uniqueness or integrity constraint."""


class TransientStoreError(StoreError):
    """Raised for any other store failure. The caller may retry."""


class RecordStore:
    """Typed find/insert/update/delete operations over one session."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    @property
    def session(self) -> AsyncSession:
        """Underlying session."""
        return self._db

    # =========================================================================
    # Reads
    # =========================================================================

    async def find_by_unique_key(self, model: type[ModelT], **key: Any) -> Optional[ModelT]:
        """Find a single record by exact column equality.

        Args:
            model: ORM model class.
            **key: Column values identifying the record.

        Returns:
            The record, or None if no row matches.

        Raises:
            TransientStoreError: If the query fails.
        """
        stmt = select(model).filter_by(**key)
        try:
            result = await self._db.execute(stmt)
            return result.scalars().first()
        except SQLAlchemyError as e:
            raise TransientStoreError(f"Lookup of {model.__name__} failed", e) from e

    async def find_one(self, model: type[ModelT], **key: Any) -> ModelT:
        """Find a single record by key or raise RecordNotFoundError."""
        record = await self.find_by_unique_key(model, **key)
        if record is None:
            raise RecordNotFoundError(model, key)
        return record

    async def find_all(
        self,
        model: type[ModelT],
        *criteria: Any,
        order_by: Iterable[Any] = (),
    ) -> Sequence[ModelT]:
        """Find all records matching the given SQL criteria.

        Args:
            model: ORM model class.
            *criteria: SQLAlchemy filter expressions.
            order_by: Ordering expressions.

        Returns:
            Matching records.

        Raises:
            TransientStoreError: If the query fails.
        """
        stmt = select(model).where(*criteria).order_by(*order_by)
        try:
            result = await self._db.execute(stmt)
            return result.scalars().all()
        except SQLAlchemyError as e:
            raise TransientStoreError(f"Listing of {model.__name__} failed", e) from e

    async def find_rows(self, stmt: Select[Any]) -> Sequence[Row[Any]]:
        """Run a multi-entity select (joins) and return its rows.

        Raises:
            TransientStoreError: If the query fails.
        """
        try:
            result = await self._db.execute(stmt)
            return result.all()
        except SQLAlchemyError as e:
            raise TransientStoreError("Query failed", e) from e

    # =========================================================================
    # Writes
    # =========================================================================

    async def insert(self, record: ModelT) -> ModelT:
        """Insert and commit a new record.

        Raises:
            ConflictUniqueConstraintError: If an integrity constraint rejects the row.
            TransientStoreError: If the write fails for any other reason.
        """
        self._db.add(record)
        await self._commit(f"Insert of {type(record).__name__}")
        return record

    async def update(self, record: ModelT, **changes: Any) -> ModelT:
        """Apply changes to a record and commit.

        Raises:
            ConflictUniqueConstraintError: If an integrity constraint rejects the change.
            TransientStoreError: If the write fails for any other reason.
        """
        for field, value in changes.items():
            setattr(record, field, value)
        await self._commit(f"Update of {type(record).__name__}")
        return record

    async def delete(self, record: Base) -> None:
        """Delete a record and commit.

        Raises:
            TransientStoreError: If the delete fails.
        """
        try:
            await self._db.delete(record)
        except SQLAlchemyError as e:
            raise TransientStoreError(f"Delete of {type(record).__name__} failed", e) from e
        await self._commit(f"Delete of {type(record).__name__}")

    async def _commit(self, operation: str) -> None:
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.info("%s rejected by constraint: %s", operation, e.orig)
            raise ConflictUniqueConstraintError(f"{operation} violates a constraint", e) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.warning("%s failed: %s", operation, e)
            raise TransientStoreError(f"{operation} failed", e) from e
