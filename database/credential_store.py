"""
Credential store — lookup and atomic insert of ``CredentialRecord`` rows.

Uniqueness of ``identity`` is enforced by the table's primary key, so
``insert`` is authoritative even when two registrations race past an
earlier ``find_by_identity``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from database.models import CredentialRecord
from database.session import Database

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The backing database failed for a reason other than a duplicate key."""


class InsertOutcome(str, Enum):
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"


class CredentialStore:
    def __init__(self, database: Database) -> None:
        self._db = database

    async def find_by_identity(self, identity: str) -> Optional[CredentialRecord]:
        """Exact, case-sensitive lookup. Returns ``None`` when absent."""
        try:
            async with self._db.session() as session:
                result = await session.execute(
                    select(CredentialRecord).where(CredentialRecord.identity == identity)
                )
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"lookup failed: {type(exc).__name__}") from exc

    async def insert(self, record: CredentialRecord) -> InsertOutcome:
        """Insert a new record in its own transaction."""
        try:
            async with self._db.session() as session:
                async with session.begin():
                    session.add(record)
        except IntegrityError:
            logger.debug("Insert rejected, identity already present: %s", record.identity)
            return InsertOutcome.ALREADY_EXISTS
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"insert failed: {type(exc).__name__}") from exc
        return InsertOutcome.INSERTED
