"""
SQLAlchemy ORM models for stored credentials.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class CredentialRecord(Base):
    __tablename__ = "credentials"

    identity = Column(Text, primary_key=True)
    secret_hash = Column(String(60), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        # never include secret_hash
        return f"CredentialRecord(identity={self.identity!r})"
