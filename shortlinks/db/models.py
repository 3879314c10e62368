import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timestamp stored in UTC and always loaded timezone-aware.

    SQLite has no timezone support and hands back naive values; those are
    UTC by construction, so the offset is reattached on load.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class LinkRecord(Base):
    __tablename__ = "links"

    # Opaque identifier assigned on insert
    id = Column(String(32), primary_key=True, default=_new_id)

    short_code = Column(String(16), unique=True, index=True, nullable=False)

    # Unique so concurrent shorten requests for one URL cannot both insert
    original_url = Column(String, unique=True, index=True, nullable=False)

    clicks = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False, default=_utcnow, index=True)

    def __repr__(self):
        return f"<LinkRecord {self.short_code} -> {self.original_url[:50]}>"
