"""Reusable model mixins for SQLModel table definitions."""

from datetime import UTC, datetime

from sqlalchemy import text
from sqlmodel import Field


def utc_now() -> datetime:
    """Return current UTC time truncated to whole seconds."""
    return datetime.now(UTC).replace(microsecond=0)


class TimestampMixin:
    """Adds created_at/updated_at columns.

    created_at is indexed: user and page listings sort on it.

    Usage:
        class Page(TimestampMixin, SQLModel, table=True):
            ...
    """

    created_at: datetime = Field(
        default_factory=utc_now,
        index=True,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={
            "server_default": text("CURRENT_TIMESTAMP"),
            "onupdate": utc_now,
        },
    )
