"""External account models.

Links a local user to an identity at an external provider (Google, GitHub,
SAML, ...).
"""

import uuid

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from wikiadmin.core.mixins import TimestampMixin
from wikiadmin.user.models import User


class ExternalAccount(TimestampMixin, SQLModel, table=True):
    __tablename__: str = "external_accounts"
    __table_args__ = (
        UniqueConstraint(
            "provider_type", "account_id", name="uq_external_accounts_provider"
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    provider_type: str = Field(max_length=32)
    account_id: str = Field(max_length=255)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    user: User | None = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
