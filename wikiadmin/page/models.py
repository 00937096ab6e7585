"""Page domain models."""

import uuid
from enum import Enum, IntEnum

from sqlalchemy import Integer
from sqlmodel import Field, Relationship, SQLModel

from wikiadmin.core.mixins import TimestampMixin
from wikiadmin.user.models import User


class PageGrant(IntEnum):
    """Who may see a page.

    Only PUBLIC pages appear in other users' lists; every other grant is
    listed for its creator alone.
    """

    PUBLIC = 1
    RESTRICTED = 2  # anyone with the link
    SPECIFIED = 3
    OWNER = 4
    USER_GROUP = 5


class PageStatus(str, Enum):
    published = "published"
    deleted = "deleted"


class Page(TimestampMixin, SQLModel, table=True):
    __tablename__: str = "pages"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    path: str = Field(index=True, max_length=1024)
    creator_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    last_update_user_id: uuid.UUID | None = Field(
        default=None, foreign_key="users.id"
    )
    grant: PageGrant = Field(default=PageGrant.PUBLIC, sa_type=Integer)
    status: PageStatus = Field(default=PageStatus.published, max_length=20)

    last_update_user: User | None = Relationship(
        sa_relationship_kwargs={
            "foreign_keys": "[Page.last_update_user_id]",
            "lazy": "selectin",
        }
    )
