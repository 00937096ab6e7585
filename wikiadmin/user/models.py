"""User domain models.

SQLModel table definition for User.
"""

import uuid
from enum import IntEnum

from sqlalchemy import Integer
from sqlmodel import Field, SQLModel

from wikiadmin.core.mixins import TimestampMixin


class UserStatus(IntEnum):
    """User account status.

    - REGISTERED: signed up, waiting for admin approval
    - ACTIVE: can log in
    - SUSPENDED: deactivated by an admin
    - DELETED: removed by an admin (soft delete, never listed)
    - INVITED: created by invitation, has not logged in yet
    """

    REGISTERED = 1
    ACTIVE = 2
    SUSPENDED = 3
    DELETED = 4
    INVITED = 5


DEFAULT_USER_IMAGE = "/images/icons/user.svg"


class User(TimestampMixin, SQLModel, table=True):
    """User database model.

    Note: external_id is the auth provider UID; it is internal-only and
    must never be exposed in API responses.
    """

    __tablename__: str = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    external_id: str | None = Field(default=None, index=True, unique=True)
    name: str = Field(default="", max_length=128)
    username: str | None = Field(default=None, index=True, unique=True, max_length=64)
    email: str = Field(index=True, unique=True, max_length=255)
    # Stored as its integer code.
    status: UserStatus = Field(
        default=UserStatus.REGISTERED, index=True, sa_type=Integer
    )
    is_admin: bool = Field(default=False)
    image_url: str | None = Field(default=None, max_length=1024)
    is_gravatar_enabled: bool = Field(default=False)
    image_url_cached: str | None = Field(default=None, max_length=1024)


# Fields any logged-in user may see about another user.
USER_PUBLIC_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "username",
    "email",
    "image_url_cached",
    "status",
    "is_admin",
    "created_at",
)
