"""User domain schemas.

Request and response schemas for user operations.

Security notes:
- external_id (auth provider UID) is internal-only, never exposed
- UserPublicRead mirrors USER_PUBLIC_FIELDS
"""

import uuid
from datetime import UTC, datetime

from pydantic import Field, field_serializer

from wikiadmin.core.schemas import ApiModel
from wikiadmin.user.models import UserStatus


class UserPublicRead(ApiModel):
    """Public projection of a user, safe for any logged-in viewer."""

    id: uuid.UUID
    name: str
    username: str | None
    email: str
    image_url_cached: str | None
    status: UserStatus
    is_admin: bool
    created_at: datetime

    @field_serializer("created_at")
    def serialize_datetime(self, value: datetime) -> str:
        """Format as ISO 8601 in UTC with a Z suffix (2026-01-19T12:34:56Z).

        Naive values are assumed to already be UTC (see TimestampMixin).
        """
        if value.tzinfo is not None:
            utc_value = value.astimezone(UTC)
        else:
            utc_value = value.replace(tzinfo=UTC)
        return utc_value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


class UserRead(UserPublicRead):
    """Full projection for admin screens."""

    image_url: str | None
    is_gravatar_enabled: bool
    updated_at: datetime

    @field_serializer("updated_at")
    def serialize_updated_at(self, value: datetime) -> str:
        return self.serialize_datetime(value)


class UserDataResponse(ApiModel):
    """Body of admin actions on a single user."""

    user_data: UserRead


class ExistsResponse(ApiModel):
    exists: bool


class InviteRequest(ApiModel):
    shaped_email_list: list[str] = Field(min_length=1)
    send_email: bool = False


class InvitedUserRead(ApiModel):
    """A user created by invitation with its one-time password."""

    email: str
    password: str
    user: UserRead


class UpdateImageUrlCacheRequest(ApiModel):
    user_ids: list[uuid.UUID] = Field(min_length=1)


class UpdateImageUrlCacheResponse(ApiModel):
    updated_count: int


class ResetPasswordRequest(ApiModel):
    id: uuid.UUID


class ResetPasswordResponse(ApiModel):
    new_password: str
