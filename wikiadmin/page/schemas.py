"""Page domain schemas."""

import uuid
from datetime import datetime

from wikiadmin.core.schemas import ApiModel
from wikiadmin.page.models import PageGrant, PageStatus
from wikiadmin.user.schemas import UserPublicRead


class PageRead(ApiModel):
    id: uuid.UUID
    path: str
    creator_id: uuid.UUID
    grant: PageGrant
    status: PageStatus
    # Populated with the public user projection, never the raw record.
    last_update_user: UserPublicRead | None
    created_at: datetime
    updated_at: datetime


class RecentPagesResponse(ApiModel):
    pages: list[PageRead]
    total_count: int
    offset: int
    limit: int
