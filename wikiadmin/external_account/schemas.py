import uuid
from datetime import datetime

from wikiadmin.core.schemas import ApiModel, PaginateResult
from wikiadmin.user.schemas import UserPublicRead


class ExternalAccountRead(ApiModel):
    id: uuid.UUID
    provider_type: str
    account_id: str
    user: UserPublicRead | None
    created_at: datetime


class ExternalAccountResponse(ApiModel):
    external_account: ExternalAccountRead


class ExternalAccountListResponse(ApiModel):
    paginate_result: PaginateResult[ExternalAccountRead]
