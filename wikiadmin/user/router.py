"""User domain router.

User-management routes of the admin screens: listing and searching users,
recently created pages of a user, username existence, invitation, and the
per-user admin actions.
"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import AfterValidator
from sqlalchemy.exc import SQLAlchemyError

from wikiadmin.auth.dependencies import (
    CurrentUserDep,
    FirebaseAuthDep,
    require_admin,
    require_auth,
)
from wikiadmin.config.keys import CROWI, SITE_URL, USER_UPPER_LIMIT, PageListTier
from wikiadmin.config.manager import ConfigManagerDep
from wikiadmin.core.constants import CommonResponses, Routes
from wikiadmin.core.email import send_invitation_email
from wikiadmin.core.exceptions import (
    BadRequestError,
    InternalError,
    UpperLimitExceededError,
)
from wikiadmin.core.pagination import MAX_PAGE_LIMIT, offset_for, resolve_page_limit
from wikiadmin.core.schemas import ApiResponse, PaginateResult
from wikiadmin.external_account.repository import ExternalAccountRepositoryDep
from wikiadmin.external_account.schemas import (
    ExternalAccountListResponse,
    ExternalAccountRead,
    ExternalAccountResponse,
)
from wikiadmin.page.repository import PageRepositoryDep
from wikiadmin.page.schemas import PageRead, RecentPagesResponse
from wikiadmin.user.exceptions import UserNotFoundError
from wikiadmin.user.models import User, UserStatus
from wikiadmin.user.query import (
    SortField,
    SortOrder,
    StatusLabel,
    build_user_list_query,
)
from wikiadmin.user.repository import (
    UserRepository,
    UserRepositoryDep,
    generate_password,
)
from wikiadmin.user.schemas import (
    ExistsResponse,
    InvitedUserRead,
    InviteRequest,
    ResetPasswordRequest,
    ResetPasswordResponse,
    UpdateImageUrlCacheRequest,
    UpdateImageUrlCacheResponse,
    UserDataResponse,
    UserPublicRead,
    UserRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    dependencies=[Depends(require_auth)],
    responses={
        **CommonResponses.BAD_REQUEST,
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
        **CommonResponses.INTERNAL_ERROR,
    },
)


def _check_recent_limit(limit: int | None) -> int | None:
    if limit is not None and limit > MAX_PAGE_LIMIT:
        raise ValueError("You should set less than 300 or not to set limit.")
    return limit


RecentLimit = Annotated[
    int | None, Query(ge=1), AfterValidator(_check_recent_limit)
]


def _find_user(users: UserRepository, user_id: uuid.UUID) -> User:
    user = users.find_by_id(user_id)
    if user is None:
        raise UserNotFoundError()
    return user


def _user_data(user: User) -> ApiResponse[UserDataResponse]:
    return ApiResponse(data=UserDataResponse(user_data=UserRead.model_validate(user)))


@router.get(
    "/",
    response_model=ApiResponse[PaginateResult[UserPublicRead]],
    dependencies=[Depends(require_admin)],
)
async def list_users(
    users: UserRepositoryDep,
    selected_status_list: Annotated[
        list[StatusLabel], Query(alias="selectedStatusList[]")
    ] = [StatusLabel.all],
    search_text: Annotated[str, Query(alias="searchText")] = "",
    sort: SortField = SortField.id,
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = SortOrder.asc,
    page: Annotated[int, Query(ge=1)] = 1,
):
    """Search users by status and free text. Admin only."""
    user_filter, options = build_user_list_query(
        selected_status_list, search_text, sort, sort_order, page
    )
    try:
        paginated = users.paginate(user_filter, options)
    except Exception as e:
        raise InternalError(
            "Error occurred in fetching user group list",
            code="user-group-list-fetch-failed",
        ) from e

    return ApiResponse(data=PaginateResult[UserPublicRead].model_validate(paginated))


@router.get("/exists", response_model=ApiResponse[ExistsResponse])
async def exists(
    users: UserRepositoryDep,
    username: Annotated[str, Query(min_length=1)],
):
    """Whether a user with this username exists."""
    try:
        user = users.find_user_by_username(username)
    except Exception as e:
        raise BadRequestError(str(e), code="user-existence-check-failed") from e

    return ApiResponse(data=ExistsResponse(exists=user is not None))


@router.post(
    "/invite",
    response_model=list[InvitedUserRead],
    dependencies=[Depends(require_admin)],
)
async def invite(
    body: InviteRequest,
    users: UserRepositoryDep,
    firebase_auth: FirebaseAuthDep,
    config: ConfigManagerDep,
):
    """Create invited users for new emails, optionally emailing their passwords.

    Admin only. Emails that already belong to a user are skipped.
    """
    try:
        result = users.create_users_by_invitation(body.shaped_email_list, firebase_auth)
    except Exception as e:
        raise InternalError(
            "Error occurred in inviting users", code="failed-to-invite-users"
        ) from e

    if result.existing_emails:
        logger.info("Skipped existing emails: %s", ", ".join(result.existing_emails))
    if result.failed_emails:
        logger.warning(
            "Failed to create accounts for: %s", ", ".join(result.failed_emails)
        )
    if result.invalid_emails:
        logger.warning("Ignored invalid emails: %s", ", ".join(result.invalid_emails))

    if body.send_email:
        site_url = config.get_config(CROWI, SITE_URL) or ""
        for invited in result.created:
            try:
                send_invitation_email(
                    to_email=invited.email,
                    password=invited.password,
                    site_url=site_url,
                )
            except Exception:
                # Delivery is best-effort; the accounts exist either way.
                logger.warning(
                    "Failed to send invitation email to %s",
                    invited.email,
                    exc_info=True,
                )

    return [InvitedUserRead.model_validate(invited) for invited in result.created]


@router.get(
    "/external-accounts",
    response_model=ApiResponse[ExternalAccountListResponse],
    dependencies=[Depends(require_admin)],
)
async def list_external_accounts(
    external_accounts: ExternalAccountRepositoryDep,
    page: Annotated[int, Query(ge=1)] = 1,
):
    """List external accounts with their users. Admin only."""
    try:
        paginated = external_accounts.paginate(page)
    except SQLAlchemyError as e:
        raise InternalError(
            "Error occurred in fetching external accounts",
            code="external-account-list-fetch-failed",
        ) from e

    paginate_result = PaginateResult[ExternalAccountRead].model_validate(paginated)
    return ApiResponse(data=ExternalAccountListResponse(paginate_result=paginate_result))


@router.delete(
    "/external-accounts/{account_id}/remove",
    response_model=ApiResponse[ExternalAccountResponse],
    dependencies=[Depends(require_admin)],
)
async def remove_external_account(
    account_id: uuid.UUID, external_accounts: ExternalAccountRepositoryDep
):
    """Unlink an external account from its user. Admin only."""
    account = external_accounts.find_by_id(account_id)
    if account is None:
        raise BadRequestError(
            "External account not found", code="external-account-not-found"
        )

    removed = ExternalAccountRead.model_validate(account)
    try:
        external_accounts.remove(account)
    except SQLAlchemyError as e:
        raise InternalError(
            "Error occurred in deleting an external account",
            code="external-account-delete-failed",
        ) from e

    return ApiResponse(data=ExternalAccountResponse(external_account=removed))


@router.put(
    "/update.imageUrlCache",
    response_model=ApiResponse[UpdateImageUrlCacheResponse],
    dependencies=[Depends(require_admin)],
)
async def update_image_url_cache(
    body: UpdateImageUrlCacheRequest, users: UserRepositoryDep
):
    """Recompute the cached avatar URL of the given users. Admin only."""
    try:
        updated_count = users.update_image_url_cached(body.user_ids)
    except SQLAlchemyError as e:
        raise InternalError(
            "Error occurred in updating image url cache",
            code="update-image-url-cache-failed",
        ) from e

    return ApiResponse(data=UpdateImageUrlCacheResponse(updated_count=updated_count))


@router.put(
    "/reset-password",
    response_model=ApiResponse[ResetPasswordResponse],
    dependencies=[Depends(require_admin)],
)
async def reset_password(
    body: ResetPasswordRequest,
    users: UserRepositoryDep,
    firebase_auth: FirebaseAuthDep,
):
    """Set a random password on the user's login account and return it. Admin only."""
    user = _find_user(users, body.id)
    if not user.external_id:
        raise BadRequestError(
            "The user has no login account", code="reset-password-failed"
        )

    new_password = generate_password()
    firebase_auth.set_password(user.external_id, new_password)
    logger.info("Password reset for user %s", user.id, extra={"user_id": str(user.id)})

    return ApiResponse(data=ResetPasswordResponse(new_password=new_password))


@router.get("/{user_id}/recent", response_model=ApiResponse[RecentPagesResponse])
async def recent_created_pages(
    user_id: uuid.UUID,
    current_user: CurrentUserDep,
    users: UserRepositoryDep,
    pages: PageRepositoryDep,
    config: ConfigManagerDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: RecentLimit = None,
):
    """Pages recently created by a user, as visible to the current user."""
    try:
        user = users.find_by_id(user_id)
    except Exception as e:
        raise InternalError(
            "Error occurred in find user",
            code="retrieve-recent-created-pages-failed",
        ) from e

    if user is None:
        raise UserNotFoundError()

    limit = resolve_page_limit(limit, config, PageListTier.M.config_key)
    offset = offset_for(page, limit)

    try:
        result = pages.find_list_by_creator(
            user, current_user, offset=offset, limit=limit
        )
    except Exception as e:
        raise InternalError(
            "Error occurred in retrieve recent created pages for user",
            code="retrieve-recent-created-pages-failed",
        ) from e

    return ApiResponse(
        data=RecentPagesResponse(
            pages=[PageRead.model_validate(p) for p in result.pages],
            total_count=result.total_count,
            offset=result.offset,
            limit=result.limit,
        )
    )


@router.put(
    "/{user_id}/giveAdmin",
    response_model=ApiResponse[UserDataResponse],
    dependencies=[Depends(require_admin)],
)
async def give_admin(user_id: uuid.UUID, users: UserRepositoryDep):
    """Grant admin privileges. Admin only."""
    user = _find_user(users, user_id)
    try:
        user = users.set_admin(user, True)
    except SQLAlchemyError as e:
        raise InternalError(
            "Error occurred in giving admin", code="give-admin-failed"
        ) from e
    return _user_data(user)


@router.put(
    "/{user_id}/removeAdmin",
    response_model=ApiResponse[UserDataResponse],
    dependencies=[Depends(require_admin)],
)
async def remove_admin(user_id: uuid.UUID, users: UserRepositoryDep):
    """Revoke admin privileges. Admin only."""
    user = _find_user(users, user_id)
    try:
        user = users.set_admin(user, False)
    except SQLAlchemyError as e:
        raise InternalError(
            "Error occurred in removing admin", code="remove-admin-failed"
        ) from e
    return _user_data(user)


@router.put(
    "/{user_id}/activate",
    response_model=ApiResponse[UserDataResponse],
    dependencies=[Depends(require_admin)],
)
async def activate(
    user_id: uuid.UUID, users: UserRepositoryDep, config: ConfigManagerDep
):
    """Activate a user unless the active-user limit is reached. Admin only."""
    user = _find_user(users, user_id)

    if user.status != UserStatus.ACTIVE:
        upper_limit = config.get_config(CROWI, USER_UPPER_LIMIT)
        if upper_limit is not None and users.count_active_users() >= int(upper_limit):
            raise UpperLimitExceededError()

    try:
        user = users.update_status(user, UserStatus.ACTIVE)
    except SQLAlchemyError as e:
        raise InternalError(
            "Error occurred in activating a user", code="activate-user-failed"
        ) from e
    return _user_data(user)


@router.put(
    "/{user_id}/deactivate",
    response_model=ApiResponse[UserDataResponse],
    dependencies=[Depends(require_admin)],
)
async def deactivate(user_id: uuid.UUID, users: UserRepositoryDep):
    """Suspend a user. Admin only."""
    user = _find_user(users, user_id)
    try:
        user = users.update_status(user, UserStatus.SUSPENDED)
    except SQLAlchemyError as e:
        raise InternalError(
            "Error occurred in deactivating a user", code="deactivate-user-failed"
        ) from e
    return _user_data(user)


@router.delete(
    "/{user_id}/remove",
    response_model=ApiResponse[UserDataResponse],
    dependencies=[Depends(require_admin)],
)
async def remove(
    user_id: uuid.UUID,
    users: UserRepositoryDep,
    external_accounts: ExternalAccountRepositoryDep,
):
    """Soft-delete a user and unlink its external accounts. Admin only."""
    user = _find_user(users, user_id)
    try:
        external_accounts.remove_by_user(user, commit=False)
        user = users.soft_delete(user)
    except SQLAlchemyError as e:
        raise InternalError(
            "Error occurred in removing a user", code="remove-user-failed"
        ) from e
    logger.info("Removed user %s", user.id, extra={"user_id": str(user.id)})
    return _user_data(user)
