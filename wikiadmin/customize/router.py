"""Customize setting router.

Function toggles and the S/M/L/XL page-list sizes. Each tier is stored
under its own ``customize:showPageLimitation{tier}`` key.
"""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from wikiadmin.auth.dependencies import require_admin
from wikiadmin.config import keys
from wikiadmin.config.keys import CROWI, PageListTier
from wikiadmin.config.manager import ConfigManager, ConfigManagerDep
from wikiadmin.core.constants import CommonResponses, Routes
from wikiadmin.core.exceptions import InternalError
from wikiadmin.core.pagination import MAX_PAGE_LIMIT, resolve_page_limit
from wikiadmin.core.schemas import ApiResponse
from wikiadmin.customize.schemas import (
    CustomizeFunctionParams,
    CustomizeFunctionResponse,
    CustomizeSettingResponse,
)

router = APIRouter(
    prefix=Routes.CUSTOMIZE_SETTING.prefix,
    tags=[Routes.CUSTOMIZE_SETTING.tag],
    dependencies=[Depends(require_admin)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)

FUNCTION_TOGGLE_KEYS: dict[str, str] = {
    "is_enabled_timeline": keys.IS_ENABLED_TIMELINE,
    "is_saved_states_of_tab_changes": keys.IS_SAVED_STATES_OF_TAB_CHANGES,
    "is_enabled_attach_title_header": keys.IS_ENABLED_ATTACH_TITLE_HEADER,
    "is_enabled_stale_notification": keys.IS_ENABLED_STALE_NOTIFICATION,
    "is_all_reply_shown": keys.IS_ALL_REPLY_SHOWN,
}

PAGE_LIMITATION_KEYS: dict[str, str] = {
    f"page_limitation_{tier.value.lower()}": tier.config_key for tier in PageListTier
}


def load_function_params(config: ConfigManager) -> CustomizeFunctionParams:
    values: dict[str, Any] = {
        field: bool(config.get_config(CROWI, key))
        for field, key in FUNCTION_TOGGLE_KEYS.items()
    }
    for field, key in PAGE_LIMITATION_KEYS.items():
        # Stored values may lie outside 1..MAX_PAGE_LIMIT.
        limit = resolve_page_limit(None, config, key)
        values[field] = min(max(limit, 1), MAX_PAGE_LIMIT)
    return CustomizeFunctionParams(**values)


@router.get("", response_model=ApiResponse[CustomizeSettingResponse])
async def get_customize_setting(config: ConfigManagerDep):
    return ApiResponse(
        data=CustomizeSettingResponse(customize_params=load_function_params(config))
    )


@router.put(
    "/function",
    response_model=ApiResponse[CustomizeFunctionResponse],
    responses={**CommonResponses.BAD_REQUEST, **CommonResponses.INTERNAL_ERROR},
)
async def update_customize_function(
    body: CustomizeFunctionParams, config: ConfigManagerDep
):
    """Save the function toggles and every page-list size."""
    updates = {
        key: getattr(body, field)
        for field, key in (FUNCTION_TOGGLE_KEYS | PAGE_LIMITATION_KEYS).items()
    }
    try:
        config.update_configs(CROWI, updates)
    except SQLAlchemyError as e:
        raise InternalError(
            "Error occurred in updating function",
            code="update-customizeFunction-failed",
        ) from e

    return ApiResponse(
        data=CustomizeFunctionResponse(customized_params=load_function_params(config))
    )
