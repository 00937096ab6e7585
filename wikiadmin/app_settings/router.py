"""App settings router.

Site URL setting of the admin "App" screen. The database value wins over
``APP_SITE_URL``; saving an empty value removes it so the env var applies.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from wikiadmin.app_settings.schemas import (
    AppSettingsResponse,
    SiteUrlSettingParams,
    SiteUrlSettingRequest,
    SiteUrlSettingResponse,
)
from wikiadmin.auth.dependencies import require_admin
from wikiadmin.config.keys import CROWI, SITE_URL
from wikiadmin.config.manager import ConfigManagerDep
from wikiadmin.core.constants import CommonResponses, Routes
from wikiadmin.core.exceptions import InternalError
from wikiadmin.core.schemas import ApiResponse

router = APIRouter(
    prefix=Routes.APP_SETTINGS.prefix,
    tags=[Routes.APP_SETTINGS.tag],
    dependencies=[Depends(require_admin)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.get("", response_model=ApiResponse[AppSettingsResponse])
async def get_app_settings(config: ConfigManagerDep):
    return ApiResponse(
        data=AppSettingsResponse(
            site_url=config.get_config_from_db(CROWI, SITE_URL),
            env_site_url=config.get_config_from_env_vars(CROWI, SITE_URL),
        )
    )


@router.put(
    "/site-url-setting",
    response_model=ApiResponse[SiteUrlSettingResponse],
    responses={**CommonResponses.BAD_REQUEST, **CommonResponses.INTERNAL_ERROR},
)
async def update_site_url_setting(
    body: SiteUrlSettingRequest, config: ConfigManagerDep
):
    """Save the site URL; an empty value falls back to APP_SITE_URL."""
    try:
        config.update_configs(CROWI, {SITE_URL: body.site_url or None})
    except SQLAlchemyError as e:
        raise InternalError(
            "Error occurred in updating site url setting",
            code="update-siteUrlSetting-failed",
        ) from e

    return ApiResponse(
        data=SiteUrlSettingResponse(
            site_url_setting_params=SiteUrlSettingParams(
                site_url=config.get_config(CROWI, SITE_URL)
            )
        )
    )
