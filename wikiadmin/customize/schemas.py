from pydantic import Field

from wikiadmin.core.pagination import MAX_PAGE_LIMIT
from wikiadmin.core.schemas import ApiModel


class CustomizeFunctionParams(ApiModel):
    """Function toggles and page-list sizes of the customize screen."""

    is_enabled_timeline: bool
    is_saved_states_of_tab_changes: bool
    is_enabled_attach_title_header: bool
    is_enabled_stale_notification: bool
    is_all_reply_shown: bool
    page_limitation_s: int = Field(ge=1, le=MAX_PAGE_LIMIT)
    page_limitation_m: int = Field(ge=1, le=MAX_PAGE_LIMIT)
    page_limitation_l: int = Field(ge=1, le=MAX_PAGE_LIMIT)
    page_limitation_xl: int = Field(
        ge=1, le=MAX_PAGE_LIMIT, alias="pageLimitationXL"
    )


class CustomizeSettingResponse(ApiModel):
    customize_params: CustomizeFunctionParams


class CustomizeFunctionResponse(ApiModel):
    customized_params: CustomizeFunctionParams
