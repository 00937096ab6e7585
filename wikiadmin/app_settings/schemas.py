"""App settings schemas."""

import re

from pydantic import field_validator

from wikiadmin.core.schemas import ApiModel

# An origin (scheme + host[:port]) without a path, or empty to clear.
SITE_URL_PATTERN = re.compile(r"^(https?://[^/]+|)$")


class AppSettingsResponse(ApiModel):
    site_url: str | None
    env_site_url: str | None


class SiteUrlSettingRequest(ApiModel):
    site_url: str

    @field_validator("site_url")
    @classmethod
    def validate_site_url(cls, value: str) -> str:
        value = value.strip()
        if not SITE_URL_PATTERN.match(value):
            raise ValueError("Site URL must be like https://my.growi.org")
        return value


class SiteUrlSettingParams(ApiModel):
    site_url: str | None


class SiteUrlSettingResponse(ApiModel):
    site_url_setting_params: SiteUrlSettingParams
