"""Wiki configuration keys, defaults, and env-var fallbacks.

Keys are namespaced strings (``customize:showPageLimitationM``) stored under
the ``crowi`` namespace of the ``configs`` table.
"""

from enum import Enum
from typing import Any

CROWI = "crowi"

# App
SITE_URL = "app:siteUrl"

# Security
USER_UPPER_LIMIT = "security:userUpperLimit"

# Customize: function toggles
IS_ENABLED_TIMELINE = "customize:isEnabledTimeline"
IS_SAVED_STATES_OF_TAB_CHANGES = "customize:isSavedStatesOfTabChanges"
IS_ENABLED_ATTACH_TITLE_HEADER = "customize:isEnabledAttachTitleHeader"
IS_ENABLED_STALE_NOTIFICATION = "customize:isEnabledStaleNotification"
IS_ALL_REPLY_SHOWN = "customize:isAllReplyShown"


class PageListTier(str, Enum):
    """Page-list size tiers, each with its own limit setting.

    - S: page contents modal
    - M: user page (recently created pages)
    - L: search and draft pages
    - XL: not-found and trash pages
    """

    S = "S"
    M = "M"
    L = "L"
    XL = "XL"

    @property
    def config_key(self) -> str:
        return f"customize:showPageLimitation{self.value}"


# Values used when neither the database nor the environment provides one.
# Page-list limits are intentionally absent: callers fall back to their own
# hardcoded default.
CONFIG_DEFAULTS: dict[str, Any] = {
    IS_ENABLED_TIMELINE: True,
    IS_SAVED_STATES_OF_TAB_CHANGES: True,
    IS_ENABLED_ATTACH_TITLE_HEADER: False,
    IS_ENABLED_STALE_NOTIFICATION: False,
    IS_ALL_REPLY_SHOWN: False,
}

# Config key -> Settings attribute holding its env-var value.
ENV_VAR_SETTINGS: dict[str, str] = {
    SITE_URL: "app_site_url",
    USER_UPPER_LIMIT: "user_upper_limit",
}
