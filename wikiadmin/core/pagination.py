"""Pagination primitives shared by the directories and routers.

- ``PaginateOptions``: what a directory needs to fetch one page
- ``Paginated``: what it hands back
- ``resolve_page_limit``: request limit -> configured limit -> hardcoded default
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 30
MAX_PAGE_LIMIT = 300

CONFIG_NAMESPACE = "crowi"


@dataclass(frozen=True)
class PaginateOptions:
    """Sort, page window and field projection for a paginated find.

    ``sort`` maps a field name to +1 (ascending) or -1 (descending).
    """

    sort: dict[str, int]
    page: int
    limit: int
    select: tuple[str, ...] = field(default_factory=tuple)

    @property
    def offset(self) -> int:
        return offset_for(self.page, self.limit)


@dataclass
class Paginated[T]:
    docs: list[T]
    total_docs: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_docs / self.limit) or 1

    @property
    def paging_counter(self) -> int:
        return (self.page - 1) * self.limit + 1

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def prev_page(self) -> int | None:
        return self.page - 1 if self.has_prev_page else None

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_next_page else None


class ConfigReader(Protocol):
    def get_config(self, namespace: str, key: str) -> Any: ...


def resolve_page_limit(
    limit: int | None,
    config_reader: ConfigReader,
    config_key: str,
    default: int = DEFAULT_PAGE_LIMIT,
) -> int:
    """Return the effective page size for a list request.

    An explicit (already validated) ``limit`` wins. Otherwise the configured
    value under ``config_key`` is used when it is set, and ``default`` when it
    is not. The config is read at most once.
    """
    if limit is not None:
        return limit

    configured = config_reader.get_config(CONFIG_NAMESPACE, config_key)
    if configured is not None:
        return int(configured)

    logger.debug("%s is not set, using default limit %d", config_key, default)
    return default


def offset_for(page: int, limit: int) -> int:
    """Zero-based row offset of a 1-based page."""
    return (page - 1) * limit
