"""User list query construction.

Turns the validated query of ``GET /users/`` (status labels, free-text
search, sort field/direction, page) into a ``UserListFilter`` plus
``PaginateOptions`` for ``UserRepository.paginate``.

The filter is::

    status IN <codes> AND (name ~ word OR username ~ word OR email ~ word)

where an empty search text matches every record, including rows whose
name or username is empty or NULL.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import ColumnElement, and_, or_, true

from wikiadmin.core.pagination import PaginateOptions
from wikiadmin.user.models import USER_PUBLIC_FIELDS, User, UserStatus

USER_LIST_PAGE_LIMIT = 50


class StatusLabel(str, Enum):
    registered = "registered"
    active = "active"
    suspended = "suspended"
    deactivated = "deactivated"
    invited = "invited"
    all = "all"


STATUS_CODES: dict[StatusLabel, UserStatus] = {
    StatusLabel.registered: UserStatus.REGISTERED,
    StatusLabel.active: UserStatus.ACTIVE,
    StatusLabel.suspended: UserStatus.SUSPENDED,
    # Label the admin UI uses for suspended accounts.
    StatusLabel.deactivated: UserStatus.SUSPENDED,
    StatusLabel.invited: UserStatus.INVITED,
}

# Everything an admin can list; deleted users never show up.
LISTABLE_STATUS_CODES: tuple[int, ...] = tuple(
    sorted({int(status) for status in STATUS_CODES.values()})
)


class SortField(str, Enum):
    id = "id"
    name = "name"
    username = "username"
    email = "email"
    status = "status"
    created_at = "created_at"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"

    @property
    def direction(self) -> int:
        return 1 if self is SortOrder.asc else -1


@dataclass(frozen=True)
class UserListFilter:
    status_codes: tuple[int, ...]
    # None matches everything.
    search_word: str | None = None

    def to_clause(self) -> ColumnElement[bool]:
        return and_(User.status.in_(self.status_codes), self._search_clause())

    def _search_clause(self) -> ColumnElement[bool]:
        if self.search_word is None:
            return true()
        pattern = f"%{escape_like(self.search_word)}%"
        return or_(
            User.name.ilike(pattern, escape="\\"),
            User.username.ilike(pattern, escape="\\"),
            User.email.ilike(pattern, escape="\\"),
        )


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the search text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def expand_status_labels(labels: Iterable[StatusLabel]) -> tuple[int, ...]:
    """Map status labels to sorted, de-duplicated status codes.

    ``all`` expands to every listable status.
    """
    labels = [StatusLabel(label) for label in labels]
    if StatusLabel.all in labels:
        return LISTABLE_STATUS_CODES
    return tuple(sorted({int(STATUS_CODES[label]) for label in labels}))


def build_search_word(search_text: str) -> str | None:
    return search_text or None


def build_user_list_query(
    selected_status_list: Iterable[StatusLabel],
    search_text: str,
    sort: SortField,
    sort_order: SortOrder,
    page: int,
) -> tuple[UserListFilter, PaginateOptions]:
    user_filter = UserListFilter(
        status_codes=expand_status_labels(selected_status_list),
        search_word=build_search_word(search_text),
    )
    options = PaginateOptions(
        sort={SortField(sort).value: SortOrder(sort_order).direction},
        page=page,
        limit=USER_LIST_PAGE_LIMIT,
        select=USER_PUBLIC_FIELDS,
    )
    return user_filter, options
