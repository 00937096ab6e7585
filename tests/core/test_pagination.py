"""Tests for wikiadmin/core/pagination.py - limit resolution and page metadata."""

from unittest.mock import MagicMock

from hypothesis import given
from hypothesis import settings as hypothesis_settings
from hypothesis import strategies as st

from wikiadmin.core.pagination import (
    DEFAULT_PAGE_LIMIT,
    Paginated,
    offset_for,
    resolve_page_limit,
)

LIMIT_KEY = "customize:showPageLimitationM"


def config_returning(value):
    reader = MagicMock()
    reader.get_config.return_value = value
    return reader


class TestResolvePageLimit:
    def test_explicit_limit_wins(self):
        reader = config_returning(20)

        assert resolve_page_limit(10, reader, LIMIT_KEY) == 10
        reader.get_config.assert_not_called()

    def test_configured_limit(self):
        reader = config_returning(20)

        assert resolve_page_limit(None, reader, LIMIT_KEY) == 20
        reader.get_config.assert_called_once_with("crowi", LIMIT_KEY)

    def test_unset_config_uses_default(self):
        assert resolve_page_limit(None, config_returning(None), LIMIT_KEY) == 30
        assert DEFAULT_PAGE_LIMIT == 30

    def test_configured_string_is_cast(self):
        assert resolve_page_limit(None, config_returning("50"), LIMIT_KEY) == 50

    @hypothesis_settings(max_examples=100)
    @given(
        limit=st.one_of(st.none(), st.integers(min_value=1, max_value=300)),
        configured=st.one_of(st.none(), st.integers(min_value=1, max_value=300)),
    )
    def test_resolution_order_property(self, limit, configured):
        """Property: explicit limit, then configured value, then the default."""
        reader = config_returning(configured)

        result = resolve_page_limit(limit, reader, LIMIT_KEY)

        if limit is not None:
            assert result == limit
        elif configured is not None:
            assert result == configured
        else:
            assert result == DEFAULT_PAGE_LIMIT
        assert reader.get_config.call_count <= 1


class TestPaginated:
    def test_first_page(self):
        page = Paginated(docs=[1, 2], total_docs=5, page=1, limit=2)

        assert page.total_pages == 3
        assert page.paging_counter == 1
        assert page.has_prev_page is False
        assert page.has_next_page is True
        assert page.prev_page is None
        assert page.next_page == 2

    def test_last_page(self):
        page = Paginated(docs=[5], total_docs=5, page=3, limit=2)

        assert page.has_next_page is False
        assert page.next_page is None
        assert page.prev_page == 2

    def test_empty_result_has_one_page(self):
        page = Paginated(docs=[], total_docs=0, page=1, limit=50)

        assert page.total_pages == 1
        assert page.has_next_page is False

    @hypothesis_settings(max_examples=100)
    @given(
        page=st.integers(min_value=1, max_value=1000),
        limit=st.integers(min_value=1, max_value=300),
    )
    def test_offset_property(self, page, limit):
        """Property: consecutive pages never overlap nor leave gaps."""
        assert offset_for(page, limit) == (page - 1) * limit
        assert offset_for(page + 1, limit) - offset_for(page, limit) == limit
