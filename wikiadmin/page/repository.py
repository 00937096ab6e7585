"""Page directory.

Read access to pages for the user-management screens.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from sqlalchemy import ColumnElement, func, or_
from sqlmodel import Session, select

from wikiadmin.core.deps import SessionDep
from wikiadmin.page.models import Page, PageGrant, PageStatus
from wikiadmin.user.models import User


@dataclass
class PageListResult:
    pages: list[Page]
    total_count: int
    offset: int
    limit: int


class PageRepository:
    def __init__(self, session: Session):
        self._session = session

    def find_list_by_creator(
        self, creator: User, viewer: User | None, *, offset: int, limit: int
    ) -> PageListResult:
        """Pages created by ``creator`` that ``viewer`` may see, newest first."""
        conditions = (
            Page.creator_id == creator.id,
            Page.status != PageStatus.deleted,
            self._viewable_by(viewer),
        )

        total_count = self._session.exec(
            select(func.count()).select_from(Page).where(*conditions)
        ).one()
        pages = self._session.exec(
            select(Page)
            .where(*conditions)
            .order_by(Page.created_at.desc(), Page.id)
            .offset(offset)
            .limit(limit)
        ).all()

        return PageListResult(
            pages=list(pages), total_count=total_count, offset=offset, limit=limit
        )

    @staticmethod
    def _viewable_by(viewer: User | None) -> ColumnElement[bool]:
        if viewer is None:
            return Page.grant == int(PageGrant.PUBLIC)
        return or_(Page.grant == int(PageGrant.PUBLIC), Page.creator_id == viewer.id)


def get_page_repository(session: SessionDep) -> PageRepository:
    return PageRepository(session)


PageRepositoryDep = Annotated[PageRepository, Depends(get_page_repository)]
