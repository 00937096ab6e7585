"""External account directory."""

import uuid
from typing import Annotated

from fastapi import Depends
from sqlalchemy import func
from sqlmodel import Session, col, delete, select

from wikiadmin.core.deps import SessionDep
from wikiadmin.core.pagination import Paginated, offset_for
from wikiadmin.external_account.models import ExternalAccount
from wikiadmin.user.models import User

EXTERNAL_ACCOUNT_PAGE_LIMIT = 50


class ExternalAccountRepository:
    def __init__(self, session: Session):
        self._session = session

    def paginate(
        self, page: int, limit: int = EXTERNAL_ACCOUNT_PAGE_LIMIT
    ) -> Paginated[ExternalAccount]:
        total = self._session.exec(
            select(func.count()).select_from(ExternalAccount)
        ).one()
        docs = self._session.exec(
            select(ExternalAccount)
            .order_by(ExternalAccount.created_at, ExternalAccount.id)
            .offset(offset_for(page, limit))
            .limit(limit)
        ).all()
        return Paginated(docs=list(docs), total_docs=total, page=page, limit=limit)

    def find_by_id(self, account_id: uuid.UUID) -> ExternalAccount | None:
        return self._session.get(ExternalAccount, account_id)

    def remove(self, account: ExternalAccount) -> None:
        self._session.delete(account)
        self._session.commit()

    def remove_by_user(self, user: User, *, commit: bool = True) -> int:
        result = self._session.exec(
            delete(ExternalAccount).where(col(ExternalAccount.user_id) == user.id)
        )
        if commit:
            self._session.commit()
        return result.rowcount


def get_external_account_repository(session: SessionDep) -> ExternalAccountRepository:
    return ExternalAccountRepository(session)


ExternalAccountRepositoryDep = Annotated[
    ExternalAccountRepository, Depends(get_external_account_repository)
]
