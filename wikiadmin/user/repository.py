"""User directory.

Database access for the user-management endpoints. Every mutation commits
and refreshes the instance it was given.
"""

import hashlib
import logging
import secrets
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Annotated

from fastapi import Depends
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import load_only
from sqlmodel import Session, col, select

from wikiadmin.auth.service import FirebaseAuthService
from wikiadmin.core.deps import SessionDep
from wikiadmin.core.exceptions import AppException
from wikiadmin.core.pagination import PaginateOptions, Paginated
from wikiadmin.user.models import DEFAULT_USER_IMAGE, User, UserStatus
from wikiadmin.user.query import SortField, UserListFilter

logger = logging.getLogger(__name__)

GRAVATAR_BASE_URL = "https://gravatar.com/avatar"
INVITATION_PASSWORD_BYTES = 12

SORT_COLUMNS = {
    SortField.id: User.id,
    SortField.name: User.name,
    SortField.username: User.username,
    SortField.email: User.email,
    SortField.status: User.status,
    SortField.created_at: User.created_at,
}


@dataclass
class InvitedUser:
    email: str
    password: str
    user: User


@dataclass
class InvitationResult:
    created: list[InvitedUser] = field(default_factory=list)
    # Already registered locally, skipped.
    existing_emails: list[str] = field(default_factory=list)
    # Rejected by the auth provider.
    failed_emails: list[str] = field(default_factory=list)
    # Not an email address, never sent to the provider.
    invalid_emails: list[str] = field(default_factory=list)


def generate_password() -> str:
    return secrets.token_urlsafe(INVITATION_PASSWORD_BYTES)


def generate_image_url(user: User) -> str:
    """Avatar URL shown for ``user``: gravatar, uploaded image, or the default icon."""
    if user.is_gravatar_enabled:
        digest = hashlib.md5(user.email.strip().lower().encode()).hexdigest()
        return f"{GRAVATAR_BASE_URL}/{digest}"
    if user.image_url:
        return user.image_url
    return DEFAULT_USER_IMAGE


class UserRepository:
    def __init__(self, session: Session):
        self._session = session

    def paginate(
        self, user_filter: UserListFilter, options: PaginateOptions
    ) -> Paginated[User]:
        clause = user_filter.to_clause()

        statement = select(User).where(clause)
        if options.select:
            statement = statement.options(
                load_only(*(getattr(User, name) for name in options.select))
            )
        for name, direction in options.sort.items():
            column = SORT_COLUMNS[SortField(name)]
            statement = statement.order_by(
                column.asc() if direction > 0 else column.desc()
            )
        if SortField.id.value not in options.sort:
            statement = statement.order_by(User.id)

        total_docs = self._session.exec(
            select(func.count()).select_from(User).where(clause)
        ).one()
        docs = self._session.exec(
            statement.offset(options.offset).limit(options.limit)
        ).all()
        return Paginated(
            docs=list(docs),
            total_docs=total_docs,
            page=options.page,
            limit=options.limit,
        )

    def find_by_id(self, user_id: uuid.UUID) -> User | None:
        return self._session.get(User, user_id)

    def find_user_by_username(self, username: str) -> User | None:
        return self._session.exec(
            select(User).where(User.username == username)
        ).first()

    def find_by_email(self, email: str) -> User | None:
        return self._session.exec(select(User).where(User.email == email)).first()

    def count_active_users(self) -> int:
        return self._session.exec(
            select(func.count())
            .select_from(User)
            .where(User.status == int(UserStatus.ACTIVE))
        ).one()

    def create_users_by_invitation(
        self, email_list: Iterable[str], auth_service: FirebaseAuthService
    ) -> InvitationResult:
        """Create an invited user with a random password for each new email.

        Blank entries are ignored, malformed addresses are collected in
        ``invalid_emails`` and emails already registered are skipped. A
        provider account is created first; if the local insert then fails,
        the provider accounts created by this call are deleted and the
        database error propagates.
        """
        result = InvitationResult()
        for email in dict.fromkeys(e.strip() for e in email_list if e.strip()):
            try:
                validate_email(email)
            except PydanticCustomError:
                result.invalid_emails.append(email)
                continue

            if self.find_by_email(email) is not None:
                result.existing_emails.append(email)
                continue

            password = generate_password()
            try:
                account = auth_service.create_user(email, password)
            except AppException:
                logger.warning("Failed to create account for %s", email, exc_info=True)
                result.failed_emails.append(email)
                continue

            user = User(email=email, external_id=account.uid, status=UserStatus.INVITED)
            user.image_url_cached = generate_image_url(user)
            self._session.add(user)
            result.created.append(InvitedUser(email=email, password=password, user=user))

        try:
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            for invited in result.created:
                auth_service.delete_user(invited.user.external_id)
            raise

        for invited in result.created:
            self._session.refresh(invited.user)

        logger.info(
            "Invited %d user(s), skipped %d existing, %d failed, %d invalid",
            len(result.created),
            len(result.existing_emails),
            len(result.failed_emails),
            len(result.invalid_emails),
        )
        return result

    def set_admin(self, user: User, is_admin: bool) -> User:
        user.is_admin = is_admin
        return self._save(user)

    def update_status(self, user: User, status: UserStatus) -> User:
        user.status = status
        return self._save(user)

    def soft_delete(self, user: User) -> User:
        """Mark ``user`` deleted and scrub its identifying fields."""
        user.status = UserStatus.DELETED
        user.name = ""
        user.username = None
        user.email = f"deleted-{user.id}@deleted"
        user.external_id = None
        user.is_admin = False
        return self._save(user)

    def update_image_url_cached(self, user_ids: Iterable[uuid.UUID]) -> int:
        users = self._session.exec(
            select(User).where(col(User.id).in_(list(user_ids)))
        ).all()
        for user in users:
            user.image_url_cached = generate_image_url(user)
            self._session.add(user)
        self._session.commit()
        return len(users)

    def _save(self, user: User) -> User:
        self._session.add(user)
        self._session.commit()
        self._session.refresh(user)
        return user


def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
