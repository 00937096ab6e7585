"""Tests for wikiadmin/user/repository.py - user directory."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from wikiadmin.auth.service import FirebaseAuthService, FirebaseUser
from wikiadmin.core.pagination import PaginateOptions
from wikiadmin.external_account.models import ExternalAccount
from wikiadmin.external_account.repository import ExternalAccountRepository
from wikiadmin.user.exceptions import EmailExistsError
from wikiadmin.user.models import DEFAULT_USER_IMAGE, USER_PUBLIC_FIELDS, User, UserStatus
from wikiadmin.user.query import LISTABLE_STATUS_CODES, UserListFilter
from wikiadmin.user.repository import (
    UserRepository,
    generate_image_url,
    generate_password,
)


@pytest.fixture
def repository(session: Session) -> UserRepository:
    return UserRepository(session)


def options(sort=None, page=1, limit=50) -> PaginateOptions:
    return PaginateOptions(
        sort=sort or {"id": 1}, page=page, limit=limit, select=USER_PUBLIC_FIELDS
    )


class TestPaginate:
    def test_sorts_and_counts(self, repository, user_factory):
        for name in ("carol", "alice", "bob"):
            user_factory(name=name, status=UserStatus.ACTIVE)

        result = repository.paginate(
            UserListFilter(LISTABLE_STATUS_CODES), options(sort={"name": -1})
        )

        assert [u.name for u in result.docs] == ["carol", "bob", "alice"]
        assert result.total_docs == 3
        assert result.total_pages == 1

    def test_pages(self, repository, user_factory):
        for i in range(5):
            user_factory(name=f"user-{i}", status=UserStatus.ACTIVE)

        result = repository.paginate(
            UserListFilter(LISTABLE_STATUS_CODES),
            options(sort={"name": 1}, page=2, limit=2),
        )

        assert [u.name for u in result.docs] == ["user-2", "user-3"]
        assert result.total_docs == 5
        assert result.has_next_page is True
        assert result.prev_page == 1

    def test_filters_by_status(self, repository, user_factory):
        user_factory(status=UserStatus.ACTIVE)
        invited = user_factory(status=UserStatus.INVITED)

        result = repository.paginate(UserListFilter((5,)), options())

        assert [u.id for u in result.docs] == [invited.id]


class TestLookups:
    def test_find_by_id(self, repository, test_user):
        assert repository.find_by_id(test_user.id).email == test_user.email

    def test_find_user_by_username(self, repository, test_user):
        assert repository.find_user_by_username("testuser").id == test_user.id
        assert repository.find_user_by_username("nobody") is None

    def test_count_active_users(self, repository, test_user, inactive_user):
        assert repository.count_active_users() == 1


class TestInvitation:
    @pytest.fixture
    def auth_service(self):
        service = MagicMock(spec=FirebaseAuthService)
        service.create_user.side_effect = lambda email, _password: FirebaseUser(
            uid=f"uid-{email}", email=email
        )
        return service

    def test_creates_invited_users(self, repository, auth_service, session):
        result = repository.create_users_by_invitation(
            ["a@example.com", "b@example.com"], auth_service
        )

        assert [i.email for i in result.created] == ["a@example.com", "b@example.com"]
        for invited in result.created:
            assert invited.user.status == UserStatus.INVITED
            assert invited.user.external_id == f"uid-{invited.email}"
            assert invited.user.image_url_cached == DEFAULT_USER_IMAGE
            assert len(invited.password) >= 12
        auth_service.create_user.assert_any_call(
            "a@example.com", result.created[0].password
        )

    def test_skips_existing_and_duplicate_emails(
        self, repository, auth_service, test_user
    ):
        result = repository.create_users_by_invitation(
            [test_user.email, "new@example.com", "new@example.com"], auth_service
        )

        assert result.existing_emails == [test_user.email]
        assert [i.email for i in result.created] == ["new@example.com"]
        assert auth_service.create_user.call_count == 1

    def test_collects_invalid_addresses(self, repository, auth_service):
        result = repository.create_users_by_invitation(
            ["user", "  ", "ok@example.com", "two@@example.com"], auth_service
        )

        assert result.invalid_emails == ["user", "two@@example.com"]
        assert [i.email for i in result.created] == ["ok@example.com"]
        auth_service.create_user.assert_called_once()

    def test_collects_provider_failures(self, repository, auth_service, session):
        auth_service.create_user.side_effect = EmailExistsError()

        result = repository.create_users_by_invitation(["x@example.com"], auth_service)

        assert result.created == []
        assert result.failed_emails == ["x@example.com"]
        assert session.exec(select(User)).all() == []

    def test_rolls_back_provider_accounts_when_commit_fails(self, auth_service):
        session = MagicMock(spec=Session)
        session.exec.return_value.first.return_value = None
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("down"))

        with pytest.raises(OperationalError):
            UserRepository(session).create_users_by_invitation(
                ["a@example.com"], auth_service
            )

        session.rollback.assert_called_once()
        auth_service.delete_user.assert_called_once_with("uid-a@example.com")


class TestMutations:
    def test_set_admin(self, repository, test_user):
        assert repository.set_admin(test_user, True).is_admin is True
        assert repository.set_admin(test_user, False).is_admin is False

    def test_update_status(self, repository, inactive_user):
        user = repository.update_status(inactive_user, UserStatus.ACTIVE)

        assert user.status == UserStatus.ACTIVE

    def test_soft_delete_scrubs_identity(self, repository, session, test_user):
        session.add(
            ExternalAccount(provider_type="github", account_id="42", user_id=test_user.id)
        )
        session.commit()

        ExternalAccountRepository(session).remove_by_user(test_user, commit=False)
        user = repository.soft_delete(test_user)

        assert user.status == UserStatus.DELETED
        assert user.name == ""
        assert user.username is None
        assert user.external_id is None
        assert user.email == f"deleted-{user.id}@deleted"
        assert session.get(User, user.id) is not None
        assert session.exec(select(ExternalAccount)).all() == []

    def test_update_image_url_cached(self, repository, user_factory, session):
        gravatar = user_factory(email=" Someone@Example.com", is_gravatar_enabled=True)
        uploaded = user_factory(image_url="/attachment/avatar.png")
        plain = user_factory()

        count = repository.update_image_url_cached([gravatar.id, uploaded.id, plain.id])

        assert count == 3
        session.refresh(gravatar)
        assert gravatar.image_url_cached == generate_image_url(gravatar)
        assert gravatar.image_url_cached.startswith("https://gravatar.com/avatar/")
        session.refresh(uploaded)
        assert uploaded.image_url_cached == "/attachment/avatar.png"
        session.refresh(plain)
        assert plain.image_url_cached == DEFAULT_USER_IMAGE


def test_gravatar_url_ignores_case_and_whitespace():
    a = User(email="Someone@Example.com ", is_gravatar_enabled=True)
    b = User(email="someone@example.com", is_gravatar_enabled=True)

    assert generate_image_url(a) == generate_image_url(b)
    assert len(generate_image_url(a).rsplit("/", 1)[1]) == 32


def test_generate_password_is_random():
    assert generate_password() != generate_password()
