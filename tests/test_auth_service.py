"""
Blog API — Auth Service and Credential Store Unit Tests
=========================================================

What:  Signup/login logic against a mock session or mock store.
How:   No database; SQLAlchemy exceptions are raised from AsyncMocks.

    ✅ Duplicate email (unique constraint) → DuplicateUserError
    ✅ Driver failure → StoreError labelled with the operation
    ✅ Login: unknown email, bad password, success
    ✅ issue_token_on_signup toggles the token in the signup response
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from blogapi.config import Settings
from blogapi.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    StoreError,
    UserNotFoundError,
)
from blogapi.schemas.auth import Credentials
from blogapi.security import decode_access_token, hash_password
from blogapi.services.auth_service import AuthService
from blogapi.services.credential_store import CredentialStore


def _user(user_id=1, email="a@example.com", password="pw"):
    user = MagicMock()
    user.id = user_id
    user.email = email
    user.password = hash_password(password)
    return user


@pytest.fixture
def settings():
    return Settings(jwt_secret="unit-test-secret")


class TestCredentialStore:

    def setup_method(self):
        self.store = CredentialStore()

    @pytest.mark.asyncio
    async def test_create_maps_unique_violation(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        )
        with pytest.raises(DuplicateUserError):
            await self.store.create(mock_db_session, "a@example.com", "hash")
        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_wraps_driver_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("connection refused"))
        )
        with pytest.raises(StoreError) as exc_info:
            await self.store.create(mock_db_session, "a@example.com", "hash")
        assert "connection refused" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_create_commits(self, mock_db_session):
        user = await self.store.create(mock_db_session, "a@example.com", "hash")
        assert user.email == "a@example.com"
        assert user.password == "hash"
        mock_db_session.add.assert_called_once_with(user)
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_by_email_missing(self, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = result
        assert await self.store.get_by_email(mock_db_session, "nobody@example.com") is None


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_stores_hash_and_hides_password(self, mock_db_session, settings):
        store = MagicMock()
        store.create = AsyncMock(return_value=_user(5, "new@example.com"))
        service = AuthService(store=store)

        result = await service.register(
            mock_db_session, Credentials(email="new@example.com", password="pw"), settings
        )

        stored_hash = store.create.await_args.args[2]
        assert stored_hash != "pw"
        assert result.user.id == 5
        assert result.token is None
        assert "password" not in result.model_dump()["user"]

    @pytest.mark.asyncio
    async def test_register_issues_token_when_enabled(self, mock_db_session):
        settings = Settings(jwt_secret="unit-test-secret", issue_token_on_signup=True)
        store = MagicMock()
        store.create = AsyncMock(return_value=_user(5, "new@example.com"))

        result = await AuthService(store=store).register(
            mock_db_session, Credentials(email="new@example.com", password="pw"), settings
        )

        assert decode_access_token(result.token, settings).id == 5

    @pytest.mark.asyncio
    async def test_register_failure_labelled(self, mock_db_session, settings):
        store = MagicMock()
        store.create = AsyncMock(side_effect=StoreError(detail="disk full"))

        with pytest.raises(StoreError) as exc_info:
            await AuthService(store=store).register(
                mock_db_session, Credentials(email="a@example.com", password="pw"), settings
            )
        assert exc_info.value.message == "Registration failed"
        assert exc_info.value.detail == "disk full"


class TestLogin:

    @pytest.mark.asyncio
    async def test_unknown_email(self, mock_db_session, settings):
        store = MagicMock()
        store.get_by_email = AsyncMock(return_value=None)
        with pytest.raises(UserNotFoundError):
            await AuthService(store=store).login(
                mock_db_session, Credentials(email="x@example.com", password="pw"), settings
            )

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db_session, settings):
        store = MagicMock()
        store.get_by_email = AsyncMock(return_value=_user(password="right"))
        with pytest.raises(InvalidCredentialsError):
            await AuthService(store=store).login(
                mock_db_session, Credentials(email="a@example.com", password="wrong"), settings
            )

    @pytest.mark.asyncio
    async def test_success_token_carries_identity(self, mock_db_session, settings):
        store = MagicMock()
        store.get_by_email = AsyncMock(return_value=_user(3, "a@example.com", "pw"))

        result = await AuthService(store=store).login(
            mock_db_session, Credentials(email="a@example.com", password="pw"), settings
        )

        identity = decode_access_token(result.token, settings)
        assert (identity.id, identity.email) == (3, "a@example.com")
        assert result.user.id == 3

    @pytest.mark.asyncio
    async def test_lookup_failure_labelled(self, mock_db_session, settings):
        store = MagicMock()
        store.get_by_email = AsyncMock(side_effect=StoreError(detail="timeout"))
        with pytest.raises(StoreError) as exc_info:
            await AuthService(store=store).login(
                mock_db_session, Credentials(email="a@example.com", password="pw"), settings
            )
        assert exc_info.value.message == "Login failed"
