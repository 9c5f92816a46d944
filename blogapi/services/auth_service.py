"""
Blog API — Auth Service (Signup and Login)
============================================

What:  Orchestrates credential storage, password hashing, and token issuance.
How:   Hashing and verification run in Starlette's threadpool so a slow
       hash never stalls the event loop serving other requests. Store
       failures are re-labelled with the operation that failed
       ("Registration failed" / "Login failed") and keep the raw detail.
Who:   /auth route handlers.

Flows:
    register: hash → INSERT (unique email) → public view [+ token]
    login:    SELECT by email → verify hash → sign {id, email} for 1 hour
"""

import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.config import Settings
from blogapi.exceptions import InvalidCredentialsError, StoreError, UserNotFoundError
from blogapi.schemas.auth import Credentials, LoginResponse, PublicUser, SignupResponse
from blogapi.security import create_access_token, hash_password, verify_password
from blogapi.services.credential_store import CredentialStore, credential_store

logger = logging.getLogger(__name__)


class AuthService:
    """
    Stateless signup/login logic.

    The store is injectable so tests can substitute a mock; the default
    is the module-level `credential_store`.
    """

    def __init__(self, store: CredentialStore = credential_store):
        self.store = store

    async def register(
        self,
        db: AsyncSession,
        credentials: Credentials,
        settings: Settings,
    ) -> SignupResponse:
        """
        Create an account.

        Returns:
            SignupResponse with the public user view, plus a token when
            `settings.issue_token_on_signup` is on.

        Raises:
            DuplicateUserError: email already registered (→ 400)
            StoreError: "Registration failed" with the driver detail (→ 500)
        """
        password_hash = await run_in_threadpool(hash_password, credentials.password)

        try:
            user = await self.store.create(db, credentials.email, password_hash)
        except StoreError as e:
            raise StoreError(message="Registration failed", detail=e.detail, context=e.context) from e

        logger.info("User %s registered", user.id)
        response = SignupResponse(user=PublicUser.model_validate(user))
        if settings.issue_token_on_signup:
            response.token = create_access_token(user.id, user.email, settings)
        return response

    async def login(
        self,
        db: AsyncSession,
        credentials: Credentials,
        settings: Settings,
    ) -> LoginResponse:
        """
        Exchange email + password for a bearer token.

        Raises:
            UserNotFoundError: no account with that email (→ 400)
            InvalidCredentialsError: password mismatch (→ 400)
            StoreError: "Login failed" with the driver detail (→ 500)
        """
        try:
            user = await self.store.get_by_email(db, credentials.email)
        except StoreError as e:
            raise StoreError(message="Login failed", detail=e.detail, context=e.context) from e

        if user is None:
            raise UserNotFoundError(email=credentials.email)

        is_match = await run_in_threadpool(verify_password, credentials.password, user.password)
        if not is_match:
            logger.info("Login rejected for user %s: bad password", user.id)
            raise InvalidCredentialsError()

        token = create_access_token(user.id, user.email, settings)
        return LoginResponse(token=token, user=PublicUser.model_validate(user))


auth_service = AuthService()
