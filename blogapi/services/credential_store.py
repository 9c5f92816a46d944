"""
Blog API — Credential Store
=============================

What:  Query wrappers for the `blog_users` table.
How:   One statement per method, executed on the request's AsyncSession.
       Driver failures become StoreError; the unique-email violation
       becomes DuplicateUserError.
Who:   AuthService.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.exceptions import DuplicateUserError, StoreError
from blogapi.models.user import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """Stateless access to stored users."""

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """
        Exact-match lookup: SELECT ... FROM blog_users WHERE email = :email

        Returns:
            The user row (hash included) or None.

        Raises:
            StoreError: query execution failed
        """
        try:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user by email: %s", str(e))
            raise StoreError(detail=str(e), context={"operation": "get_user_by_email"})

    async def create(self, db: AsyncSession, email: str, password_hash: str) -> User:
        """
        INSERT a new user and commit.

        The unique constraint on email decides duplicates; there is no
        preliminary SELECT.

        Raises:
            DuplicateUserError: email already registered
            StoreError: any other database failure
        """
        user = User(email=email, password=password_hash)
        try:
            db.add(user)
            await db.flush()
            await db.commit()
            return user
        except IntegrityError:
            await db.rollback()
            logger.info("Signup rejected: email already registered")
            raise DuplicateUserError(email=email)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Database error creating user: %s", str(e))
            raise StoreError(detail=str(e), context={"operation": "create_user"})


credential_store = CredentialStore()
