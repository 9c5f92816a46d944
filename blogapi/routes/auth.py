"""
Blog API — Auth Route Handlers
================================

What:  POST /auth/signup and POST /auth/login.
How:   Validate the body with `Credentials`, delegate to AuthService.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.config import Settings
from blogapi.database import get_db_session
from blogapi.dependencies import get_settings
from blogapi.schemas.auth import Credentials, LoginResponse, SignupResponse
from blogapi.schemas.common import ErrorResponse
from blogapi.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    status_code=201,
    response_model=SignupResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "User already exists or invalid body", "model": ErrorResponse},
        500: {"description": "Registration failed", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def signup(
    credentials: Credentials,
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> SignupResponse:
    """
    Create an account and return its public view.

    The response carries a `token` only when ISSUE_TOKEN_ON_SIGNUP is on.
    """
    return await auth_service.register(db, credentials, settings)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "User not found or invalid credentials", "model": ErrorResponse},
        500: {"description": "Login failed", "model": ErrorResponse},
    },
    summary="Exchange credentials for a bearer token",
)
async def login(
    credentials: Credentials,
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    return await auth_service.login(db, credentials, settings)
