"""
Authentication router.

This module contains the registration and login endpoints.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from weatherdash.crud.user import user as crud_user
from weatherdash.database import get_db
from weatherdash.dependencies.services import get_token_service
from weatherdash.errors import ValidationError
from weatherdash.schemas.auth import LoginRequest, LoginResponse, LoginUser, RegisterRequest
from weatherdash.schemas.base import MessageResponse
from weatherdash.utils.logging_config import get_logger
from weatherdash.utils.rate_limit import LOGIN_LIMIT, REGISTER_LIMIT, limiter
from weatherdash.utils.security import TokenService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["authentication"],
    responses={400: {"description": "Invalid input or credentials"}},
)


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTER_LIMIT)
async def register_user(
    request: Request,
    user_in: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user.

    Requires username, email and a password of at least 6 characters.
    The response carries no user data.

    Rate limit: 5 requests per minute
    """
    await crud_user.register(db, obj_in=user_in)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Authenticate user and return a session token.

    Unknown email and wrong password produce the same response.

    Rate limit: 10 requests per minute (to prevent brute force attacks)
    """
    if not credentials.email or not credentials.password:
        raise ValidationError("Email and password are required")

    user_obj = await crud_user.authenticate(
        db, email=credentials.email, password=credentials.password
    )
    if not user_obj:
        logger.info("Failed login attempt")
        raise ValidationError("Invalid credentials")

    return LoginResponse(
        token=token_service.issue(user_obj),
        user=LoginUser.model_validate(user_obj),
    )
