# Authentication API routes for registration, session login/logout and the current user

from datetime import timedelta

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.db import get_app_db
from app.db_handlers.session import SessionDBHandler
from app.db_handlers.user import UserDBHandler
from app.dependencies.auth import get_current_user_optional
from app.errors import UnauthorizedError
from app.models import User
from app.schemas import MessageResponse, UserInfo, UserLogin, UserRegister
from app.utils.auth import get_password_hash, verify_password
from app.utils.logger import setup_logger

logger = setup_logger("api.auth")

router = APIRouter(prefix="/api", tags=["Authentication"])

INVALID_CREDENTIALS = "Invalid username or password"


@router.post("/register", response_model=UserInfo, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: UserRegister,
    request: Request,
    db: AsyncSession = Depends(get_app_db),
):
    """Register a new user with username, email and password."""
    rounds = request.app.state.settings.bcrypt_rounds
    password_hash = await run_in_threadpool(get_password_hash, user_data.password, rounds)
    user = await UserDBHandler().create_user(
        user_data.username, user_data.email, password_hash, db=db
    )
    logger.info(f"Registered user {user.id}")
    return user


@router.post("/login", response_model=UserInfo)
async def login_user(
    user_data: UserLogin,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_app_db),
):
    """Verify credentials and start a server-side session carried by a cookie."""
    user = await UserDBHandler().get_user_by_username(user_data.username, db=db)
    password_ok = user is not None and await run_in_threadpool(
        verify_password, user_data.password, user.password_hash
    )
    if not password_ok:
        # Same answer for unknown users and wrong passwords
        raise UnauthorizedError(INVALID_CREDENTIALS)

    settings = request.app.state.settings
    session_handler = SessionDBHandler()
    previous_sid = request.cookies.get(settings.session_cookie_name)
    if previous_sid:
        await session_handler.delete_session(previous_sid, db=db)

    session = await session_handler.create_session(
        user.id, timedelta(hours=settings.session_ttl_hours), db=db
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.sid,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    logger.info(f"User {user.id} logged in")
    return user


@router.get("/auth/me", response_model=UserInfo | None)
async def get_current_user_info(
    current_user: User | None = Depends(get_current_user_optional),
):
    """Return the authenticated user, or null for anonymous callers."""
    return current_user


@router.post("/auth/logout", response_model=MessageResponse)
async def logout_user(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_app_db),
):
    """End the cookie's session. Calling it without a session is harmless."""
    cookie_name = request.app.state.settings.session_cookie_name
    await SessionDBHandler().delete_session(request.cookies.get(cookie_name), db=db)
    response.delete_cookie(cookie_name, httponly=True, samesite="lax")
    return MessageResponse(message="Logged out")
