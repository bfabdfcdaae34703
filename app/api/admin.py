# Admin API routes: master password login and password change

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.dependencies.auth import get_admin_user, get_current_user
from app.models import User
from app.schemas import AdminLogin, AdminPasswordChange, MessageResponse
from app.services.admin import change_admin_password, elevate_to_admin

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/login", response_model=MessageResponse)
async def admin_login(
    login_data: AdminLogin,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
):
    """Grant the caller admin rights when they present the master password."""
    await elevate_to_admin(current_user, login_data.password, db=db)
    return MessageResponse(message="Admin access granted")


@router.post("/password", response_model=MessageResponse)
async def admin_change_password(
    password_data: AdminPasswordChange,
    request: Request,
    admin_user: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_app_db),
):
    """Change the master password. The current one must be supplied."""
    await change_admin_password(
        password_data.current_password,
        password_data.new_password,
        db=db,
        rounds=request.app.state.settings.bcrypt_rounds,
    )
    return MessageResponse(message="Password updated")
