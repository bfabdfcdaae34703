"""
API token routes. Tokens authenticate programmatic clients via
``Authorization: Bearer <token>``; a user manages only their own tokens.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.db_handlers.api_token import ApiTokenDBHandler
from app.dependencies.auth import get_current_user
from app.models import User
from app.schemas import ApiTokenCreate, ApiTokenResponse

router = APIRouter(prefix="/api/tokens", tags=["API Tokens"])


@router.get("", response_model=list[ApiTokenResponse])
async def list_tokens(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
):
    """List the caller's API tokens, newest first."""
    return await ApiTokenDBHandler().list_for_user(current_user.id, db=db)


@router.post("", response_model=ApiTokenResponse, status_code=status.HTTP_201_CREATED)
async def create_token(
    token_in: ApiTokenCreate | None = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
):
    """Issue a new token. The response contains the token value to use as a bearer credential."""
    label = token_in.label if token_in else None
    return await ApiTokenDBHandler().issue(current_user.id, label, db=db)


@router.delete("/{token_id}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_token(
    token_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
):
    """Revoke one of the caller's tokens. Unknown ids are accepted silently."""
    await ApiTokenDBHandler().revoke(token_id, user_id=current_user.id, db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
