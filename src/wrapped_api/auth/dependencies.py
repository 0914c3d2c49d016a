"""FastAPI dependencies for authenticated endpoints."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wrapped_api.dependencies import db_manager
from wrapped_common.db.models.user import SpotifyUser


async def get_current_user(request: Request) -> int:
    """Require a signed-in user. Returns the internal user id."""
    user_id: int | None = getattr(request.state, "user_id", None)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id


CurrentUser = Annotated[int, Depends(get_current_user)]


async def get_current_account(
    user_id: CurrentUser,
    session: Annotated[AsyncSession, Depends(db_manager.dependency)],
) -> SpotifyUser:
    """Load the signed-in SpotifyUser; 401 if the session points at nobody."""
    user = await session.get(SpotifyUser, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="No Spotify user ID")
    return user


async def get_current_owner(
    user_id: CurrentUser,
    session: Annotated[AsyncSession, Depends(db_manager.dependency)],
) -> str:
    """Resolve the session to the owner's Spotify user id, used to partition history."""
    result = await session.execute(select(SpotifyUser.spotify_user_id).where(SpotifyUser.id == user_id))
    spotify_user_id = result.scalar_one_or_none()
    if not spotify_user_id:
        raise HTTPException(status_code=401, detail="No Spotify user ID")
    return spotify_user_id


CurrentAccount = Annotated[SpotifyUser, Depends(get_current_account)]
CurrentOwner = Annotated[str, Depends(get_current_owner)]
