"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ttreviews.services.moderation import ModerationService


async def get_db(request: Request) -> AsyncGenerator:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


async def get_moderation_service(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> ModerationService:
    """Build a moderation service bound to this request's session."""
    return ModerationService(
        db,
        notifier=getattr(request.app.state, "notifier", None),
        asset_store=getattr(request.app.state, "asset_store", None),
    )


# Type aliases for dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
Moderation = Annotated[ModerationService, Depends(get_moderation_service)]
