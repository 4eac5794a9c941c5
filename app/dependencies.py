# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.services.contact_service import ContactService
from lib.database import Database


def get_database(request: Request) -> Database:
    """
    Get the application's Database.

    Created by the lifespan handler in app/main.py.
    """
    return request.app.state.database


async def get_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncIterator[AsyncSession]:
    """Open one session per request."""
    async with database.session() as session:
        yield session


def get_contact_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ContactService:
    return ContactService(session)


# Type aliases for dependency injection
DatabaseDep = Annotated[Database, Depends(get_database)]
ContactServiceDep = Annotated[ContactService, Depends(get_contact_service)]
