"""Database session dependency."""
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Database dependency for FastAPI. One session per request."""
    async with request.app.state.database.transaction() as session:
        yield session
