from typing import Any, AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.security import decode_access_token
from portfolio.database.session import AsyncSessionMaker
from portfolio.exceptions.base import AuthorizationError

TOKEN_COOKIE = "token"


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionMaker() as session:
        yield session


def extract_token(request: Request) -> str | None:
    """Bearer header first, then the login cookie."""
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(TOKEN_COOKIE) or None


async def require_admin(request: Request) -> dict[str, Any]:
    """
    Claims of the calling admin.

    A missing token is an AuthorizationError; an invalid or expired one
    surfaces as jwt.InvalidTokenError and is translated at the boundary.
    """
    token = extract_token(request)
    if token is None:
        raise AuthorizationError("Authentication required")
    return decode_access_token(token)
