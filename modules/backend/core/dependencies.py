"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.database import get_db_session
from modules.backend.core.exceptions import AuthenticationError
from modules.backend.core.security import user_id_from_token

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)
    ],
) -> int:
    """
    Resolve the calling user's id from the bearer token.

    Raises:
        AuthenticationError: If no bearer token is sent or it is invalid
    """
    if credentials is None:
        raise AuthenticationError("Authentication required")
    return user_id_from_token(credentials.credentials)


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
