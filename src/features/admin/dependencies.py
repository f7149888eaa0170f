"""Admin authentication dependencies."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import security, subject_from_token
from src.features.auth.jwt_utils import ADMIN_TOKEN_TYPE

from .exceptions import AdminNotFound
from .models import Admin
from .service import AdminService


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_db_session),
) -> Admin:
    """Get the admin from an admin bearer token. Donor tokens are refused.

    Raises:
        InvalidTokenException: If the token is missing, invalid or not an admin token
        AdminNotFound: If the admin account was removed

    """
    admin_id = subject_from_token(credentials, ADMIN_TOKEN_TYPE)

    admin = await AdminService.get_admin(session, admin_id)
    if admin is None:
        raise AdminNotFound()

    return admin
