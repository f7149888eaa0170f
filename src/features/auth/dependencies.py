"""Authentication dependencies for FastAPI."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt.exceptions import InvalidTokenError
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.donor.models import Donor
from src.features.donor.service import DonorService

from .exceptions import DonorSuspendedException, InvalidTokenException, InvalidTokenTypeException
from .jwt_utils import ACCESS_TOKEN_TYPE, decode_token, verify_token_type

security = HTTPBearer(auto_error=False)


def subject_from_token(credentials: HTTPAuthorizationCredentials | None, expected_type: str) -> int:
    """Decode a bearer token and return its integer subject.

    Raises:
        InvalidTokenException: If the token is missing, invalid, expired or of another type

    """
    if credentials is None:
        raise InvalidTokenException(detail="Access token required")

    try:
        payload = decode_token(credentials.credentials)
    except InvalidTokenError as err:
        raise InvalidTokenException() from err

    if not verify_token_type(payload, expected_type):
        raise InvalidTokenTypeException(expected=expected_type)

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as err:
        raise InvalidTokenException(detail="Invalid token payload") from err


async def get_current_donor(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_db_session),
) -> Donor:
    """Get the current authenticated donor from the JWT token.

    Raises:
        InvalidTokenException: If token is invalid or donor not found

    """
    donor_id = subject_from_token(credentials, ACCESS_TOKEN_TYPE)

    donor = await DonorService.get_donor(session, donor_id)
    if donor is None:
        raise InvalidTokenException(detail="Donor not found")

    return donor


async def get_current_active_donor(current_donor: Donor = Depends(get_current_donor)) -> Donor:
    """Get the current donor, refusing suspended accounts.

    Raises:
        DonorSuspendedException: If an admin suspended the account

    """
    if not current_donor.is_active:
        raise DonorSuspendedException()
    return current_donor
