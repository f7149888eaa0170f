"""Authentication exceptions."""

from fastapi import HTTPException, status


class AuthenticationException(HTTPException):
    """Base authentication exception."""

    def __init__(self, detail: str = "Authentication failed"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialsException(AuthenticationException):
    """Raised when email or password is incorrect."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail=detail)


class InvalidTokenException(AuthenticationException):
    """Raised when JWT token is invalid or expired."""

    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(detail=detail)


class InvalidTokenTypeException(InvalidTokenException):
    """Raised when token type is invalid."""

    def __init__(self, expected: str = "access"):
        super().__init__(detail=f"Invalid token type, expected {expected}")


class DonorSuspendedException(HTTPException):
    """Raised when a suspended donor tries to use the API."""

    def __init__(self):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail="Donor account is suspended")
