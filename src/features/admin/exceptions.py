"""Admin exceptions."""

from fastapi import HTTPException, status

from src.features.auth.exceptions import AuthenticationException


class InvalidAdminCredentials(AuthenticationException):
    """Raised when admin username or password is incorrect."""

    def __init__(self):
        super().__init__(detail="Invalid admin credentials")


class AdminNotFound(AuthenticationException):
    """Raised when the admin referenced by a token no longer exists."""

    def __init__(self):
        super().__init__(detail="Admin not found")


class IncorrectAdminPassword(HTTPException):
    def __init__(self):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
