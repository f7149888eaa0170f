"""Donor-related exceptions."""

from fastapi import HTTPException, status


class DonorException(HTTPException):
    """Base donor exception."""

    def __init__(self, detail: str = "Donor operation failed", status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


class DonorNotFound(DonorException):
    """Raised when donor is not found."""

    def __init__(self):
        super().__init__(detail="Donor not found", status_code=status.HTTP_404_NOT_FOUND)


class DonorAlreadyExists(DonorException):
    """Raised when trying to register a donor that already exists."""

    def __init__(self, field: str = "donor"):
        super().__init__(detail=f"{field.capitalize()} already exists")


class EmailAlreadyExists(DonorAlreadyExists):
    """Raised when email already exists."""

    def __init__(self):
        super().__init__(field="email")


class PhoneNumberAlreadyExists(DonorAlreadyExists):
    """Raised when phone number already exists."""

    def __init__(self):
        super().__init__(field="phone number")


class IncorrectPassword(DonorException):
    """Raised when the current password is incorrect."""

    def __init__(self):
        super().__init__(detail="Current password is incorrect")
