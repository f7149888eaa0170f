"""Blood request exceptions."""

from fastapi import HTTPException, status


class BloodRequestException(HTTPException):
    """Base blood request exception."""

    def __init__(self, detail: str = "Blood request operation failed", status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


class RequestNotFound(BloodRequestException):
    """Raised when blood request is not found."""

    def __init__(self):
        super().__init__(detail="Request not found", status_code=status.HTTP_404_NOT_FOUND)


class NotAuthorizedForRequest(BloodRequestException):
    """Raised when the caller is not the party allowed to perform an action."""

    def __init__(self, action: str):
        super().__init__(detail=f"Not authorized to {action} this request", status_code=status.HTTP_403_FORBIDDEN)


class InvalidRequestTransition(BloodRequestException):
    """Raised when the request is not in a state that allows the action."""

    def __init__(self, action: str, allowed_states: str = "pending"):
        super().__init__(detail=f"Only {allowed_states} requests can be {action}")


class CannotRequestSelf(BloodRequestException):
    """Raised when a donor sends a request to themselves."""

    def __init__(self):
        super().__init__(detail="You cannot send a blood request to yourself")


class DonorNotEligible(BloodRequestException):
    """Raised when the requested donor is still in the waiting period."""

    def __init__(self, days_until_eligible: int):
        self.days_until_eligible = days_until_eligible
        super().__init__(
            detail=f"Donor is not eligible to donate yet. Please wait {days_until_eligible} more days."
        )


class DonorUnavailable(BloodRequestException):
    """Raised when the requested donor account is suspended."""

    def __init__(self):
        super().__init__(detail="Donor is not available")


class DuplicatePendingRequest(BloodRequestException):
    """Raised when a pending request to the same donor already exists."""

    def __init__(self):
        super().__init__(detail="A pending request to this donor already exists")


class OnlyRequesterCanComplete(BloodRequestException):
    """Raised when the donor tries to complete a request."""

    def __init__(self):
        super().__init__(
            detail="Only the requester can mark this request as completed", status_code=status.HTTP_403_FORBIDDEN
        )
