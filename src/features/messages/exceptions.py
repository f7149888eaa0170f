"""Messaging exceptions."""

from fastapi import HTTPException, status


class MessageException(HTTPException):
    """Base messaging exception."""

    def __init__(self, detail: str = "Message operation failed", status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


class MessageNotFound(MessageException):
    def __init__(self):
        super().__init__(detail="Message not found", status_code=status.HTTP_404_NOT_FOUND)


class ReceiverNotFound(MessageException):
    """Raised when the addressed donor does not exist."""

    def __init__(self):
        super().__init__(detail="Receiver not found", status_code=status.HTTP_404_NOT_FOUND)


class NotAuthorizedForMessage(MessageException):
    """Raised when someone other than the receiver marks a message as read."""

    def __init__(self):
        super().__init__(detail="Not authorized to mark this message", status_code=status.HTTP_403_FORBIDDEN)
