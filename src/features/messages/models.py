"""Direct message models."""

from sqlalchemy import Boolean, ForeignKey, Integer, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, TimestampMixin


class Message(Base, TimestampMixin):
    """Text message between two donors, e.g. to arrange a donation."""

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sender_id: Mapped[int] = mapped_column(ForeignKey("donors.id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id: Mapped[int] = mapped_column(ForeignKey("donors.id", ondelete="CASCADE"), nullable=False, index=True)

    text: Mapped[str] = mapped_column(Text, nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    def partner_of(self, donor_id: int) -> int:
        """The other side of the conversation, seen from ``donor_id``."""
        return self.receiver_id if self.sender_id == donor_id else self.sender_id
