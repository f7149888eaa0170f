"""Blood request domain models."""

from enum import StrEnum

from sqlalchemy import Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, TimestampMixin
from src.features.donor.models import BloodGroup


class RequestStatus(StrEnum):
    """Blood request lifecycle.

    PENDING: Sent by the requester, waiting for the donor.
    ACCEPTED: The donor agreed to donate.
    REJECTED: The donor declined. Terminal.
    CANCELLED: The requester withdrew the request. Terminal.
    COMPLETED: The requester confirmed the donation and rated the donor. Terminal.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


ALLOWED_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset(
        {RequestStatus.ACCEPTED, RequestStatus.REJECTED, RequestStatus.CANCELLED, RequestStatus.COMPLETED}
    ),
    RequestStatus.ACCEPTED: frozenset({RequestStatus.COMPLETED}),
    RequestStatus.REJECTED: frozenset(),
    RequestStatus.CANCELLED: frozenset(),
    RequestStatus.COMPLETED: frozenset(),
}


class BloodRequest(Base, TimestampMixin):
    """Request from one donor (the requester) to another (the donor).

    Names, blood group and location are copied at creation so the request
    history stays readable after profile changes.
    """

    __tablename__ = "blood_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    requester_id: Mapped[int] = mapped_column(ForeignKey("donors.id", ondelete="CASCADE"), nullable=False, index=True)
    donor_id: Mapped[int] = mapped_column(ForeignKey("donors.id", ondelete="CASCADE"), nullable=False, index=True)

    # Snapshot
    requester_name: Mapped[str] = mapped_column(String(100), nullable=False)
    donor_name: Mapped[str] = mapped_column(String(100), nullable=False)
    blood_group: Mapped[BloodGroup] = mapped_column(
        Enum(BloodGroup, native_enum=False, length=3, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    location: Mapped[str] = mapped_column(String(255), nullable=False)

    status: Mapped[RequestStatus] = mapped_column(
        Enum(RequestStatus, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=RequestStatus.PENDING,
        server_default=RequestStatus.PENDING.value,
        index=True,
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def can_transition_to(self, target: RequestStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[RequestStatus(self.status)]
