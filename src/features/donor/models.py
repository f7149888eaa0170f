"""Donor domain models."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import Boolean, DateTime, Enum, Integer, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, TimestampMixin
from src.shared.security.passwords import hash_password, verify_password


class BloodGroup(StrEnum):
    """ABO/Rh blood groups."""

    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"


class DonorStatus(StrEnum):
    """Donor account status.

    ACTIVE: Can log in, search and be found by other donors.
    SUSPENDED: Set by an admin. Cannot log in and is hidden from search.
    """

    ACTIVE = "active"
    SUSPENDED = "suspended"


def _enum_values(enum_cls: type[StrEnum]) -> list[str]:
    return [member.value for member in enum_cls]


class Donor(Base, TimestampMixin):
    """Registered donor. Every donor can both donate and request blood."""

    __tablename__ = "donors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Identity
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)

    # Authentication
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    # Donation profile
    blood_group: Mapped[BloodGroup] = mapped_column(
        Enum(BloodGroup, native_enum=False, length=3, values_callable=_enum_values),
        nullable=False,
        index=True,
    )
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    last_donation_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Moderation
    status: Mapped[DonorStatus] = mapped_column(
        Enum(DonorStatus, native_enum=False, length=20, values_callable=_enum_values),
        nullable=False,
        default=DonorStatus.ACTIVE,
        server_default=DonorStatus.ACTIVE.value,
        index=True,
    )
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    verification_note: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def is_active(self) -> bool:
        """Computed property: donor is active if status is ACTIVE."""
        return self.status == DonorStatus.ACTIVE

    def verify_password(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.hashed_password)

    @staticmethod
    def hash_password(password: str) -> str:
        return hash_password(password)
