"""Admin account models."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, TimestampMixin
from src.shared.security.passwords import hash_password, verify_password


class Admin(Base, TimestampMixin):
    """Administrator account, separate from donor accounts."""

    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    def verify_password(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.hashed_password)

    @staticmethod
    def hash_password(password: str) -> str:
        return hash_password(password)
