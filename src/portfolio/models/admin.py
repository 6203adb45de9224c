from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.database.base import Base, IdMixin, TimestampMixin


class Admin(IdMixin, TimestampMixin, Base):
    """
    Site administrator.

    `password` always holds a bcrypt hash (see core/security.py); the service
    hashes before every write and never returns it.
    """

    __tablename__ = "admins"

    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Admin(id={self.id!r}, username={self.username!r})>"
