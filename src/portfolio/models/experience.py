from sqlalchemy import Boolean, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.database.base import Base, IdMixin, TimestampMixin


class Experience(IdMixin, TimestampMixin, Base):
    """Work history entry. Dates are kept as entered ("2021", "Mar 2021")."""

    __tablename__ = "experiences"

    role: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(120), unique=True, index=True, nullable=False)
    company: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    start_date: Mapped[str] = mapped_column(String(30), nullable=False)
    end_date: Mapped[str | None] = mapped_column(String(30), nullable=True)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    technologies: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    is_current: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Experience(id={self.id!r}, role={self.role!r})>"
