from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.database.base import Base, IdMixin, TimestampMixin


class Education(IdMixin, TimestampMixin, Base):
    __tablename__ = "educations"

    degree: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(120), unique=True, index=True, nullable=False)
    institution: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[str] = mapped_column(String(30), nullable=False)
    end_date: Mapped[str | None] = mapped_column(String(30), nullable=True)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Education(id={self.id!r}, degree={self.degree!r})>"
