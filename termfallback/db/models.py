"""SQLAlchemy 2.0 declarative models for user language declarations.

One row per (user, language): the proficiency level a user claims for
that language.  Levels are opaque strings ordered by
``Settings.PROFICIENCY_LEVELS`` (e.g. ``"N"`` for native, ``"0"`` to ``"5"``).
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserLanguage(Base):
    """A language a user declares proficiency in."""

    __tablename__ = "user_languages"
    __table_args__ = (UniqueConstraint("user_id", "language_code", name="uq_user_language"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    language_code: Mapped[str] = mapped_column(String(35), nullable=False)
    level: Mapped[str] = mapped_column(String(8), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserLanguage user={self.user_id} {self.language_code}-{self.level}>"
