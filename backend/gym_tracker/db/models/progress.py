from __future__ import annotations

from sqlalchemy import REAL, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from gym_tracker.db.session import Base


class Progress(Base):
    __tablename__ = "progress"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    exercise_id: Mapped[int] = mapped_column(Integer, ForeignKey("exercises.id"), nullable=False)
    weight: Mapped[float] = mapped_column(REAL, nullable=False)
    # ISO calendar date, e.g. "2024-06-01"; sorts chronologically as text.
    date: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Progress(id={self.id}, exercise_id={self.exercise_id}, weight={self.weight}, date={self.date})>"
