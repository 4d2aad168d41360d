from __future__ import annotations

from sqlalchemy import Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from gym_tracker.db.session import Base

EXERCISE_UNIQUE_CONSTRAINT = "uq_exercises_name_muscle_group"


class Exercise(Base):
    __tablename__ = "exercises"
    __table_args__ = (
        UniqueConstraint("name", "muscle_group", name=EXERCISE_UNIQUE_CONSTRAINT),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    muscle_group: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Exercise(id={self.id}, name={self.name}, muscle_group={self.muscle_group})>"
