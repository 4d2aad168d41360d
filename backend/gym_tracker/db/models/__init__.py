"""SQLAlchemy model package.

Import model modules here as they are added so Alembic autogenerate
can discover them via metadata.
"""

from gym_tracker.db.models.exercise import Exercise  # noqa: F401
from gym_tracker.db.models.progress import Progress  # noqa: F401
