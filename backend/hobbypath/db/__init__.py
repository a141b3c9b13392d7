"""Database utilities and models."""

from hobbypath.db.base import Base
from hobbypath.db import models  # noqa: F401  (imported for side effects)

__all__ = ["Base"]
