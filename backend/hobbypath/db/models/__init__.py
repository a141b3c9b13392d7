"""ORM models exposed for metadata discovery."""
from hobbypath.db.models.key_value import KeyValueEntry

__all__ = ["KeyValueEntry"]
