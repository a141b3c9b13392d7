"""Local document storage for the learner profile and current plan."""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from hobbypath.api.schemas.learning_plan import LearningPlan
from hobbypath.api.schemas.user import UserProfile
from hobbypath.db.models.key_value import KeyValueEntry

logger = logging.getLogger(__name__)

USER_KEY = "user_data"
LEARNING_PLAN_KEY = "learning_plan"


class KeyValueStore:
    """String key-value store over the ``key_value_store`` table; each call commits on its own."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, key: str) -> Optional[str]:
        entry = self.db.get(KeyValueEntry, key)
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        entry = self.db.get(KeyValueEntry, key)
        if entry is None:
            self.db.add(KeyValueEntry(key=key, value=value))
        else:
            entry.value = value
        self._commit()

    def clear(self) -> None:
        self.db.query(KeyValueEntry).delete()
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


class StorageService:
    """Serializes the learner profile and plan as JSON documents under fixed keys."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    @classmethod
    def for_session(cls, db: Session) -> "StorageService":
        return cls(KeyValueStore(db))

    def save_user(self, user: UserProfile) -> None:
        self.store.set(USER_KEY, user.model_dump_json(by_alias=True))

    def get_user(self) -> Optional[UserProfile]:
        raw = self.store.get(USER_KEY)
        if raw is None:
            return None
        try:
            return UserProfile.model_validate_json(raw)
        except ValidationError:
            logger.error("Stored user document is unreadable; ignoring it")
            return None

    def save_learning_plan(self, plan: LearningPlan) -> None:
        self.store.set(LEARNING_PLAN_KEY, plan.model_dump_json(by_alias=True))

    def get_learning_plan(self) -> Optional[LearningPlan]:
        raw = self.store.get(LEARNING_PLAN_KEY)
        if raw is None:
            return None
        try:
            return LearningPlan.model_validate_json(raw)
        except ValidationError:
            logger.error("Stored learning plan is unreadable; ignoring it")
            return None

    def clear_all(self) -> None:
        self.store.clear()
        logger.info("Cleared all stored documents")
