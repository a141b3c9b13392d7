"""Schemas for learning plans and their techniques."""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from hobbypath.api.schemas.resources import CuratedVideo, LearningResource, SkillLevel

Difficulty = Literal["Easy", "Medium", "Hard"]

SKILL_LEVELS: tuple[str, ...] = ("Beginner", "Intermediate", "Advanced")
DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Hard")


class Technique(BaseModel):
    """One learning unit inside a plan; serialized with the app's camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    is_completed: bool = False
    is_striked_out: bool = Field(default=False, description="Skipped by the learner.")
    estimated_time: str = Field(default="30 mins", pattern=r"^\d+ mins$")
    difficulty: Difficulty = "Medium"
    prerequisites: str = "None"
    practice_hints: str = "Practice regularly and focus on proper form"
    search_keywords: List[str] = Field(default_factory=list, max_length=3)
    curated_videos: List[CuratedVideo] = Field(default_factory=list)
    learning_resources: List[LearningResource] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_status_flags(self) -> "Technique":
        if self.is_completed and self.is_striked_out:
            raise ValueError("a technique cannot be both completed and skipped")
        return self

    @property
    def is_active(self) -> bool:
        return not self.is_completed and not self.is_striked_out


class LearningPlan(BaseModel):
    """Ordered curriculum for one hobby and level; technique order is curriculum order."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    hobby: str = Field(..., min_length=1)
    level: SkillLevel
    techniques: List[Technique] = Field(..., min_length=1)
    created_at: datetime
    updated_at: datetime

    def find_technique(self, technique_id: str) -> Optional[Technique]:
        for technique in self.techniques:
            if technique.id == technique_id:
                return technique
        return None


class LearningPlanRequest(BaseModel):
    hobby: str = Field(..., min_length=1, max_length=80)
    level: SkillLevel

    @field_validator("hobby")
    @classmethod
    def trim_hobby(cls, value: str) -> str:
        cleaned = " ".join(value.split())
        if not cleaned:
            raise ValueError("hobby must not be blank")
        return cleaned


class TechniqueStatusUpdate(BaseModel):
    """Set exactly one status flag; the other is cleared when the new value is true."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_completed: Optional[bool] = None
    is_striked_out: Optional[bool] = None

    @model_validator(mode="after")
    def check_single_flag(self) -> "TechniqueStatusUpdate":
        provided = [flag for flag in (self.is_completed, self.is_striked_out) if flag is not None]
        if len(provided) != 1:
            raise ValueError("provide exactly one of isCompleted or isStrikedOut")
        return self


class ProgressStats(BaseModel):
    completed: int
    active: int
    skipped: int
    total: int
    percentage: int
