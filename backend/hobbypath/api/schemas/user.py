"""Schemas for the learner's onboarding selection."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from hobbypath.api.schemas.resources import SkillLevel


class UserProfile(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    selected_hobby: Optional[str] = Field(default=None, max_length=80)
    selected_level: Optional[SkillLevel] = None
    current_plan_id: Optional[str] = None
