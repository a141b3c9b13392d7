"""Schemas for auxiliary learning resources attached to techniques."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SkillLevel = Literal["Beginner", "Intermediate", "Advanced"]
ResourceType = Literal["video", "article", "tutorial", "tool", "course"]


class CuratedVideo(BaseModel):
    """A tutorial video picked for a technique's search keywords."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    url: str
    thumbnail_url: str
    duration: str
    channel_name: str
    description: str
    quality: SkillLevel
    is_recommended: bool = False
    video_id: Optional[str] = Field(default=None, description="YouTube id used for embedding.")


class LearningResource(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    type: ResourceType
    title: str
    url: str
    description: str
    source: str
    difficulty: SkillLevel
    duration: Optional[str] = None
    is_recommended: bool = False
    thumbnail_url: Optional[str] = None
    author: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)


class TechniqueResources(BaseModel):
    articles: List[LearningResource] = Field(default_factory=list)
    tools: List[LearningResource] = Field(default_factory=list)
    courses: List[LearningResource] = Field(default_factory=list)
    tutorials: List[LearningResource] = Field(default_factory=list)

    def flattened(self) -> List[LearningResource]:
        return [*self.articles, *self.tutorials, *self.tools, *self.courses]
