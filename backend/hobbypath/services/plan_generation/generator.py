"""Model-backed learning-plan generation with an authored fallback."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from time import perf_counter
from typing import Callable, List, Optional

from hobbypath.api.schemas.learning_plan import SKILL_LEVELS, LearningPlan, Technique
from hobbypath.core.config import settings
from hobbypath.core.context import ensure_request_id
from hobbypath.core.ids import new_id
from hobbypath.observability.metrics import log_latency, log_metric
from hobbypath.observability.tracing import annotate, trace
from hobbypath.services.plan_generation.errors import ParseError, PlanGenerationError
from hobbypath.services.plan_generation.fallback_plans import generate_fallback_plan
from hobbypath.services.plan_generation.model_client import ModelClient, get_model_client
from hobbypath.services.plan_generation.prompt_builder import TECHNIQUE_COUNT_RANGE, build_prompt
from hobbypath.services.plan_generation.response_extractor import extract_json_array, parse_json_array
from hobbypath.services.plan_generation.technique_normalizer import normalize_technique
from hobbypath.services.resource_catalog import comprehensive_resources, curated_videos

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LearningPlanGenerator:
    """
    Builds a LearningPlan for a hobby and skill level.

    One model attempt is made. Any transport, envelope, extraction, or parse
    failure discards the partial result and returns the authored fallback plan
    instead, so callers always receive a usable plan. Both paths stamp the plan
    id and equal ``created_at``/``updated_at`` values from the injected clock.
    """

    def __init__(
        self,
        model_client: Optional[ModelClient],
        *,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], datetime] = utcnow,
        enrich_resources: bool = True,
    ) -> None:
        self._model_client = model_client
        self._id_factory = id_factory
        self._clock = clock
        self._enrich_resources = enrich_resources

    def generate_learning_plan(self, hobby: str, level: str) -> LearningPlan:
        request_id = ensure_request_id()
        hobby_name = (hobby or "").strip()
        metadata = {"hobby": hobby_name, "level": level}
        started = perf_counter()

        with trace("plan.generate", metadata=metadata, request_id=request_id) as plan_trace:
            techniques: Optional[List[Technique]] = None
            failure_stage: Optional[str] = None
            if self._model_client is None:
                failure_stage = "unconfigured"
            elif not hobby_name or level not in SKILL_LEVELS:
                failure_stage = "invalid_input"
                logger.warning("Skipping model call for hobby=%r level=%r", hobby_name, level)
            else:
                try:
                    techniques = self._model_techniques(self._model_client, hobby_name, level, request_id)
                except PlanGenerationError as exc:
                    failure_stage = exc.stage
                    logger.warning(
                        "Plan generation for %s (%s) failed at %s stage: %s; using fallback plan",
                        hobby_name,
                        level,
                        exc.stage,
                        exc,
                    )
                except Exception:
                    failure_stage = "unexpected"
                    logger.exception("Unexpected error generating plan for %s (%s); using fallback plan", hobby_name, level)

            if techniques is None:
                path = "fallback"
                plan = generate_fallback_plan(hobby_name, level, id_factory=self._id_factory, now=self._clock())
                log_metric("plan.fallback.used", 1, {"stage": failure_stage or "unknown", "level": level})
            else:
                path = "model"
                now = self._clock()
                plan = LearningPlan(
                    id=self._id_factory(),
                    hobby=hobby_name,
                    level=level,
                    techniques=techniques,
                    created_at=now,
                    updated_at=now,
                )

            if self._enrich_resources:
                plan = plan.model_copy(
                    update={"techniques": [self._enrich(technique, plan.hobby, plan.level) for technique in plan.techniques]}
                )
            annotate(plan_trace, path=path, technique_count=len(plan.techniques), plan_id=plan.id)

        log_metric("plan.generate.success", 1, {"path": path, "level": plan.level})
        log_metric("plan.techniques.count", len(plan.techniques), {"path": path})
        log_latency("plan.generate.latency_ms", started, {"path": path})
        logger.info("Learning plan %s ready via %s path (%d techniques)", plan.id, path, len(plan.techniques))
        return plan

    def _model_techniques(
        self, model_client: ModelClient, hobby: str, level: str, request_id: str
    ) -> List[Technique]:
        prompt = build_prompt(hobby, level)
        with trace("plan.model_call", metadata={"hobby": hobby, "level": level}, request_id=request_id):
            raw_text = model_client.generate(prompt)
        logger.debug("Model response (%d chars): %.500s", len(raw_text), raw_text)

        items = parse_json_array(extract_json_array(raw_text))
        if not items:
            raise ParseError("Model returned an empty technique array")

        low, high = TECHNIQUE_COUNT_RANGE
        if not low <= len(items) <= high:
            logger.warning("Model returned %d techniques (expected %d-%d); keeping them all", len(items), low, high)
        return [normalize_technique(item, index, self._id_factory) for index, item in enumerate(items)]

    def _enrich(self, technique: Technique, hobby: str, level: str) -> Technique:
        try:
            videos = curated_videos(technique.search_keywords, hobby, level, self._id_factory)
            resources = comprehensive_resources(technique.title, hobby, level, self._id_factory).flattened()
        except Exception:
            logger.exception("Could not attach resources to technique %s", technique.id)
            return technique
        return technique.model_copy(update={"curated_videos": videos, "learning_resources": resources})


@lru_cache
def get_learning_plan_generator() -> LearningPlanGenerator:
    """Return the generator wired from application settings."""
    return LearningPlanGenerator(get_model_client(), enrich_resources=settings.resources_enabled)


def generate_learning_plan(hobby: str, level: str) -> LearningPlan:
    return get_learning_plan_generator().generate_learning_plan(hobby, level)
