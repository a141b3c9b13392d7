"""Single-shot text generation against an OpenAI-compatible hosted model."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

import openai

from hobbypath.core.config import settings
from hobbypath.services.plan_generation.errors import EnvelopeError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationConfig:
    temperature: float = 0.8
    top_p: float = 0.9
    top_k: Optional[int] = 40
    max_output_tokens: int = 4000

    def request_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_output_tokens,
        }
        # top_k is not part of the chat-completions schema; the endpoint reads it from the raw body.
        if self.top_k is not None:
            options["extra_body"] = {"top_k": self.top_k}
        return options


class ModelClient:
    """Wraps an ``openai.OpenAI`` client and maps its failures onto the plan error taxonomy."""

    def __init__(self, client: Any, *, model: str, config: GenerationConfig | None = None) -> None:
        self._client = client
        self.model = model
        self.config = config or GenerationConfig()

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` once and return the generated text."""
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                **self.config.request_options(),
            )
        except openai.APIResponseValidationError as exc:
            raise EnvelopeError(f"Model response failed validation: {exc}") from exc
        except openai.APIStatusError as exc:
            raise TransportError(
                f"Model endpoint returned HTTP {exc.status_code}",
                status_code=exc.status_code,
            ) from exc
        except openai.APIError as exc:
            raise TransportError(f"Model request failed: {exc}") from exc

        return _completion_text(completion)


def _completion_text(completion: Any) -> str:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        raise EnvelopeError("Model response contained no choices")
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str) or not content.strip():
        raise EnvelopeError("Model response contained no text content")
    return content


@lru_cache
def get_model_client() -> Optional[ModelClient]:
    """Build the configured client, or return ``None`` when no API key is set."""
    if not settings.llm_api_key:
        logger.warning("LLM_API_KEY missing; learning plans will use authored fallbacks.")
        return None
    client = openai.OpenAI(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
        timeout=settings.llm_timeout_seconds,
        max_retries=0,
    )
    config = GenerationConfig(
        temperature=settings.llm_temperature,
        top_p=settings.llm_top_p,
        top_k=settings.llm_top_k,
        max_output_tokens=settings.llm_max_output_tokens,
    )
    logger.info("Model client ready (model=%s).", settings.llm_model)
    return ModelClient(client, model=settings.llm_model, config=config)
