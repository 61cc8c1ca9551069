"""Google Gemini adapter for changelog drafting."""

from typing import Any, Protocol, Self

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from google.generativeai.types import BlockedPromptException, StopCandidateException

from src.scribe.core.config import get_settings
from src.scribe.core.exceptions import (
    ConfigurationError,
    EmptyResponse,
    QuotaExceeded,
    RateLimited,
    SafetyBlocked,
    UpstreamError,
)
from src.scribe.core.logging import get_logger

logger = get_logger(__name__)


class LLMProvider(Protocol):
    """Single-shot text generation."""

    @property
    def is_configured(self) -> bool: ...

    async def generate(self, prompt: str) -> str: ...


def _finish_reason(response: Any) -> str | None:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    reason = getattr(candidates[0], "finish_reason", None)
    return getattr(reason, "name", None) or (str(reason) if reason is not None else None)


def _extract_text(response: Any) -> str:
    """Pull the text out of a Gemini response.

    Raises:
        SafetyBlocked: If the prompt or the candidate was filtered.
        EmptyResponse: If the model produced no text.
    """
    feedback = getattr(response, "prompt_feedback", None)
    if feedback is not None and getattr(feedback, "block_reason", None):
        raise SafetyBlocked()
    try:
        text = response.text
    except ValueError as e:
        # .text raises when the candidate has no parts
        if _finish_reason(response) == "SAFETY":
            raise SafetyBlocked() from e
        raise EmptyResponse() from e
    if not text or not text.strip():
        raise EmptyResponse()
    return str(text)


class GeminiProvider:
    """Gemini adapter using the google-generativeai async SDK.

    A missing API key is reported as ConfigurationError when generation is
    attempted, so the rest of the service can run without one.
    """

    def __init__(self, api_key: str | None, model: str = "gemini-1.5-flash") -> None:
        self.api_key = api_key
        self.model_name = model
        self._model: Any = None
        if api_key:
            genai.configure(api_key=api_key)
            self._model = genai.GenerativeModel(model)

    @classmethod
    def from_settings(cls) -> Self:
        settings = get_settings()
        return cls(settings.gemini_api_key, settings.gemini_model)

    @property
    def is_configured(self) -> bool:
        return self._model is not None

    async def generate(self, prompt: str) -> str:
        if self._model is None:
            raise ConfigurationError()

        try:
            response = await self._model.generate_content_async(prompt)
        except (BlockedPromptException, StopCandidateException) as e:
            raise SafetyBlocked() from e
        # ResourceExhausted subclasses TooManyRequests, so it goes first
        except google_exceptions.ResourceExhausted as e:
            logger.warning("Gemini quota exhausted", model=self.model_name)
            raise QuotaExceeded() from e
        except google_exceptions.TooManyRequests as e:
            logger.warning("Gemini rate limited", model=self.model_name)
            raise RateLimited() from e
        except (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied) as e:
            logger.error("Gemini rejected the API key", model=self.model_name)
            raise ConfigurationError("Invalid AI service configuration") from e
        except google_exceptions.InvalidArgument as e:
            if getattr(e, "reason", None) == "API_KEY_INVALID":
                logger.error("Gemini rejected the API key", model=self.model_name)
                raise ConfigurationError("Invalid AI service configuration") from e
            raise UpstreamError("AI service rejected the request") from e
        except google_exceptions.GoogleAPIError as e:
            logger.warning("Gemini request failed", model=self.model_name, error=str(e))
            raise UpstreamError("AI service request failed") from e

        return _extract_text(response)
