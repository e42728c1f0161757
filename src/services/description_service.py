from __future__ import annotations

import logging
from typing import Protocol

from config import config

from .gemini_client import GeminiClient, GenerativeAPIError

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "Great condition vehicle, well maintained. Contact for details."


class TextGenerator(Protocol):
    def generate_text(self, prompt: str) -> str: ...


class DescriptionService:
    """Sales copy for listings; never raises and never blocks on retries."""

    def __init__(self, generator: TextGenerator | None) -> None:
        self.generator = generator

    def produce_description(self, make: str, model: str, year: int, condition: str) -> str:
        if self.generator is None:
            logger.warning("Text generation is not configured, using fallback description")
            return FALLBACK_DESCRIPTION

        prompt = (
            "Write a short, catchy, sales-oriented description (max 50 words) for a used vehicle. "
            f"Details: {year} {make} {model}. Condition: {condition}. "
            "Highlight reliability and style. Do not use hashtags."
        )
        try:
            return self.generator.generate_text(prompt)
        except GenerativeAPIError as exc:
            logger.warning("Description generation failed for %s %s %s: %s", year, make, model, exc)
            return FALLBACK_DESCRIPTION
        except Exception:
            # Pluggable generators may fail in arbitrary ways; listings still need text.
            logger.warning("Description generator crashed for %s %s %s", year, make, model, exc_info=True)
            return FALLBACK_DESCRIPTION


def build_default_service() -> DescriptionService:
    settings = config()
    if not settings.gemini_api_key:
        return DescriptionService(generator=None)
    client = GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=settings.gemini_timeout_seconds,
    )
    return DescriptionService(generator=client)


__all__ = ["DescriptionService", "FALLBACK_DESCRIPTION", "TextGenerator", "build_default_service"]
