from __future__ import annotations

import logging

from groq import Groq, GroqError

from ..search.errors import ConfigurationError, ServiceError
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)


class RecommendationClient:
    """Thin wrapper around the Groq chat API used by the search gateway."""

    def __init__(self, config: LLMConfig = DEFAULT_LLM_CONFIG) -> None:
        if not config.api_key:
            raise ConfigurationError("GROQ_API_KEY is not set")
        self.config = config
        self._client = Groq(
            api_key=config.api_key,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )
        logger.info("Groq client initialised with model %s", config.model)

    def invoke(self, instructions: str, context: str) -> str:
        """
        Send one chat completion and return the raw reply text.

        Raises ``ServiceError`` on timeouts, connection problems and API
        errors. The reply is returned unparsed.
        """
        try:
            response = self._client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": instructions},
                    {"role": "user", "content": context},
                ],
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                response_format={"type": "json_object"},
            )
        except GroqError as exc:
            raise ServiceError(f"Groq request failed: {exc}") from exc

        if not response.choices:
            raise ServiceError("Groq returned no choices")
        return response.choices[0].message.content or ""
