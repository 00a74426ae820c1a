import logging
from typing import Optional

from openai import OpenAI

from journal_coach.core.config import (
    GENERATION_API_KEY,
    GENERATION_BASE_URL,
    GENERATION_MODEL,
    GENERATION_TIMEOUT_SECONDS,
)
from journal_coach.core.errors import ExternalServiceUnavailable
from journal_coach.coaching.prompts.coaching_prompt_templates import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class TextGenerator:
    """Single-shot chat completion against an OpenAI-compatible endpoint.

    Every failure, including a missing API key or an empty answer, is raised
    as ExternalServiceUnavailable. Calls are never retried.
    """

    def __init__(
        self,
        api_key: Optional[str] = GENERATION_API_KEY,
        base_url: Optional[str] = GENERATION_BASE_URL,
        model: str = GENERATION_MODEL,
        timeout: float = GENERATION_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.timeout = timeout
        self._client: Optional[OpenAI] = None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def generate(self, prompt: str, *, max_tokens: int = 800) -> str:
        if not self.api_key:
            raise ExternalServiceUnavailable("Generation API key is not configured")

        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=max_tokens,
                temperature=0.7,
            )
            text = (resp.choices[0].message.content or "").strip()
        except Exception as e:
            logger.warning(f"Text generation failed ({self.model}): {e}")
            raise ExternalServiceUnavailable(str(e)) from e

        if not text:
            raise ExternalServiceUnavailable("Empty response from generation service")
        return text
