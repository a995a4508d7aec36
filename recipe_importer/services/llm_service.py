"""
Language-model completion service.

The assisted extraction layer is the only caller. It hands over an ordered
list of role-tagged messages and gets a single text completion back.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from openai import AsyncOpenAI

from ..config.settings import settings

logger = logging.getLogger(__name__)

Message = Dict[str, str]  # {"role": "system" | "user" | "assistant", "content": "..."}


class CompletionService(ABC):
    """Service boundary for chat-style text completion"""

    @abstractmethod
    async def complete(
        self,
        messages: List[Message],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        pass


class OpenAICompletionService(CompletionService):
    """Chat completions through the OpenAI API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        fallback_model: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize the completion service

        Args:
            api_key: OpenAI API key (if not provided, settings/env var is used)
            model: Primary model name
            fallback_model: Model to ask once if the primary call fails
            client: Preconfigured AsyncOpenAI client
        """
        api_key = api_key or settings.openai_api_key
        # Single in-flight request per call; the SDK's own retries are disabled
        self.client = client or (
            AsyncOpenAI(api_key=api_key, max_retries=0) if api_key else AsyncOpenAI(max_retries=0)
        )
        self.model = model or settings.openai_model
        self.fallback_model = fallback_model if fallback_model is not None else settings.openai_model_fallback

    async def _create(self, model: str, messages: List[Message], temperature: float, max_tokens: int) -> str:
        response = await self.client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content or ""

    async def complete(
        self,
        messages: List[Message],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        temperature = settings.assisted_temperature if temperature is None else temperature
        max_tokens = max_tokens or settings.assisted_max_tokens

        try:
            return await self._create(self.model, messages, temperature, max_tokens)
        except Exception as e:
            if not self.fallback_model or self.fallback_model == self.model:
                raise
            logger.warning(f"Completion with {self.model} failed ({e}); trying {self.fallback_model}")
            return await self._create(self.fallback_model, messages, temperature, max_tokens)


_completion_service: Optional[CompletionService] = None


def get_completion_service() -> CompletionService:
    """Shared OpenAI-backed service, created on first use"""
    global _completion_service
    if _completion_service is None:
        _completion_service = OpenAICompletionService()
    return _completion_service
