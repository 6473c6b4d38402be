"""
OpenAI chat completion generator
"""
import os
from typing import Dict, Any, Optional

from loguru import logger
from openai import AsyncOpenAI, OpenAIError

from ...errors import GenerationError
from ..base import GenerationRequest, ResponseGenerator
from .prompts import build_messages


class OpenAIResponseGenerator(ResponseGenerator):
    """Generates persona and host lines with the OpenAI chat API

    Config keys: model, temperature, max_tokens, timeout, api_key
    """

    def __init__(self, config: Dict[str, Any], client: Optional[AsyncOpenAI] = None):
        super().__init__(config)

        self.model = config.get('model', 'gpt-4o-mini')
        self.temperature = float(config.get('temperature', 0.8))
        self.max_tokens = int(config.get('max_tokens', 150))

        if client is None:
            api_key = config.get('api_key') or os.getenv("OPENAI_API_KEY")
            if not api_key:
                raise ValueError("OPENAI_API_KEY not found in environment")
            client = AsyncOpenAI(api_key=api_key, timeout=float(config.get('timeout', 15.0)))
        self.client = client

    async def generate(self, request: GenerationRequest) -> str:
        messages = build_messages(request)

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens
            )
        except OpenAIError as e:
            raise GenerationError(f"OpenAI request failed: {e}", {"model": self.model}) from e

        result = response.choices[0].message.content if response.choices else None
        if not result or not result.strip():
            logger.warning(f"Empty response from {self.model}")
            raise GenerationError("Empty response from OpenAI", {"model": self.model})

        return result.strip().strip('"')

    def get_model_name(self) -> str:
        return self.model
