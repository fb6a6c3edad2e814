"""OpenAI-compatible chat client used as the article generation backend."""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from newsdesk.core.config import PromptConfig
from newsdesk.utils.exceptions import AIServiceError
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)


class OpenAIClient:
    """Send article text to an OpenAI-compatible endpoint, return the raw reply.

    Implements the AskClient protocol. The reply is returned as text and is
    not parsed here; a reply cut off by the token limit is passed through
    so the caller can recognise the truncation.
    """

    def __init__(
        self,
        api_key: str,
        prompt: PromptConfig,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
        timeout: float = 120.0,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: API key.
            prompt: Prompt template shared by all requests.
            model: Model to use.
            base_url: Endpoint for OpenAI-compatible servers (None = OpenAI).
            temperature: Sampling temperature (0.0-2.0).
            max_tokens: Maximum tokens in the response.
            timeout: Request timeout in seconds.
        """
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self.prompt = prompt
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._system_message = self._build_system_message(prompt)

        logger.info(
            "openai_client_initialized",
            model=model,
            base_url=base_url or "default",
        )

    def __repr__(self) -> str:
        return f"OpenAIClient(model={self.model!r})"

    async def ask(self, text: str) -> str:
        """Ask the model to turn one article into a JSON record.

        Args:
            text: Article content.

        Returns:
            Response text as produced by the model.

        Raises:
            AIServiceError: If the API call fails or the reply is empty.
        """
        started_at = datetime.now()

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": self.build_messages(text),
            "temperature": self.temperature,
            "response_format": {"type": "json_object"},
        }
        if self.max_tokens:
            params["max_tokens"] = self.max_tokens

        try:
            response = await self.client.chat.completions.create(**params)
        except Exception as e:
            logger.warning(
                "openai_request_failed",
                model=self.model,
                elapsed_ms=self._elapsed_ms(started_at),
                error=str(e),
            )
            raise AIServiceError(f"OpenAI API call failed: {e}") from e

        if not response.choices:
            raise AIServiceError("No choices in response")

        choice = response.choices[0]
        content = choice.message.content
        if not content or not content.strip():
            raise AIServiceError("Empty response from OpenAI API")

        if choice.finish_reason == "length":
            logger.warning(
                "openai_response_truncated",
                model=self.model,
                response_chars=len(content),
            )

        usage = response.usage
        logger.info(
            "openai_response_success",
            model=self.model,
            elapsed_ms=self._elapsed_ms(started_at),
            input_tokens=usage.prompt_tokens if usage else None,
            output_tokens=usage.completion_tokens if usage else None,
        )

        return content

    def build_messages(self, text: str) -> List[Dict[str, str]]:
        """Build the chat messages for one article."""
        return [
            {"role": "system", "content": self._system_message},
            {
                "role": "user",
                "content": self.prompt.user_prompt_template.replace("{content}", text),
            },
        ]

    @staticmethod
    def _build_system_message(prompt: PromptConfig) -> str:
        if not prompt.output_schema:
            return prompt.system_prompt
        schema = json.dumps(prompt.output_schema, indent=2)
        return f"{prompt.system_prompt.rstrip()}\n\nJSON schema:\n{schema}"

    @staticmethod
    def _elapsed_ms(started_at: datetime) -> int:
        return int((datetime.now() - started_at).total_seconds() * 1000)
