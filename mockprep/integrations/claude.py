"""Claude AI client for answer evaluation."""

from typing import Optional

import structlog
from anthropic import AsyncAnthropic, APIError

logger = structlog.get_logger()


class ClaudeClient:
    """Thin async wrapper over the Anthropic Messages API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        max_tokens: int = 1500,
        temperature: float = 0.7,
        timeout: Optional[float] = None,
        client: Optional[AsyncAnthropic] = None,
    ):
        """Initialize Claude client.

        Args:
            api_key: Anthropic API key; calls fail with ClaudeError when missing
            model: Claude model identifier
            max_tokens: Output token budget per call
            temperature: Sampling temperature
            timeout: Request timeout in seconds (SDK default when None)
            client: Pre-built SDK client, used by tests
        """
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> AsyncAnthropic:
        if self._client is None:
            if not self.api_key:
                raise ClaudeError("ANTHROPIC_API_KEY is not configured")
            kwargs = {"api_key": self.api_key}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = AsyncAnthropic(**kwargs)
        return self._client

    async def complete(self, prompt: str, system: Optional[str] = None) -> str:
        """Send a single-turn prompt and return the reply text.

        Raises:
            ClaudeError: On missing credentials, API errors or an empty reply
        """
        logger.debug("Sending evaluation prompt to Claude", model=self.model)

        request = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system

        try:
            response = await self.client.messages.create(**request)
        except APIError as e:
            logger.error("Claude API error during evaluation", error=str(e))
            raise ClaudeError(f"Answer evaluation failed: {str(e)}") from e

        if not response.content:
            raise ClaudeError("Claude returned an empty response")

        text = getattr(response.content[0], "text", None)
        if not isinstance(text, str):
            raise ClaudeError("Claude response has no text block")

        return text


class ClaudeError(Exception):
    """Raised when Claude API calls fail."""

    pass
