"""OpenAI-compatible chat completions client for answer evaluation."""

from typing import Optional

import httpx
import structlog

logger = structlog.get_logger()

SYSTEM_PROMPT = "You are an expert interview coach. Respond only with valid JSON."


class OpenAIChatClient:
    """Calls ``POST {base_url}/chat/completions``."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1500,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.transport = transport

    async def chat(self, prompt: str, system: str = SYSTEM_PROMPT) -> str:
        """Return the assistant message for a single prompt.

        Raises:
            OpenAIChatError: On missing key, transport failure, non-2xx status
                or a malformed body
        """
        if not self.api_key:
            raise OpenAIChatError("OPENAI_API_KEY is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        logger.debug("Sending evaluation prompt to chat completions", model=self.model)

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    "/chat/completions",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            logger.error("Chat completions request failed", error=str(e))
            raise OpenAIChatError(f"Chat completions request failed: {str(e)}") from e

        if not response.is_success:
            logger.error("Chat completions API error", status_code=response.status_code)
            raise OpenAIChatError(f"Chat completions returned status {response.status_code}")

        try:
            data = response.json()
            text = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise OpenAIChatError("Chat completions response has no message") from e

        if not isinstance(text, str):
            raise OpenAIChatError("Chat completions response has no message")

        return text


class OpenAIChatError(Exception):
    """Raised when chat completion calls fail."""

    pass
