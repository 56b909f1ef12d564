"""Ollama (local LLM) client for answer evaluation."""

from typing import Optional

import httpx
import structlog

logger = structlog.get_logger()


class OllamaClient:
    """Calls Ollama's non-streaming generate endpoint."""

    def __init__(
        self,
        base_url: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1500,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.transport = transport

    async def generate(self, prompt: str) -> str:
        """Return the generated text for a prompt.

        Raises:
            OllamaError: On transport failure, non-2xx status or a malformed body
        """
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "num_predict": self.max_tokens,
            },
        }

        logger.debug("Sending evaluation prompt to Ollama", model=self.model)

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.post("/api/generate", json=payload)
        except httpx.HTTPError as e:
            logger.error("Ollama request failed", error=str(e))
            raise OllamaError(f"Ollama request failed: {str(e)}") from e

        if not response.is_success:
            logger.error("Ollama API error", status_code=response.status_code)
            raise OllamaError(f"Ollama returned status {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise OllamaError("Ollama returned invalid JSON") from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise OllamaError("Ollama response has no text")

        return text


class OllamaError(Exception):
    """Raised when Ollama calls fail."""

    pass
