"""Answer evaluation providers.

Every provider exposes ``evaluate(question, answer, domain)``. Remote
providers raise ProviderError on any failure; FallbackEvaluator wraps a
remote provider and answers from the heuristic evaluator instead, so
callers never see a remote failure.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

import structlog
from fastapi import Request

from mockprep.config.settings import Settings, settings
from mockprep.integrations.claude import ClaudeClient, ClaudeError
from mockprep.integrations.ollama import OllamaClient, OllamaError
from mockprep.integrations.openai_chat import OpenAIChatClient, OpenAIChatError
from mockprep.services.heuristic import heuristic_evaluate
from mockprep.services.response_parser import parse_evaluation
from mockprep.services.scoring import EvaluationResult

logger = structlog.get_logger()

DEFAULT_DOMAIN = "General"

# Parsed feedback this short is treated as a failed evaluation
MIN_FEEDBACK_LENGTH = 10


def build_evaluation_prompt(question: str, answer: str, domain: str) -> str:
    """Prompt asking the model for a single JSON evaluation object."""
    return f"""You are an expert {domain} interview evaluator. Evaluate this answer.

Question: {question}

Answer: {answer}

Respond with ONLY a JSON object (no other text):
{{"score":7,"feedback":"Your detailed feedback here","technicalScore":7,"communicationScore":7,"idealAnswer":"The ideal answer here","strengths":["strength1","strength2"],"areasToImprove":["area1","area2"],"mistakes":["mistake1"],"lineByLineCorrection":[{{"original":"problem text","corrected":"fixed text","explanation":"why"}}]}}

Give score 1-10. Be helpful and specific."""


class ProviderError(Exception):
    """Raised when a remote provider cannot produce an evaluation."""

    pass


class EvaluationProvider(ABC):
    """Abstract base class for answer evaluators."""

    provider_name: str = "base"

    @abstractmethod
    async def evaluate(
        self,
        question: str,
        answer: str,
        domain: Optional[str] = None,
    ) -> EvaluationResult:
        """Evaluate one answer.

        Args:
            question: Interview question text
            answer: Candidate's answer text
            domain: Free-form domain label, "General" when absent

        Returns:
            EvaluationResult with scores in [1, 10]
        """
        pass


class HeuristicProvider(EvaluationProvider):
    """Local keyword/length scoring. Never fails."""

    provider_name = "heuristic"

    async def evaluate(self, question, answer, domain=None) -> EvaluationResult:
        return heuristic_evaluate(question, answer, domain or DEFAULT_DOMAIN)


class RemoteProvider(EvaluationProvider):
    """Base for providers that prompt a remote model and parse its reply."""

    async def evaluate(self, question, answer, domain=None) -> EvaluationResult:
        prompt = build_evaluation_prompt(question, answer, domain or DEFAULT_DOMAIN)
        raw_text = await self.complete(prompt)

        result = parse_evaluation(raw_text, provider=self.provider_name)
        if result is None:
            raise ProviderError(f"Unparsable response from {self.provider_name}")
        if len(result.feedback) <= MIN_FEEDBACK_LENGTH:
            raise ProviderError(f"Feedback from {self.provider_name} too short")

        return result

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """Send the prompt; raise ProviderError on any failure."""
        pass


class ClaudeProvider(RemoteProvider):
    provider_name = "claude"

    def __init__(self, client: ClaudeClient):
        self.client = client

    @classmethod
    def from_settings(cls, config: Settings) -> "ClaudeProvider":
        return cls(ClaudeClient(
            api_key=config.ANTHROPIC_API_KEY,
            model=config.CLAUDE_MODEL,
            max_tokens=config.CLAUDE_MAX_TOKENS,
            temperature=config.AI_TEMPERATURE,
            timeout=config.AI_REQUEST_TIMEOUT,
        ))

    async def complete(self, prompt: str) -> str:
        try:
            return await self.client.complete(prompt)
        except ClaudeError as e:
            raise ProviderError(str(e)) from e


class OllamaProvider(RemoteProvider):
    provider_name = "ollama"

    def __init__(self, client: OllamaClient):
        self.client = client

    @classmethod
    def from_settings(cls, config: Settings) -> "OllamaProvider":
        return cls(OllamaClient(
            base_url=config.OLLAMA_URL,
            model=config.OLLAMA_MODEL,
            temperature=config.AI_TEMPERATURE,
            max_tokens=config.AI_MAX_OUTPUT_TOKENS,
            timeout=config.AI_REQUEST_TIMEOUT,
        ))

    async def complete(self, prompt: str) -> str:
        try:
            return await self.client.generate(prompt)
        except OllamaError as e:
            raise ProviderError(str(e)) from e


class OpenAIProvider(RemoteProvider):
    provider_name = "openai"

    def __init__(self, client: OpenAIChatClient):
        self.client = client

    @classmethod
    def from_settings(cls, config: Settings) -> "OpenAIProvider":
        return cls(OpenAIChatClient(
            api_key=config.OPENAI_API_KEY,
            base_url=config.OPENAI_BASE_URL,
            model=config.OPENAI_MODEL,
            temperature=config.AI_TEMPERATURE,
            max_tokens=config.AI_MAX_OUTPUT_TOKENS,
            timeout=config.AI_REQUEST_TIMEOUT,
        ))

    async def complete(self, prompt: str) -> str:
        try:
            return await self.client.chat(prompt)
        except OpenAIChatError as e:
            raise ProviderError(str(e)) from e


class FallbackEvaluator(EvaluationProvider):
    """Runs the primary provider once; on any failure uses the fallback.

    No retries: a single failed attempt goes straight to the fallback.
    """

    def __init__(self, primary: EvaluationProvider, fallback: Optional[EvaluationProvider] = None):
        self.primary = primary
        self.fallback = fallback or HeuristicProvider()
        self.provider_name = primary.provider_name

    async def evaluate(self, question, answer, domain=None) -> EvaluationResult:
        try:
            return await self.primary.evaluate(question, answer, domain)
        except ProviderError as e:
            logger.warning(
                "Remote evaluation failed, using fallback",
                provider=self.primary.provider_name,
                fallback=self.fallback.provider_name,
                error=str(e),
            )
            return await self.fallback.evaluate(question, answer, domain)
        except Exception as e:
            logger.exception(
                "Remote evaluation crashed, using fallback",
                provider=self.primary.provider_name,
                fallback=self.fallback.provider_name,
                error=str(e),
            )
            return await self.fallback.evaluate(question, answer, domain)


REMOTE_PROVIDERS: Dict[str, Callable[[Settings], RemoteProvider]] = {
    "claude": ClaudeProvider.from_settings,
    "ollama": OllamaProvider.from_settings,
    "openai": OpenAIProvider.from_settings,
}

PROVIDER_ALIASES = {
    "mock": "heuristic",
    "local": "heuristic",
    "anthropic": "claude",
}


def build_evaluator(config: Settings) -> EvaluationProvider:
    """Build the configured evaluator once at process start."""
    name = (config.AI_PROVIDER or "heuristic").strip().lower()
    name = PROVIDER_ALIASES.get(name, name)

    heuristic = HeuristicProvider()
    if name == "heuristic":
        logger.info("Using AI provider", provider="heuristic")
        return heuristic

    factory = REMOTE_PROVIDERS.get(name)
    if factory is None:
        logger.warning("Unknown AI provider, using heuristic", provider=name)
        return heuristic

    logger.info("Using AI provider", provider=name, fallback="heuristic")
    return FallbackEvaluator(factory(config), heuristic)


def get_evaluator(request: Request) -> EvaluationProvider:
    """Dependency returning the evaluator built at startup."""
    evaluator = getattr(request.app.state, "evaluator", None)
    if evaluator is None:
        evaluator = build_evaluator(settings)
        request.app.state.evaluator = evaluator
    return evaluator
