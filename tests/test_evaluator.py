import asyncio
import json
from types import SimpleNamespace

import anthropic
import httpx

from mockprep.config.settings import Settings
from mockprep.integrations.claude import ClaudeClient
from mockprep.integrations.ollama import OllamaClient
from mockprep.integrations.openai_chat import OpenAIChatClient
from mockprep.services.evaluator import (
    ClaudeProvider,
    FallbackEvaluator,
    HeuristicProvider,
    OllamaProvider,
    OpenAIProvider,
    build_evaluator,
    build_evaluation_prompt,
)

QUESTION = "What is a HashMap?"
ANSWER = "It maps keys to values using hashing."

GOOD_REPLY = json.dumps({
    "score": 8,
    "feedback": "Accurate and concise explanation of hashing.",
    "technicalScore": 8.5,
    "communicationScore": 7,
    "idealAnswer": "A HashMap stores key/value pairs in buckets.",
    "strengths": ["Correct definition"],
    "areasToImprove": ["Mention collisions"],
    "mistakes": [],
    "lineByLineCorrection": [],
})


def run(coro):
    return asyncio.run(coro)


def ollama_provider(handler) -> FallbackEvaluator:
    client = OllamaClient(
        base_url="http://ollama.test",
        model="llama3.2:1b",
        transport=httpx.MockTransport(handler),
    )
    return FallbackEvaluator(OllamaProvider(client))


def openai_provider(handler, api_key="sk-test") -> FallbackEvaluator:
    client = OpenAIChatClient(
        api_key=api_key,
        base_url="https://llm.test/v1",
        model="gpt-3.5-turbo",
        transport=httpx.MockTransport(handler),
    )
    return FallbackEvaluator(OpenAIProvider(client))


class FakeMessages:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(text=self.reply)])


def test_prompt_contains_question_answer_and_domain():
    prompt = build_evaluation_prompt(QUESTION, ANSWER, "Java")

    assert QUESTION in prompt
    assert ANSWER in prompt
    assert "expert Java interview evaluator" in prompt
    assert '"lineByLineCorrection"' in prompt


def test_heuristic_provider_defaults_domain():
    result = run(HeuristicProvider().evaluate(QUESTION, ANSWER))

    assert result.provider == "heuristic"
    assert "General" in result.ideal_answer


def test_ollama_success_is_parsed():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert request.url.path == "/api/generate"
        assert body["stream"] is False
        assert body["options"]["num_predict"] == 1500
        return httpx.Response(200, json={"response": f"```json\n{GOOD_REPLY}\n```"})

    result = run(ollama_provider(handler).evaluate(QUESTION, ANSWER, "Java"))

    assert result.provider == "ollama"
    assert result.score == 8.0
    assert result.technical_score == 8.5
    assert result.strengths == ["Correct definition"]


def test_ollama_error_status_falls_back_to_heuristic():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="model crashed")

    result = run(ollama_provider(handler).evaluate(QUESTION, ANSWER, "Java"))

    assert result.provider == "heuristic"
    assert 1.0 <= result.score <= 10.0


def test_ollama_unreachable_falls_back_to_heuristic():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = run(ollama_provider(handler).evaluate(QUESTION, ANSWER))

    assert result.provider == "heuristic"


def test_unparsable_reply_falls_back_to_heuristic():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"response": "Sorry, I can't help with that."})

    result = run(ollama_provider(handler).evaluate(QUESTION, ANSWER))

    assert result.provider == "heuristic"


def test_short_feedback_falls_back_to_heuristic():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"response": '{"score": 9, "feedback": "Good."}'})

    result = run(ollama_provider(handler).evaluate(QUESTION, ANSWER))

    assert result.provider == "heuristic"


def test_openai_success_sends_bearer_key():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        return httpx.Response(200, json={"choices": [{"message": {"content": GOOD_REPLY}}]})

    result = run(openai_provider(handler).evaluate(QUESTION, ANSWER, "Java"))

    assert result.provider == "openai"
    assert result.communication_score == 7.0


def test_openai_missing_key_falls_back_without_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    result = run(openai_provider(handler, api_key=None).evaluate(QUESTION, ANSWER))

    assert result.provider == "heuristic"
    assert calls == []


def test_openai_malformed_body_falls_back():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": []})

    result = run(openai_provider(handler).evaluate(QUESTION, ANSWER))

    assert result.provider == "heuristic"


def test_claude_success_with_stubbed_client():
    messages = FakeMessages(reply=f"Here you go:\n{GOOD_REPLY}")
    client = ClaudeClient(api_key=None, model="claude-test", client=SimpleNamespace(messages=messages))

    result = run(FallbackEvaluator(ClaudeProvider(client)).evaluate(QUESTION, ANSWER, "Java"))

    assert result.provider == "claude"
    assert result.score == 8.0
    assert messages.calls[0]["model"] == "claude-test"
    assert messages.calls[0]["messages"][0]["role"] == "user"


def test_claude_api_error_falls_back():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    messages = FakeMessages(error=anthropic.APIConnectionError(request=request))
    client = ClaudeClient(api_key="key", model="claude-test", client=SimpleNamespace(messages=messages))

    result = run(FallbackEvaluator(ClaudeProvider(client)).evaluate(QUESTION, ANSWER))

    assert result.provider == "heuristic"


def test_claude_missing_key_falls_back():
    client = ClaudeClient(api_key=None, model="claude-test")

    result = run(FallbackEvaluator(ClaudeProvider(client)).evaluate(QUESTION, ANSWER))

    assert result.provider == "heuristic"


def test_build_evaluator_selects_provider():
    assert isinstance(build_evaluator(Settings(AI_PROVIDER="heuristic")), HeuristicProvider)
    assert isinstance(build_evaluator(Settings(AI_PROVIDER="mock")), HeuristicProvider)
    assert isinstance(build_evaluator(Settings(AI_PROVIDER="unknown")), HeuristicProvider)

    claude = build_evaluator(Settings(AI_PROVIDER="anthropic"))
    assert isinstance(claude, FallbackEvaluator)
    assert isinstance(claude.primary, ClaudeProvider)

    ollama = build_evaluator(Settings(AI_PROVIDER="Ollama"))
    assert isinstance(ollama.primary, OllamaProvider)
    assert ollama.primary.client.model == "llama3.2:1b"


def test_claude_reply_without_text_block_falls_back():
    class ThinkingOnly:
        async def create(self, **kwargs):
            return SimpleNamespace(content=[SimpleNamespace(type="thinking")])

    messages = ThinkingOnly()
    client = ClaudeClient(api_key="key", model="claude-test", client=SimpleNamespace(messages=messages))

    result = run(FallbackEvaluator(ClaudeProvider(client)).evaluate(QUESTION, ANSWER))

    assert result.provider == "heuristic"


def test_unexpected_exception_falls_back():
    class BrokenProvider(HeuristicProvider):
        provider_name = "broken"

        async def evaluate(self, question, answer, domain=None):
            raise TypeError("unexpected reply shape")

    result = run(FallbackEvaluator(BrokenProvider()).evaluate(QUESTION, ANSWER, "Java"))

    assert result.provider == "heuristic"
    assert 1.0 <= result.score <= 10.0
