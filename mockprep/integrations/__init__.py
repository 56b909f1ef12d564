"""Clients for the remote models that can evaluate answers."""

from .claude import ClaudeClient, ClaudeError
from .ollama import OllamaClient, OllamaError
from .openai_chat import OpenAIChatClient, OpenAIChatError

__all__ = [
    "ClaudeClient",
    "ClaudeError",
    "OllamaClient",
    "OllamaError",
    "OpenAIChatClient",
    "OpenAIChatError",
]
