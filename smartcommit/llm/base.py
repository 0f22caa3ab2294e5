"""LLM Base Classes and Result Types"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Ok:
    """Generation succeeded. Text may be empty if the model returned nothing."""
    text: str


@dataclass(frozen=True)
class AuthError:
    """No usable API key. Raised before any request is sent."""
    message: str = "Gemini API key is not configured"


@dataclass(frozen=True)
class UpstreamError:
    """The endpoint answered with a non-2xx status, or never answered.

    status is 0 when the request failed before a response arrived.
    """
    status: int
    body: str

    @property
    def message(self) -> str:
        if self.status:
            return f"Gemini API error: {self.status} {self.body}".rstrip()
        return f"Gemini request failed: {self.body}"


GenerateResult = Union[Ok, AuthError, UpstreamError]


class LLMClient(ABC):
    """Abstract base for stateless text-generation clients."""

    @abstractmethod
    def generate(self, api_key: str | None, model: str, prompt: str) -> GenerateResult:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
