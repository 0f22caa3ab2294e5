"""LLM Client Package"""

from smartcommit.llm.base import LLMClient, GenerateResult, Ok, AuthError, UpstreamError
from smartcommit.llm.gemini import GeminiClient
from smartcommit.llm.schema import Part, Content, GenerateRequest, Candidate, GenerateResponse


def get_client(config=None) -> LLMClient:
    """Build the Gemini client from a Config (or defaults)."""
    if config is None:
        return GeminiClient()
    return GeminiClient(
        base_url=config.api_base_url,
        api_version=config.api_version,
        timeout=config.timeout,
    )


__all__ = [
    "LLMClient",
    "GenerateResult",
    "Ok",
    "AuthError",
    "UpstreamError",
    "GeminiClient",
    "Part",
    "Content",
    "GenerateRequest",
    "Candidate",
    "GenerateResponse",
    "get_client",
]
