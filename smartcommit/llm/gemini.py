"""Gemini LLM Client"""

import json
import logging
import socket
import urllib.error
import urllib.request

from smartcommit.llm.base import LLMClient, GenerateResult, Ok, AuthError, UpstreamError
from smartcommit.llm.schema import GenerateRequest, GenerateResponse

logger = logging.getLogger(__name__)


class GeminiClient(LLMClient):
    """Stateless client for models/{model}:generateContent.

    The key travels in the x-goog-api-key header, never in the URL.
    """

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
    DEFAULT_API_VERSION = "v1beta"
    DEFAULT_TIMEOUT = 20.0

    def __init__(
        self,
        base_url: str | None = None,
        api_version: str | None = None,
        timeout: float | None = None,
        urlopen=None,
    ):
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip('/')
        self.api_version = api_version or self.DEFAULT_API_VERSION
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self._urlopen = urlopen or urllib.request.urlopen

    @property
    def name(self) -> str:
        return f"Gemini ({self.api_version})"

    def endpoint(self, model: str) -> str:
        return f"{self.base_url}/{self.api_version}/models/{model}:generateContent"

    def build_request(self, api_key: str, model: str, prompt: str) -> urllib.request.Request:
        payload = GenerateRequest.from_prompt(prompt).to_dict()
        return urllib.request.Request(
            self.endpoint(model),
            data=json.dumps(payload).encode('utf-8'),
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": api_key,
            },
            method="POST",
        )

    def generate(self, api_key: str | None, model: str, prompt: str) -> GenerateResult:
        if not api_key or not api_key.strip():
            return AuthError()

        req = self.build_request(api_key.strip(), model, prompt)
        logger.debug("POST %s (%d prompt chars, timeout=%ss)", self.endpoint(model), len(prompt), self.timeout)

        try:
            with self._urlopen(req, timeout=self.timeout) as response:
                status = getattr(response, 'status', 200)
                raw = response.read().decode('utf-8', errors='replace')
        except urllib.error.HTTPError as e:
            body = e.read().decode('utf-8', errors='replace') if e.fp else ""
            logger.debug("Gemini returned %s", e.code)
            return UpstreamError(status=e.code, body=body)
        except urllib.error.URLError as e:
            if isinstance(e.reason, (socket.timeout, TimeoutError)):
                return UpstreamError(status=0, body=f"timed out after {self.timeout}s")
            return UpstreamError(status=0, body=str(e.reason))
        except (socket.timeout, TimeoutError):
            return UpstreamError(status=0, body=f"timed out after {self.timeout}s")
        except OSError as e:
            return UpstreamError(status=0, body=str(e))

        if not 200 <= status < 300:
            return UpstreamError(status=status, body=raw)

        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError:
            return UpstreamError(status=status, body=raw)

        return Ok(GenerateResponse.from_dict(data).first_text())
