"""
Tests for the Gemini wire models and HTTP client.

No network: the client takes a urlopen replacement.

Run with:
    pytest tests/test_gemini.py -v
"""

import io
import json
import socket
import urllib.error

import pytest

from smartcommit.llm import (
    AuthError,
    GeminiClient,
    GenerateRequest,
    GenerateResponse,
    Ok,
    UpstreamError,
)


class FakeResponse:
    def __init__(self, body, status=200):
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        self.status = status

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


class FakeOpener:
    """Records requests and replays a canned response or exception."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.requests = []
        self.timeouts = []

    def __call__(self, req, timeout=None):
        self.requests.append(req)
        self.timeouts.append(timeout)
        if self.exc is not None:
            raise self.exc
        return self.response


def _ok_body(text):
    return json.dumps({"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]})


# ---------------------------------------------------------------------------
# Wire models
# ---------------------------------------------------------------------------

class TestGenerateRequest:

    def test_single_user_turn(self):
        assert GenerateRequest.from_prompt("hello").to_dict() == {
            "contents": [{"role": "user", "parts": [{"text": "hello"}]}]
        }


class TestGenerateResponse:

    def test_first_text(self):
        data = {"candidates": [{"content": {"parts": [{"text": "world"}]}}]}
        assert GenerateResponse.from_dict(data).first_text() == "world"

    def test_no_candidates(self):
        assert GenerateResponse.from_dict({"candidates": []}).first_text() == ""

    def test_missing_everything(self):
        assert GenerateResponse.from_dict({}).first_text() == ""

    def test_candidate_without_content(self):
        assert GenerateResponse.from_dict({"candidates": [{"finishReason": "SAFETY"}]}).first_text() == ""

    def test_content_without_parts(self):
        assert GenerateResponse.from_dict({"candidates": [{"content": {"role": "model"}}]}).first_text() == ""

    def test_skips_empty_parts(self):
        data = {"candidates": [{"content": {"parts": [{"inlineData": {}}, {"text": ""}, {"text": "second"}]}}]}
        assert GenerateResponse.from_dict(data).first_text() == "second"

    def test_only_first_candidate_is_used(self):
        data = {"candidates": [{"content": {"parts": []}}, {"content": {"parts": [{"text": "other"}]}}]}
        assert GenerateResponse.from_dict(data).first_text() == ""

    def test_unknown_fields_and_nulls_ignored(self):
        data = {
            "candidates": [{"content": {"parts": [{"text": "ok", "thought": True}]}, "safetyRatings": []}],
            "usageMetadata": {"totalTokenCount": 12},
            "modelVersion": None,
        }
        assert GenerateResponse.from_dict(data).first_text() == "ok"

    @pytest.mark.parametrize("data", [None, [], "text", {"candidates": None}, {"candidates": [None]}])
    def test_wrong_shapes_do_not_raise(self, data):
        assert GenerateResponse.from_dict(data).first_text() == ""


# ---------------------------------------------------------------------------
# GeminiClient
# ---------------------------------------------------------------------------

class TestGeminiClient:

    def test_missing_key_is_auth_error_without_request(self):
        opener = FakeOpener(FakeResponse(_ok_body("x")))
        client = GeminiClient(urlopen=opener)
        assert isinstance(client.generate(None, "m", "p"), AuthError)
        assert isinstance(client.generate("  ", "m", "p"), AuthError)
        assert opener.requests == []

    def test_success(self):
        opener = FakeOpener(FakeResponse(_ok_body("feat: add foo")))
        client = GeminiClient(urlopen=opener)
        assert client.generate("secret", "gemini-2.5-flash-lite", "hello") == Ok("feat: add foo")

    def test_request_shape(self):
        opener = FakeOpener(FakeResponse(_ok_body("x")))
        client = GeminiClient(base_url="https://example.test/", api_version="v1", timeout=7, urlopen=opener)
        client.generate("secret", "my-model", "hello")

        req = opener.requests[0]
        assert req.full_url == "https://example.test/v1/models/my-model:generateContent"
        assert req.get_method() == "POST"
        assert req.get_header("X-goog-api-key") == "secret"
        assert "secret" not in req.full_url
        assert json.loads(req.data) == {"contents": [{"role": "user", "parts": [{"text": "hello"}]}]}
        assert opener.timeouts == [7]

    def test_default_timeout_is_bounded(self):
        opener = FakeOpener(FakeResponse(_ok_body("x")))
        GeminiClient(urlopen=opener).generate("k", "m", "p")
        assert 10 <= opener.timeouts[0] <= 30

    def test_empty_candidates_is_ok_empty(self):
        opener = FakeOpener(FakeResponse(json.dumps({"candidates": []})))
        assert GeminiClient(urlopen=opener).generate("k", "m", "p") == Ok("")

    def test_http_error_carries_status_and_body(self):
        exc = urllib.error.HTTPError(
            "https://example.test", 403, "Forbidden", {}, io.BytesIO(b'{"error": "denied"}')
        )
        result = GeminiClient(urlopen=FakeOpener(exc=exc)).generate("k", "m", "p")
        assert result == UpstreamError(status=403, body='{"error": "denied"}')
        assert "403" in result.message

    def test_non_2xx_response_without_exception(self):
        opener = FakeOpener(FakeResponse("moved", status=302))
        assert GeminiClient(urlopen=opener).generate("k", "m", "p") == UpstreamError(status=302, body="moved")

    def test_connection_failure(self):
        exc = urllib.error.URLError("Connection refused")
        result = GeminiClient(urlopen=FakeOpener(exc=exc)).generate("k", "m", "p")
        assert isinstance(result, UpstreamError)
        assert result.status == 0
        assert "Connection refused" in result.body

    def test_timeout(self):
        result = GeminiClient(timeout=3, urlopen=FakeOpener(exc=socket.timeout())).generate("k", "m", "p")
        assert result == UpstreamError(status=0, body="timed out after 3s")

    def test_invalid_json_body(self):
        opener = FakeOpener(FakeResponse("<html>oops</html>"))
        assert GeminiClient(urlopen=opener).generate("k", "m", "p") == UpstreamError(status=200, body="<html>oops</html>")
