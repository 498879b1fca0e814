"""Pytest configuration for orion-relay tests."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Ensure src/relay is importable
src_path = str(Path(__file__).parent.parent / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request and replays canned replies."""

    def __init__(self, status: int = 200, body=None, error: Exception = None):
        self.requests: list[httpx.Request] = []
        self.status = status
        self.body = body if body is not None else {}
        self.error = error
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status, json=self.body)
        return httpx.Response(self.status, text=self.body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last.content)


@pytest.fixture
def transport_factory():
    def _make(status: int = 200, body=None, error: Exception = None) -> RecordingTransport:
        return RecordingTransport(status=status, body=body, error=error)

    return _make


OPENAI_OK = {
    "id": "chatcmpl-1",
    "model": "gpt-4o-mini-2024-07-18",
    "choices": [
        {"index": 0, "message": {"role": "assistant", "content": "hello"}, "finish_reason": "stop"}
    ],
    "usage": {"prompt_tokens": 7, "completion_tokens": 5, "total_tokens": 12},
}

ANTHROPIC_OK = {
    "id": "msg_1",
    "type": "message",
    "role": "assistant",
    "model": "claude-3-5-sonnet-20241022",
    "content": [{"type": "text", "text": "Hello"}, {"type": "text", "text": " there"}],
    "stop_reason": "end_turn",
    "usage": {"input_tokens": 10, "output_tokens": 4},
}

GEMINI_OK = {
    "candidates": [
        {
            "content": {"role": "model", "parts": [{"text": "Hi from Gemini"}]},
            "finishReason": "STOP",
        }
    ],
    "usageMetadata": {"promptTokenCount": 6, "candidatesTokenCount": 4, "totalTokenCount": 10},
    "modelVersion": "gemini-2.5-flash",
}


@pytest.fixture
def openai_ok():
    return json.loads(json.dumps(OPENAI_OK))


@pytest.fixture
def anthropic_ok():
    return json.loads(json.dumps(ANTHROPIC_OK))


@pytest.fixture
def gemini_ok():
    return json.loads(json.dumps(GEMINI_OK))
