"""Unit test fixtures (fakes and stubs).

Provides httpx mock transports for testing the Groq client without network
access.
"""

import json

import httpx
import pytest


def chat_completion(content, model="openai/gpt-oss-120b", finish_reason="stop"):
    """Body of a non-streamed chat completion response."""
    return {
        "id": "chatcmpl-test",
        "model": model,
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": finish_reason}],
        "usage": {"prompt_tokens": 40, "completion_tokens": 25},
    }


def sse_body(*deltas, done=True):
    """Server-sent event stream carrying one delta per event."""
    lines = []
    for delta in deltas:
        event = {"choices": [{"index": 0, "delta": {"content": delta}}]}
        lines.append(f"data: {json.dumps(event)}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines)


@pytest.fixture
def transport_factory():
    """
    Build an httpx.MockTransport from a handler and keep every request seen.

    Usage:
        transport, seen = transport_factory(lambda request: httpx.Response(200, json={...}))
    """
    def _make(handler):
        seen: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        return httpx.MockTransport(_record), seen
    return _make


@pytest.fixture
def completion_body():
    return chat_completion


@pytest.fixture
def stream_body():
    return sse_body
