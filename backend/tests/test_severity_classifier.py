"""Tests for the OpenRouter severity classifier."""
import asyncio
import json
import uuid
from datetime import timedelta

import httpx
import pytest

from app.constants import CriticalityLevel, EventType
from app.models import Event
from app.services.severity_classifier import SYSTEM_PROMPT, SeverityClassifier
from conftest import NOW


def _event(type=EventType.ERROR, name="TypeError", log="x is undefined", stack_trace=None, offset=0):
    return Event(
        id=uuid.uuid4(),
        session_id=uuid.uuid4(),
        type=type,
        name=name,
        log=log,
        stack_trace=stack_trace,
        url="https://shop.test/cart",
        element=None,
        timestamp=NOW + timedelta(seconds=offset),
    )


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _classifier(handler, **kwargs):
    return SeverityClassifier(
        api_key=kwargs.pop("api_key", "secret"),
        model="test/model",
        base_url="https://router.test/api/v1",
        timeout=5,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestRequest:
    @pytest.mark.asyncio
    async def test_posts_chat_completion_with_bearer_token(self):
        captured = {}

        def handler(request):
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion("HIGH"))

        level = await _classifier(handler).classify([_event(), _event(EventType.ACTION, name="click", offset=1)])

        assert level == CriticalityLevel.HIGH
        assert captured["url"] == "https://router.test/api/v1/chat/completions"
        assert captured["auth"] == "Bearer secret"
        body = captured["body"]
        assert body["model"] == "test/model"
        assert body["reasoning"] == {"enabled": True}
        assert [m["role"] for m in body["messages"]] == ["system", "user"]
        assert body["messages"][0]["content"] == SYSTEM_PROMPT
        user_prompt = body["messages"][1]["content"]
        assert user_prompt.startswith("Session events:")
        assert user_prompt.count("---") == 2
        assert "name: TypeError" in user_prompt
        assert user_prompt.rstrip().endswith("Return the incident criticality level.")

    def test_long_fields_are_capped_in_prompt(self):
        classifier = _classifier(lambda request: httpx.Response(200))
        prompt = classifier.build_user_prompt([_event(log="a" * 30_000, stack_trace="b" * 25_000)])

        assert "a" * 20_000 in prompt
        assert "a" * 20_001 not in prompt
        assert "b" * 20_001 not in prompt

    @pytest.mark.asyncio
    async def test_missing_api_key_raises(self):
        classifier = _classifier(lambda request: httpx.Response(200, json=_completion("LOW")), api_key="")
        with pytest.raises(ValueError):
            await classifier.classify([_event()])


class TestResponseParsing:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("content, expected", [
        ("LOW", CriticalityLevel.LOW),
        ("  critical\n", CriticalityLevel.CRITICAL),
        ("Medium", CriticalityLevel.MEDIUM),
        ("UNKNOWN", CriticalityLevel.MEDIUM),
        ("It looks HIGH to me", CriticalityLevel.MEDIUM),
        ("", CriticalityLevel.MEDIUM),
    ])
    async def test_content_mapping(self, content, expected):
        classifier = _classifier(lambda request: httpx.Response(200, json=_completion(content)))
        assert await classifier.classify([_event()]) == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [123, ["HIGH"], {"text": "HIGH"}])
    async def test_non_text_content_falls_back_to_medium(self, content):
        classifier = _classifier(lambda request: httpx.Response(200, json=_completion(content)))
        assert await classifier.classify([_event()]) == CriticalityLevel.MEDIUM

    @pytest.mark.asyncio
    async def test_no_choices_falls_back_to_medium(self):
        classifier = _classifier(lambda request: httpx.Response(200, json={"choices": []}))
        assert await classifier.classify([_event()]) == CriticalityLevel.MEDIUM

    @pytest.mark.asyncio
    async def test_null_content_falls_back_to_medium(self):
        classifier = _classifier(lambda request: httpx.Response(200, json=_completion(None)))
        assert await classifier.classify([_event()]) == CriticalityLevel.MEDIUM

    @pytest.mark.asyncio
    async def test_http_error_falls_back_to_medium(self):
        classifier = _classifier(lambda request: httpx.Response(503, text="overloaded"))
        assert await classifier.classify([_event()]) == CriticalityLevel.MEDIUM

    @pytest.mark.asyncio
    async def test_transport_error_falls_back_to_medium(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        classifier = _classifier(handler)
        assert await classifier.classify([_event()]) == CriticalityLevel.MEDIUM

    @pytest.mark.asyncio
    async def test_malformed_body_falls_back_to_medium(self):
        classifier = _classifier(lambda request: httpx.Response(200, text="not json"))
        assert await classifier.classify([_event()]) == CriticalityLevel.MEDIUM

    @pytest.mark.asyncio
    async def test_slow_response_times_out_to_medium(self):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200, json=_completion("CRITICAL"))

        classifier = _classifier(handler)
        classifier.timeout = 0.2

        assert await classifier.classify([_event()]) == CriticalityLevel.MEDIUM
