"""
Tests for the upstream text-generation client.
"""

import json

import httpx
import pytest

from coding_assessment.core.upstream_client import UpstreamClient
from coding_assessment.errors import UpstreamUnavailableError


def _client(make_settings, handler) -> UpstreamClient:
    settings = make_settings(llm_host="https://llm.example", llm_token="test-token")
    http_client = httpx.AsyncClient(
        base_url=settings.llm_host,
        transport=httpx.MockTransport(handler),
    )
    return UpstreamClient(settings, http_client=http_client)


class TestUpstreamClient:
    def test_unconfigured_is_unavailable(self, make_settings):
        client = UpstreamClient(make_settings())

        assert not client.is_available()

    @pytest.mark.asyncio
    async def test_unconfigured_call_raises(self, make_settings):
        client = UpstreamClient(make_settings())

        with pytest.raises(UpstreamUnavailableError):
            await client.generate_questions("prompt")

    @pytest.mark.asyncio
    async def test_generation_request_shape(self, make_settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": "{}"}}]})

        client = _client(make_settings, handler)

        assert await client.generate_questions("make questions") == "{}"
        assert seen["path"] == client.settings.generation_endpoint
        assert seen["body"]["messages"] == [{"role": "user", "content": "make questions"}]
        assert seen["body"]["max_tokens"] == 8192
        assert seen["body"]["temperature"] == 0.7
        await client.close()

    @pytest.mark.asyncio
    async def test_review_uses_review_parameters(self, make_settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

        client = _client(make_settings, handler)
        await client.review_answer("review this", "q1")

        assert seen["body"]["max_tokens"] == 4096
        assert seen["body"]["temperature"] == 0.3
        await client.close()

    @pytest.mark.asyncio
    async def test_multipart_content_is_joined(self, make_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            content = [{"type": "text", "text": "hello "}, "world"]
            return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

        client = _client(make_settings, handler)

        assert await client.generate_questions("p") == "hello world"
        await client.close()

    @pytest.mark.asyncio
    async def test_http_error_raises_unavailable(self, make_settings):
        client = _client(make_settings, lambda request: httpx.Response(503))

        with pytest.raises(UpstreamUnavailableError):
            await client.review_answer("p", "q1")
        await client.close()

    @pytest.mark.asyncio
    async def test_non_json_body_raises_unavailable(self, make_settings):
        client = _client(make_settings, lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(UpstreamUnavailableError):
            await client.generate_questions("p")
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("envelope", [
        {"choices": 5},
        {"choices": {"a": 1}},
        {"choices": ["text"]},
        {"choices": [{"message": "text"}]},
        [1, 2, 3],
    ])
    async def test_malformed_envelope_raises_unavailable(self, make_settings, envelope):
        client = _client(make_settings, lambda request: httpx.Response(200, json=envelope))

        with pytest.raises(UpstreamUnavailableError):
            await client.generate_questions("p")
        await client.close()
