from __future__ import annotations

import asyncio

import httpx

from drivelisting.adapters.http_resilience import ResilientClient
from drivelisting.config.http_resilience import RateLimit, ResilienceConfig


def _recording_transport(seen: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    return httpx.MockTransport(handler)


def test_client_applies_default_headers_and_base_url() -> None:
    seen: list[httpx.Request] = []
    config = ResilienceConfig(
        name="test",
        base_url="https://drive.test",
        default_headers={"User-Agent": "drivelisting-tests"},
    )

    async def scenario() -> httpx.Response:
        async with ResilientClient(config, transport=_recording_transport(seen)) as client:
            return await client.get("/drive/folders/abc", params={"hl": "en"})

    response = asyncio.run(scenario())

    assert response.status_code == 200
    assert str(seen[0].url) == "https://drive.test/drive/folders/abc?hl=en"
    assert seen[0].headers["User-Agent"] == "drivelisting-tests"


def test_client_without_ratelimit_has_no_limiter() -> None:
    client = ResilientClient(ResilienceConfig(name="plain"))

    assert client._limiter is None
    asyncio.run(client.aclose())


def test_client_with_ratelimit_sends_every_request() -> None:
    seen: list[httpx.Request] = []
    config = ResilienceConfig(name="limited", ratelimit=RateLimit(max_calls=100, per_seconds=1.0))

    async def scenario() -> None:
        async with ResilientClient(config, transport=_recording_transport(seen)) as client:
            assert client._limiter is not None
            await asyncio.gather(*(client.get(f"https://drive.test/{n}") for n in range(5)))

    asyncio.run(scenario())

    assert sorted(request.url.path for request in seen) == [f"/{n}" for n in range(5)]
