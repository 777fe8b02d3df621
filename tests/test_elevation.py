"""Tests for the elevation lookup and its fallback."""

import httpx
import pytest

from py_stenaldern.core.elevation import (
    DEFAULT_ELEVATION,
    ELEVATION_ESTIMATES,
    estimate_elevation,
    fetch_elevation,
    lookup_elevation,
)
from py_stenaldern.core.geology import analyze_location
from py_stenaldern.core.uplift import Region

STOCKHOLM = (59.3293, 18.0686)


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestEstimate:
    """Test the static regional estimate."""

    def test_every_region_has_estimate(self):
        assert set(ELEVATION_ESTIMATES) == set(Region)

    def test_stockholm(self):
        assert estimate_elevation(*STOCKHOLM) == 15.0

    def test_default(self):
        assert DEFAULT_ELEVATION == 50.0


class TestLookup:
    """Test the elevation service call."""

    @pytest.mark.asyncio
    async def test_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["query"] = request.url.params["locations"]
            return httpx.Response(200, json={"results": [{"latitude": 59.3, "longitude": 18.0, "elevation": 42}]})

        async with mock_client(handler) as client:
            result = await lookup_elevation(59.3, 18.0, client)

        assert result.ok
        assert result.elevation == 42.0
        assert seen["query"] == "59.3,18.0"

    @pytest.mark.asyncio
    async def test_server_error(self):
        async with mock_client(lambda request: httpx.Response(503)) as client:
            result = await lookup_elevation(*STOCKHOLM, client)

        assert not result.ok
        assert "unavailable" in result.error

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        async with mock_client(lambda request: httpx.Response(200, json={"results": []})) as client:
            result = await lookup_elevation(*STOCKHOLM, client)

        assert not result.ok
        assert "malformed" in result.error


class TestFetchElevation:
    """Test that failures fall back to the regional estimate."""

    @pytest.mark.asyncio
    async def test_returns_service_value(self):
        async with mock_client(lambda request: httpx.Response(200, json={"results": [{"elevation": 28.5}]})) as client:
            assert await fetch_elevation(*STOCKHOLM, client) == 28.5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(500),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"results": [{"elevation": None}]}),
        httpx.Response(200, json={}),
        httpx.Response(200, text='{"results": [{"elevation": NaN}]}'),
        httpx.Response(200, text='{"results": [{"elevation": Infinity}]}'),
    ])
    async def test_falls_back_on_bad_response(self, response):
        async with mock_client(lambda request: response) as client:
            assert await fetch_elevation(*STOCKHOLM, client) == 15.0

    @pytest.mark.asyncio
    async def test_falls_back_on_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_client(handler) as client:
            assert await fetch_elevation(*STOCKHOLM, client) == 15.0

    @pytest.mark.asyncio
    async def test_non_finite_elevation_never_reaches_geology(self):
        body = '{"results": [{"elevation": NaN}]}'
        async with mock_client(lambda request: httpx.Response(200, text=body)) as client:
            analysis = await analyze_location(*STOCKHOLM, "boreal", client)

        assert analysis.elevation == 15.0
        assert analysis.sea_status.uplift_meters >= 0
