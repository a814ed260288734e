"""Tests for the forecast API client with mocked httpx."""

import asyncio
import json

import httpx
import pytest
import respx

from weatherfeed.ingest.forecast_client import ForecastClient
from factories import make_forecast_response

URL = "https://test-forecast.example.com/prod/forecast"


@pytest.fixture
def client() -> ForecastClient:
    return ForecastClient(url=URL, timeout=5.0)


async def _fetch(client: ForecastClient, lat: float, lng: float) -> dict | None:
    async with client:
        return await client.fetch_one(lat, lng)


class TestFetchOne:
    @respx.mock
    def test_success(self, client: ForecastClient):
        payload = make_forecast_response()
        respx.post(URL).mock(return_value=httpx.Response(200, json=payload))

        result = asyncio.run(_fetch(client, 39.9, 32.8))
        assert result == payload

    @respx.mock
    def test_request_body(self, client: ForecastClient):
        route = respx.post(URL).mock(
            return_value=httpx.Response(200, json=make_forecast_response())
        )

        asyncio.run(_fetch(client, 39.9, 32.8))
        assert route.called
        request = route.calls[0].request
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {
            "latitude": 39.9,
            "longitude": 32.8,
            "query": {
                "hourly": ["cape"],
                "daily": [
                    "temperature_2m_max",
                    "temperature_2m_min",
                    "wind_speed_10m_max",
                    "precipitation_sum",
                ],
            },
        }

    @respx.mock
    def test_server_error_returns_none(self, client: ForecastClient):
        route = respx.post(URL).mock(return_value=httpx.Response(502))

        assert asyncio.run(_fetch(client, 39.9, 32.8)) is None
        # No retry
        assert route.call_count == 1

    @respx.mock
    def test_transport_error_returns_none(self, client: ForecastClient):
        respx.post(URL).mock(side_effect=httpx.ConnectError("connection refused"))

        assert asyncio.run(_fetch(client, 39.9, 32.8)) is None

    @respx.mock
    def test_invalid_json_returns_none(self, client: ForecastClient):
        respx.post(URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))

        assert asyncio.run(_fetch(client, 39.9, 32.8)) is None

    @respx.mock
    def test_non_object_json_returns_none(self, client: ForecastClient):
        respx.post(URL).mock(return_value=httpx.Response(200, json=[1, 2, 3]))

        assert asyncio.run(_fetch(client, 39.9, 32.8)) is None

    @respx.mock
    def test_shared_client_not_closed(self):
        respx.post(URL).mock(
            return_value=httpx.Response(200, json=make_forecast_response())
        )

        async def run() -> bool:
            async with httpx.AsyncClient() as http:
                async with ForecastClient(url=URL, client=http) as fc:
                    await fc.fetch_one(1.0, 2.0)
                return http.is_closed

        assert asyncio.run(run()) is False
