"""Tests for the HTTP API routes with overridden services."""

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from geoweather.api import app, get_config, get_resolver, get_retriever
from geoweather.errors import ErrorKind, ForecastError, ResolutionError
from geoweather.models.common import Coordinates
from geoweather.models.forecast import ForecastPeriod
from geoweather.models.geocode import AddressMatch, Geography

ESB = Coordinates(lat=40.748817, lon=-73.985428)


class FakeResolver:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.queries: list[str] = []

    async def resolve_location(self, text: str) -> Coordinates:
        self.queries.append(text)
        if self.error:
            raise self.error
        return ESB

    async def find_matches(self, address: str) -> list[AddressMatch]:
        self.queries.append(address)
        if self.error:
            raise self.error
        return [AddressMatch("350 5TH AVE, NEW YORK, NY, 10118", ESB)]

    async def reverse_geocode(self, coords: Coordinates) -> list[Geography]:
        return [Geography("States", "New York", "36")]


class FakeRetriever:
    def __init__(self, periods: list[ForecastPeriod] | None = None, error: Exception | None = None):
        self.periods = periods or []
        self.error = error
        self.calls: list[Coordinates] = []

    async def fetch_forecast(self, coords: Coordinates) -> list[ForecastPeriod]:
        self.calls.append(coords)
        if self.error:
            raise self.error
        return self.periods


@pytest.fixture
def periods(load_fixture) -> list[ForecastPeriod]:
    raw = load_fixture("nws_forecast.json")["properties"]["periods"]
    return [ForecastPeriod.from_api(p) for p in raw]


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use(resolver=None, retriever=None):
    if resolver is not None:
        app.dependency_overrides[get_resolver] = lambda: resolver
    if retriever is not None:
        app.dependency_overrides[get_retriever] = lambda: retriever


class TestGeocodeRoute:
    def test_success(self, client: TestClient):
        _use(resolver=FakeResolver())
        resp = client.get("/api/geocode", params={"address": "350 Fifth Avenue"})
        assert resp.status_code == 200
        match = resp.json()["result"]["addressMatches"][0]
        assert match["coordinates"] == {"x": -73.985428, "y": 40.748817}

    def test_missing_address(self, client: TestClient):
        resolver = FakeResolver()
        _use(resolver=resolver)
        resp = client.get("/api/geocode")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Address is required"}
        assert resolver.queries == []

    def test_upstream_status_forwarded(self, client: TestClient):
        _use(resolver=FakeResolver(
            ResolutionError("HTTP error! status: 503", kind=ErrorKind.TRANSPORT, status_code=503)
        ))
        resp = client.get("/api/geocode", params={"address": "x"})
        assert resp.status_code == 503
        assert "503" in resp.json()["error"]

    def test_network_failure_is_502(self, client: TestClient):
        _use(resolver=FakeResolver(
            ResolutionError("Request failed: boom", kind=ErrorKind.TRANSPORT)
        ))
        resp = client.get("/api/geocode", params={"address": "x"})
        assert resp.status_code == 502


class TestReverseGeocodeRoute:
    def test_success(self, client: TestClient):
        _use(resolver=FakeResolver())
        resp = client.get("/api/reverse-geocode", params={"lat": "40.7", "lon": "-73.9"})
        assert resp.status_code == 200
        assert resp.json()["geographies"] == [
            {"layer": "States", "name": "New York", "geoid": "36"}
        ]

    def test_missing_lon(self, client: TestClient):
        _use(resolver=FakeResolver())
        resp = client.get("/api/reverse-geocode", params={"lat": "40.7"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Latitude and longitude are required"}


class TestForecastRoute:
    def test_success(self, client: TestClient, periods):
        retriever = FakeRetriever(periods)
        _use(retriever=retriever)
        resp = client.get("/api/forecast", params={"lat": "40.748817", "lon": "-73.985428"})
        assert resp.status_code == 200
        assert [p["name"] for p in resp.json()["periods"]] == ["Today", "Tonight", "Monday"]
        assert retriever.calls == [ESB]

    @pytest.mark.parametrize(
        "params",
        [{}, {"lat": "40.7"}, {"lat": "abc", "lon": "1"}, {"lat": "91", "lon": "0"}],
    )
    def test_bad_coordinates(self, client: TestClient, params):
        retriever = FakeRetriever()
        _use(retriever=retriever)
        resp = client.get("/api/forecast", params=params)
        assert resp.status_code == 400
        assert retriever.calls == []

    def test_upstream_status_forwarded(self, client: TestClient):
        _use(retriever=FakeRetriever(error=ForecastError(
            "Failed to fetch forecast data: HTTP 503: Service Unavailable", status_code=503
        )))
        resp = client.get("/api/forecast", params={"lat": "40", "lon": "-74"})
        assert resp.status_code == 503

    def test_missing_forecast_url_is_500(self, client: TestClient):
        _use(retriever=FakeRetriever(error=ForecastError(
            "Forecast URL not found", kind=ErrorKind.NOT_FOUND
        )))
        resp = client.get("/api/forecast", params={"lat": "40", "lon": "-74"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Forecast URL not found"}


class TestSearchRoute:
    def test_success(self, client: TestClient, periods):
        _use(resolver=FakeResolver(), retriever=FakeRetriever(periods))
        resp = client.get("/api/search", params={"q": "350 Fifth Avenue"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["coordinates"] == {"lat": 40.748817, "lon": -73.985428}
        assert len(body["periods"]) == 3

    def test_not_found_skips_forecast(self, client: TestClient):
        retriever = FakeRetriever()
        _use(
            resolver=FakeResolver(ResolutionError("Address not found")),
            retriever=retriever,
        )
        resp = client.get("/api/search", params={"q": "nowhere"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Address not found"}
        assert retriever.calls == []


class TestEndToEnd:
    @respx.mock
    def test_search_with_mocked_upstreams(self, client: TestClient, test_config, load_fixture, period_factory):
        app.dependency_overrides[get_config] = lambda: test_config
        respx.get("https://test-census.example.com/geocoder/locations/onelineaddress").mock(
            return_value=httpx.Response(200, json=load_fixture("census_match.json"))
        )
        respx.get("https://test-nws.example.com/points/40.7488,-73.9854").mock(
            return_value=httpx.Response(200, json=load_fixture("nws_points.json"))
        )
        respx.get("https://test-nws.example.com/gridpoints/OKX/33,35/forecast").mock(
            return_value=httpx.Response(200, json={"properties": {"periods": period_factory(20)}})
        )

        resp = client.get("/api/search", params={"q": "350 Fifth Avenue, New York, NY 10118"})
        assert resp.status_code == 200
        assert len(resp.json()["periods"]) == 14
