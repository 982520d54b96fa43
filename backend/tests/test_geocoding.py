"""Tests for the geocoding client; HTTP is stubbed at the requests layer."""
import pytest
import requests
from pydantic import ValidationError

from app.services import geocoding
from app.services.geocoding import Coordinates, GeocodeResult, GeocodingClient


class _Response:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


def _client():
    return GeocodingClient(api_key="key", base_url="https://geo.example.com/json", timeout=2)


def _stub(monkeypatch, response=None, exc=None):
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append({"url": url, "params": params, "timeout": timeout})
        if exc:
            raise exc
        return response

    monkeypatch.setattr(geocoding.requests, "get", fake_get)
    return calls


class TestGeocode:

    def test_success(self, monkeypatch):
        calls = _stub(monkeypatch, _Response({
            "status": "OK",
            "results": [{"geometry": {"location": {"lat": 41.9, "lng": 12.5}}}],
        }))
        result = _client().geocode("Roma")
        assert result.ok
        assert result.coordinates.latitude == 41.9
        assert result.coordinates.longitude == 12.5
        assert calls[0]["params"] == {"address": "Roma", "key": "key"}
        assert calls[0]["timeout"] == 2

    def test_zero_results(self, monkeypatch):
        _stub(monkeypatch, _Response({"status": "ZERO_RESULTS", "results": []}))
        result = _client().geocode("Atlantis")
        assert not result.ok
        assert "ZERO_RESULTS" in result.error.reason

    def test_partial_coordinates(self, monkeypatch):
        _stub(monkeypatch, _Response({"status": "OK", "results": [{"geometry": {"location": {"lat": 1.0}}}]}))
        result = _client().geocode("Half")
        assert not result.ok
        assert result.coordinates is None

    def test_network_error_is_reported_not_raised(self, monkeypatch):
        _stub(monkeypatch, exc=requests.ConnectionError("down"))
        result = _client().geocode("Roma")
        assert not result.ok
        assert "request failed" in result.error.reason

    def test_http_error(self, monkeypatch):
        _stub(monkeypatch, _Response({}, status_code=503))
        assert not _client().geocode("Roma").ok

    def test_not_configured(self, monkeypatch):
        calls = _stub(monkeypatch, _Response({}))
        result = GeocodingClient(api_key="", base_url="https://geo.example.com/json").geocode("Roma")
        assert not result.ok
        assert calls == []


class TestGeocodeResult:

    def test_success_and_failure_are_exclusive(self):
        ok = GeocodeResult.success(41.9, 12.5)
        failed = GeocodeResult.failure("no results")
        assert ok.coordinates == Coordinates(latitude=41.9, longitude=12.5)
        assert ok.error is None
        assert failed.coordinates is None
        assert failed.error.reason == "no results"

    def test_results_are_immutable(self):
        result = GeocodeResult.success(41.9, 12.5)
        with pytest.raises(ValidationError):
            result.coordinates = None
