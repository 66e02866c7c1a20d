"""Tests for geocoding helpers."""
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from geopy.exc import GeocoderServiceError, GeocoderTimedOut

import healthvia.utils.geocoding as geocoding
from healthvia.models import GeoCoordinate
from healthvia.utils.geocoding import geocode_location, handle_geocoding_error
from healthvia.utils.location import request_user_location


def test_geocode_location_returns_coordinate():
    fake = MagicMock(return_value=SimpleNamespace(latitude="26.85", longitude=80.95))

    result = geocode_location("  Hazratganj, Lucknow ", geocode_fn=fake)

    assert result == GeoCoordinate(26.85, 80.95)
    fake.assert_called_once_with("Hazratganj, Lucknow")


def test_geocode_location_no_match():
    assert geocode_location("Atlantis", geocode_fn=lambda q: None) is None


def test_geocode_location_blank_query():
    fake = MagicMock()
    assert geocode_location("", geocode_fn=fake) is None
    fake.assert_not_called()


def test_geocode_location_propagates_errors():
    def failing(query):
        raise GeocoderServiceError("boom")

    with pytest.raises(GeocoderServiceError):
        geocode_location("Powai", geocode_fn=failing)


def test_rate_limited_geocoder_uses_config(monkeypatch):
    monkeypatch.setattr(geocoding, "_RATE_LIMITED_GEOCODER", None)
    config = {
        "nominatim_user_agent": "test_agent",
        "country_codes": "in",
        "request_timeout": 7,
        "rate_limit_delay": 0,
        "max_retries": 1,
    }
    limited = MagicMock(return_value=None)

    with patch.object(geocoding, "get_api_config", return_value=config), patch.object(
        geocoding, "Nominatim"
    ) as mock_nominatim, patch.object(geocoding, "RateLimiter", return_value=limited) as mock_limiter:
        fn = geocoding._get_rate_limited_geocoder()
        fn("Patna")

    mock_nominatim.assert_called_once_with(user_agent="test_agent")
    assert mock_limiter.call_args.kwargs["swallow_exceptions"] is False
    limited.assert_called_once_with("Patna", timeout=7, country_codes="in")
    assert geocoding._get_rate_limited_geocoder() is fn


def test_cached_geocode_raises_service_errors():
    geocoding.geocode_location_with_cache.clear()
    with patch.object(geocoding, "geocode_location", side_effect=GeocoderTimedOut("timed out")):
        with pytest.raises(GeocoderTimedOut):
            geocoding.geocode_location_with_cache("Boring Road, Patna")


def test_retry_after_timeout_reaches_geocoder():
    """A failed lookup is not cached: retrying the same text geocodes again."""
    geocoding.geocode_location_with_cache.clear()
    hazratganj = GeoCoordinate(26.85, 80.95)
    lookup = MagicMock(side_effect=[GeocoderTimedOut("timed out"), hazratganj])

    with patch.object(geocoding, "geocode_location", lookup):
        first = request_user_location("Hazratganj Lucknow", geocoding.geocode_location_with_cache)
        second = request_user_location("Hazratganj Lucknow", geocoding.geocode_location_with_cache)

    assert first.ok is False
    assert "Location Timeout" in first.error
    assert second.ok is True
    assert second.coordinate == hazratganj
    assert lookup.call_count == 2


def test_successful_lookup_is_cached():
    geocoding.geocode_location_with_cache.clear()
    lookup = MagicMock(return_value=GeoCoordinate(25.61, 85.11))

    with patch.object(geocoding, "geocode_location", lookup):
        geocoding.geocode_location_with_cache("Boring Road, Patna")
        geocoding.geocode_location_with_cache("Boring Road, Patna")

    assert lookup.call_count == 1


class TestHandleGeocodingError:
    """Tests for user-facing geocoding error messages."""

    def test_timeout(self):
        assert "Location Timeout" in handle_geocoding_error("x", GeocoderTimedOut("slow"))

    def test_service(self):
        assert "Service Unavailable" in handle_geocoding_error("x", GeocoderServiceError("service down"))

    def test_rate_limit(self):
        assert "Rate Limited" in handle_geocoding_error("x", Exception("429 rate exceeded"))

    def test_network(self):
        assert "Network Error" in handle_geocoding_error("x", Exception("connection refused"))

    def test_generic(self):
        message = handle_geocoding_error("Powai", ValueError("odd"))
        assert "Location Error" in message
        assert "Powai" in message
        assert "ValueError" in message
