"""Geocoding helpers with caching and rate limiting.

The directory has no browser geolocation; "use my location" resolves a
locality or address typed by the user to a coordinate through Nominatim.
"""
import logging
from typing import Callable, Optional

import streamlit as st
from geopy.exc import GeocoderTimedOut, GeocoderUnavailable
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from healthvia.models import GeoCoordinate

from .config import get_api_config

logger = logging.getLogger(__name__)

# Cached factory
_RATE_LIMITED_GEOCODER: Optional[Callable] = None


def _get_rate_limited_geocoder() -> Callable:
    global _RATE_LIMITED_GEOCODER
    if _RATE_LIMITED_GEOCODER is not None:
        return _RATE_LIMITED_GEOCODER

    config = get_api_config("geocoding")
    geolocator = Nominatim(user_agent=config["nominatim_user_agent"])
    rate_limited = RateLimiter(
        geolocator.geocode,
        min_delay_seconds=float(config["rate_limit_delay"]),
        max_retries=int(config["max_retries"]),
        swallow_exceptions=False,
    )

    def geocode_fn(q, timeout=None):
        return rate_limited(
            q,
            timeout=timeout or config["request_timeout"],
            country_codes=config["country_codes"] or None,
        )

    _RATE_LIMITED_GEOCODER = geocode_fn
    return _RATE_LIMITED_GEOCODER


def geocode_location(query: str, geocode_fn: Optional[Callable] = None) -> Optional[GeoCoordinate]:
    """Resolve ``query`` to a coordinate, or ``None`` if nothing was found.

    Geocoder errors propagate to the caller; see ``handle_geocoding_error``.
    """
    if not query or not query.strip():
        return None
    geocode_fn = geocode_fn or _get_rate_limited_geocoder()
    location = geocode_fn(query.strip())
    if location is None:
        logger.info(f"No geocoding match for '{query}'")
        return None
    return GeoCoordinate(float(location.latitude), float(location.longitude))


@st.cache_data(ttl=3600, show_spinner=False)
def geocode_location_with_cache(query: str) -> Optional[GeoCoordinate]:
    """Cached ``geocode_location``.

    Geocoder errors are raised, not returned, so a failed lookup is never
    cached and the next request for the same text reaches the geocoder again.
    """
    return geocode_location(query)


def handle_geocoding_error(query: str, error: Exception) -> str:
    et = str(error).lower()
    if isinstance(error, GeocoderTimedOut) or "timeout" in et or "timed out" in et:
        return "⏱️ **Location Timeout**: The location lookup is taking too long. Please try again in a moment."
    if isinstance(error, GeocoderUnavailable) or "unavailable" in et or "service" in et:
        return "🔌 **Service Unavailable**: The location service is temporarily unavailable. Please try again later."
    if "rate" in et or "limit" in et:
        return "🚦 **Rate Limited**: Too many location requests. Please wait a moment and try again."
    if "network" in et or "connection" in et:
        return "🌐 **Network Error**: Cannot reach the location service. Please check your internet connection."
    return f"❌ **Location Error**: Unable to find '{query}'. (Error: {type(error).__name__})"
