"""User location acquisition and the caller-owned "last known location" value.

A location request is single-shot: it either yields a coordinate or fails.
Results are applied in completion order, so when several requests overlap the
last one to resolve wins. A failed request leaves any previously known
location in place.
"""
import logging
from dataclasses import dataclass
from typing import Callable, MutableMapping, Optional, Tuple

from geopy.exc import GeopyError

from healthvia.models import GeoCoordinate

from .geocoding import handle_geocoding_error

logger = logging.getLogger(__name__)

USER_LOCATION_KEY = "user_location"

LOCATION_FOUND_MESSAGE = "Showing specialists near you"
LOCATION_FAILED_MESSAGE = "Unable to get your location. Please select a city instead."


@dataclass(frozen=True)
class LocationResult:
    """Outcome of one location request."""

    coordinate: Optional[GeoCoordinate] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.coordinate is not None


def request_user_location(query: str, geocode: Callable[[str], Optional[GeoCoordinate]]) -> LocationResult:
    """Run a single location request through ``geocode``.

    Args:
        query: Locality or address typed by the user
        geocode: Callable resolving text to a coordinate (or ``None``)

    Returns:
        LocationResult with either a coordinate or a user-facing error
    """
    if not query or not query.strip():
        return LocationResult(error="Enter a locality or address to search near you.")
    try:
        coordinate = geocode(query)
    except GeopyError as e:
        logger.warning(f"Location request for '{query}' failed: {e}")
        return LocationResult(error=handle_geocoding_error(query, e))

    if coordinate is None:
        return LocationResult(error=LOCATION_FAILED_MESSAGE)
    return LocationResult(coordinate=coordinate)


def apply_location_result(state: MutableMapping, result: LocationResult) -> Tuple[bool, str]:
    """Store a successful result as the user location.

    Args:
        state: Caller-owned mapping (e.g. ``st.session_state``)
        result: Completed location request

    Returns:
        Tuple of (location_updated, message) for the notification
    """
    if result.ok:
        state[USER_LOCATION_KEY] = result.coordinate
        return True, LOCATION_FOUND_MESSAGE
    return False, result.error or LOCATION_FAILED_MESSAGE


def get_user_location(state: MutableMapping) -> Optional[GeoCoordinate]:
    return state.get(USER_LOCATION_KEY)


def clear_user_location(state: MutableMapping) -> None:
    state.pop(USER_LOCATION_KEY, None)
