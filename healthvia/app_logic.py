import logging
from typing import List, Optional, Sequence, Tuple

from healthvia.data.ingestion import DirectorySnapshot, load_directory_snapshot
from healthvia.models import ALL, DirectoryOptions, FilterCriteria, GeoCoordinate, Specialist
from healthvia.utils.config import get_directory_options
from healthvia.utils.filtering import (
    build_filter_criteria,
    filter_specialists,
    get_unique_cities,
    get_unique_specialties,
)
from healthvia.utils.ranking import rank_specialists

__all__ = [
    "load_application_data",
    "discover",
    "discover_from_selection",
    "get_filter_options",
    "find_unlisted_values",
]

logger = logging.getLogger(__name__)


def load_application_data() -> Tuple[List[Specialist], DirectorySnapshot]:
    """Load the specialist directory for the app.

    Returns:
        Tuple[List[Specialist], DirectorySnapshot]: (specialists, snapshot)
            - specialists: All specialists ordered by name
            - snapshot: Provenance and data quality summary of the load

    Raises:
        FileNotFoundError, ValueError: If the directory cannot be loaded
            (caught by calling code)
    """
    snapshot = load_directory_snapshot()
    if not snapshot.specialists:
        logger.warning(f"Directory source '{snapshot.source_name}' returned no valid specialists")
    return snapshot.specialists, snapshot


def get_filter_options(options: Optional[DirectoryOptions] = None) -> Tuple[List[str], List[str]]:
    """City and specialty choices for the selects, each led by ``"all"``."""
    options = options or get_directory_options()
    return [ALL] + list(options.cities), [ALL] + list(options.specialties)


def discover(specialists: Sequence[Specialist], criteria: FilterCriteria) -> List[Specialist]:
    """Run a discovery pass: filter by criteria, then rank.

    Ranking only ever sees specialists that passed filtering, so distances are
    computed for the visible results alone. Inputs are never modified; when a
    user location is present the returned records are copies carrying their
    distance in km.

    Args:
        specialists: Full directory in store (name) order
        criteria: City, specialty, text query and optional user location

    Returns:
        List[Specialist]: Matching specialists, name-ordered or nearest first
    """
    filtered = filter_specialists(specialists, criteria)
    ranked = rank_specialists(filtered, criteria.user_location)
    logger.debug(
        f"Discovery: {len(specialists)} specialists -> {len(filtered)} matched, "
        f"ranked by {'distance' if criteria.user_location else 'name'}"
    )
    return ranked


def discover_from_selection(
    specialists: Sequence[Specialist],
    *,
    city: Optional[str] = ALL,
    specialty: Optional[str] = ALL,
    text_query: Optional[str] = "",
    user_location: Optional[GeoCoordinate] = None,
    options: Optional[DirectoryOptions] = None,
) -> List[Specialist]:
    """Convenience wrapper building criteria from raw UI selections."""
    criteria = build_filter_criteria(city, specialty, text_query, user_location, options)
    return discover(specialists, criteria)


def find_unlisted_values(
    specialists: Sequence[Specialist], options: Optional[DirectoryOptions] = None
) -> Tuple[List[str], List[str]]:
    """Cities and specialties present in the data but missing from the selects.

    Such specialists can still be found through the text search (specialty)
    or by choosing "all".
    """
    options = options or get_directory_options()
    cities = [c for c in get_unique_cities(specialists) if c not in options.cities]
    specialties = [s for s in get_unique_specialties(specialists) if s not in options.specialties]
    return cities, specialties
