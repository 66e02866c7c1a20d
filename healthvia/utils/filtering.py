"""Criteria predicates applied to the specialist collection.

Every predicate is independent; a specialist is kept only if it satisfies all
active ones. Inactive predicates always pass: a city or specialty that is
unset or ``"all"``, and an empty text query. The output is an
order-preserving subsequence of the input and contains the very same record
objects.
"""
import logging
from typing import List, Optional, Sequence

from healthvia.models import ALL, DirectoryOptions, FilterCriteria, GeoCoordinate, Specialist

logger = logging.getLogger(__name__)


def matches_city(specialist: Specialist, city: Optional[str]) -> bool:
    if not city or city == ALL:
        return True
    return specialist.city == city


def matches_specialty(specialist: Specialist, specialty: Optional[str]) -> bool:
    if not specialty or specialty == ALL:
        return True
    return specialist.specialty == specialty


def matches_text(specialist: Specialist, text_query: str) -> bool:
    """Case-insensitive substring match on name or specialty."""
    if not text_query:
        return True
    needle = text_query.lower()
    return needle in specialist.name.lower() or needle in specialist.specialty.lower()


def filter_specialists(specialists: Sequence[Specialist], criteria: FilterCriteria) -> List[Specialist]:
    """Return the specialists satisfying every active predicate in ``criteria``."""
    if not specialists:
        return []

    filtered = [
        s
        for s in specialists
        if matches_city(s, criteria.city)
        and matches_specialty(s, criteria.specialty)
        and matches_text(s, criteria.text_query)
    ]
    logger.debug(f"Filter kept {len(filtered)} of {len(specialists)} specialists")
    return filtered


def _normalize_selection(value: Optional[str], allowed: Sequence[str], label: str) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.lower() == ALL:
        return None
    if allowed and value not in allowed:
        # Kept as an exact-match constraint; it simply matches nothing configured
        logger.warning(f"{label} '{value}' is not one of the configured options")
    return value


def build_filter_criteria(
    city: Optional[str] = ALL,
    specialty: Optional[str] = ALL,
    text_query: Optional[str] = "",
    user_location: Optional[GeoCoordinate] = None,
    options: Optional[DirectoryOptions] = None,
) -> FilterCriteria:
    """Build criteria from raw UI selections.

    The ``"all"`` sentinel and blank selections become "no constraint". City
    and specialty are checked against the configured ``options``; unknown
    values are logged, not rejected.
    """
    options = options or DirectoryOptions()
    return FilterCriteria(
        city=_normalize_selection(city, options.cities, "City"),
        specialty=_normalize_selection(specialty, options.specialties, "Specialty"),
        text_query=text_query or "",
        user_location=user_location,
    )


def get_unique_cities(specialists: Sequence[Specialist]) -> List[str]:
    return sorted({s.city for s in specialists if s.city and s.city.strip()})


def get_unique_specialties(specialists: Sequence[Specialist]) -> List[str]:
    """Sorted distinct specialties present in the collection."""
    return sorted({s.specialty for s in specialists if s.specialty and s.specialty.strip()})
