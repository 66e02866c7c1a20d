"""Core records for the specialist directory.

Specialist rows are validated once at the store boundary (see
``healthvia.data.ingestion``) and are treated as read-only everywhere else.
"""
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Tuple

# Selection value meaning "no constraint" for city and specialty
ALL = "all"

DEFAULT_CITIES = ("Delhi", "Mumbai", "Jaipur", "Lucknow", "Patna")

DEFAULT_SPECIALTIES = (
    "General Physician",
    "Pediatrician",
    "Cardiologist",
    "Dermatologist",
    "Orthopedic",
    "Gynecologist",
    "ENT Specialist",
    "Psychiatrist",
    "Dentist",
    "Ophthalmologist",
)


@dataclass(frozen=True)
class GeoCoordinate:
    """A latitude/longitude pair in decimal degrees (not normalized)."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Specialist:
    """A healthcare specialist as served by the record store.

    ``distance`` is transient: it is only set on copies produced by ranking
    when a user location is known, and is never written back to the store.
    """

    id: str
    name: str
    specialty: str
    city: str
    address: str
    phone: str
    latitude: float
    longitude: float
    email: Optional[str] = None
    experience_years: Optional[int] = None
    consultation_fee: Optional[float] = None
    available_days: Optional[Tuple[str, ...]] = None
    rating: Optional[float] = None
    distance: Optional[float] = None

    @property
    def location(self) -> GeoCoordinate:
        return GeoCoordinate(self.latitude, self.longitude)

    def with_distance(self, distance: float) -> "Specialist":
        return replace(self, distance=distance)


@dataclass(frozen=True)
class FilterCriteria:
    """User-chosen query parameters for a single discovery pass.

    ``None`` or ``ALL`` for city/specialty and an empty ``text_query`` mean no
    constraint.
    """

    city: Optional[str] = None
    specialty: Optional[str] = None
    text_query: str = ""
    user_location: Optional[GeoCoordinate] = None


@dataclass(frozen=True)
class DirectoryOptions:
    """Enumerated values offered for the city and specialty selections."""

    cities: Tuple[str, ...] = field(default=DEFAULT_CITIES)
    specialties: Tuple[str, ...] = field(default=DEFAULT_SPECIALTIES)

    @classmethod
    def from_lists(cls, cities: Sequence[str], specialties: Sequence[str]) -> "DirectoryOptions":
        return cls(cities=tuple(cities), specialties=tuple(specialties))


__all__ = [
    "ALL",
    "DEFAULT_CITIES",
    "DEFAULT_SPECIALTIES",
    "DirectoryOptions",
    "FilterCriteria",
    "GeoCoordinate",
    "Specialist",
]
