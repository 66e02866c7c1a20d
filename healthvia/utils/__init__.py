"""Utilities package for the HealthVia specialist directory.

Re-export stable helper functions from the utility submodules.
"""
# flake8: noqa: F401

from .cleaning import clean_specialist_data, dataframe_to_specialists, validate_specialist_data
from .distance import EARTH_RADIUS_KM, calculate_distances, haversine_km
from .filtering import (
    build_filter_criteria,
    filter_specialists,
    get_unique_cities,
    get_unique_specialties,
)
from .ranking import rank_specialists
from .validation import validate_coordinates, validate_email, validate_phone_number, validate_specialist_record

__all__ = [
    "EARTH_RADIUS_KM",
    "build_filter_criteria",
    "calculate_distances",
    "clean_specialist_data",
    "dataframe_to_specialists",
    "filter_specialists",
    "get_unique_cities",
    "get_unique_specialties",
    "haversine_km",
    "rank_specialists",
    "validate_coordinates",
    "validate_email",
    "validate_phone_number",
    "validate_specialist_data",
    "validate_specialist_record",
]
