"""Pytest configuration helpers.

Ensure the project root is on sys.path so tests can import the `healthvia`
package when pytest is invoked from the repository root without installing it.
"""

import sys
from pathlib import Path

import pytest

# Insert the repository root (parent of the tests directory) at the front
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from healthvia.models import Specialist  # noqa: E402


def make_specialist(
    id: str,
    name: str,
    specialty: str = "General Physician",
    city: str = "Delhi",
    latitude: float = 28.6,
    longitude: float = 77.2,
    **extra,
) -> Specialist:
    return Specialist(
        id=id,
        name=name,
        specialty=specialty,
        city=city,
        address=extra.pop("address", f"{id} Main Road, {city}"),
        phone=extra.pop("phone", "+91 98100 00000"),
        latitude=latitude,
        longitude=longitude,
        **extra,
    )


@pytest.fixture
def sample_specialists():
    """Name-ordered directory spanning several cities and specialties."""
    return [
        make_specialist("1", "Dr. Alice Rao", "Cardiologist", "Mumbai", 19.07, 72.87, rating=4.8),
        make_specialist("2", "Dr. Bob Singh", "Dermatologist", "Delhi", 28.61, 77.21, rating=4.1),
        make_specialist("3", "Dr. Chitra Nair", "Cardiologist", "Delhi", 28.57, 77.24),
        make_specialist("4", "Dr. Deepak Verma", "Pediatrician", "Jaipur", 26.91, 75.79, experience_years=12),
        make_specialist("5", "Dr. Esha Rao", "Dentist", "Lucknow", 26.85, 80.95, consultation_fee=400.0),
        make_specialist("6", "Dr. Farah Khan", "Psychiatrist", "Patna", 25.61, 85.14),
    ]


@pytest.fixture
def fake_secrets(monkeypatch):
    """Replace Streamlit secrets with a plain nested dict for the test."""
    import streamlit as st

    secrets = {}
    monkeypatch.setattr(st, "secrets", secrets)
    return secrets


@pytest.fixture
def sample_fixtures_dir():
    """Return the path to the sample data directory."""
    return Path(__file__).resolve().parents[1] / "data"
