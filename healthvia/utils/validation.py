"""Validation utilities for coordinates, contact details and specialist rows.

Small, self-contained helpers used at the record-store boundary and in tests.
"""

import math
import re
from typing import Any, Mapping, Tuple


def validate_coordinates(lat: float, lon: float) -> Tuple[bool, str]:
    """
    Validate latitude and longitude coordinates.

    Args:
        lat: Latitude value
        lon: Longitude value

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(lat, bool) or isinstance(lon, bool):
        return False, "Coordinates must be numeric"
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        return False, "Coordinates must be numeric"

    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False, "Coordinates must be finite numbers"

    if not (-90 <= lat <= 90):
        return False, "Latitude must be between -90 and 90"

    if not (-180 <= lon <= 180):
        return False, "Longitude must be between -180 and 180"

    return True, "Valid coordinates"


def validate_phone_number(phone: str) -> Tuple[bool, str]:
    """
    Validate an Indian phone number.

    Accepts 10-digit numbers, optionally prefixed with the country code 91 or a
    trunk 0; spaces, dashes, brackets and a leading '+' are ignored.

    Args:
        phone: Phone number string

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not phone or not phone.strip():
        return False, "Phone number is required"

    cleaned = re.sub(r"[^\d]", "", phone)

    if len(cleaned) == 10:
        return True, "Valid phone number"
    elif len(cleaned) == 12 and cleaned.startswith("91"):
        return True, "Valid phone number"
    elif len(cleaned) == 11 and cleaned.startswith("0"):
        return True, "Valid phone number"
    else:
        return False, "Phone number must be 10 digits, optionally prefixed with +91 or 0"


def validate_email(email: Any) -> Tuple[bool, str]:
    """Email is optional; when present it must look like ``name@domain.tld``."""
    if email is None or not str(email).strip():
        return True, "Email is optional"
    if re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", str(email).strip()):
        return True, "Valid email"
    return False, "Email address format is invalid"


def validate_specialist_record(row: Mapping[str, Any]) -> Tuple[bool, str]:
    """
    Check a raw specialist row against the directory's data invariants.

    Args:
        row: Mapping with specialist fields (already type-converted)

    Returns:
        Tuple of (is_valid, error_message)
    """
    issues = []

    name = row.get("name")
    if not isinstance(name, str) or not name.strip():
        issues.append("Name is required")

    ok, msg = validate_coordinates(row.get("latitude"), row.get("longitude"))
    if not ok:
        issues.append(msg)

    experience = row.get("experience_years")
    if experience is not None:
        if not math.isfinite(experience) or not float(experience).is_integer():
            issues.append("Experience must be a whole number of years")
        elif experience < 0:
            issues.append("Experience cannot be negative")

    fee = row.get("consultation_fee")
    if fee is not None and fee < 0:
        issues.append("Consultation fee cannot be negative")

    rating = row.get("rating")
    if rating is not None and not (0 <= rating <= 5):
        issues.append("Rating must be between 0 and 5")

    if issues:
        return False, "; ".join(issues)
    return True, "Valid specialist"
