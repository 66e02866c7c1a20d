"""Record-store cleaning: raw specialist exports to validated ``Specialist`` rows."""
import logging
import re
from typing import Any, List, Optional, Tuple

import numpy as np
import pandas as pd

from healthvia.models import Specialist

from .validation import validate_email, validate_phone_number, validate_specialist_record

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["name", "specialty", "city", "latitude", "longitude"]

# Header variants seen in exports, mapped to canonical column names
COLUMN_ALIASES = {
    "full_name": "name",
    "doctor_name": "name",
    "speciality": "specialty",
    "lat": "latitude",
    "lng": "longitude",
    "lon": "longitude",
    "phone_number": "phone",
    "experience": "experience_years",
    "fee": "consultation_fee",
    "days": "available_days",
}


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    cols = [re.sub(r"[\s\-]+", "_", str(col).strip().lower()) for col in df.columns]
    df.columns = [COLUMN_ALIASES.get(col, col) for col in cols]
    return df


def safe_numeric_conversion(value: Any, default: Optional[float] = None) -> Optional[float]:
    try:
        if pd.isna(value):
            return default
        if isinstance(value, str) and not value.strip():
            return default
        return float(value)
    except (ValueError, TypeError):
        return default


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    text = str(value).strip()
    return "" if text in ("nan", "None", "NaN") else text


def parse_available_days(value: Any) -> Optional[Tuple[str, ...]]:
    """Parse a day list from a list/array or a delimited string.

    Accepts ``["Mon", "Wed"]``, ``"Monday, Wednesday"``, ``"{Mon,Wed}"`` (Postgres
    array export) and similar; order is kept. Missing values give ``None``.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple, np.ndarray)):
        items = list(value)
    else:
        text = _clean_text(value)
        if not text:
            return None
        text = text.strip("{}[]")
        items = re.split(r"[,;|]", text)

    days = []
    for item in items:
        day = _clean_text(item).strip("\"' ")
        if day:
            days.append(day)
    return tuple(days)


def clean_specialist_data(df: pd.DataFrame) -> pd.DataFrame:
    """Normalize headers, text and numeric columns of a raw export."""
    df = normalize_columns(df)
    if df.empty:
        return df

    for col in ("id", "name", "specialty", "city", "address", "phone", "email"):
        if col in df.columns:
            df[col] = df[col].apply(_clean_text)

    for col in ("latitude", "longitude", "consultation_fee", "rating", "experience_years"):
        if col in df.columns:
            df[col] = df[col].apply(safe_numeric_conversion)

    return df


def validate_specialist_data(df: pd.DataFrame) -> Tuple[bool, str]:
    """Summarize data quality of a cleaned specialist frame for display."""
    if df.empty:
        return False, "❌ **Error**: No specialist data available. Please check data files."

    issues = []
    info = []

    missing_cols = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing_cols:
        issues.append(f"Missing required columns: {', '.join(missing_cols)}")

    if "latitude" in df.columns and "longitude" in df.columns:
        missing_coords = int((df["latitude"].isna() | df["longitude"].isna()).sum())
        if missing_coords > 0:
            issues.append(f"{missing_coords} specialists missing geographic coordinates")

    if "phone" in df.columns:
        bad_phones = int((~df["phone"].astype(str).apply(lambda p: validate_phone_number(p)[0])).sum())
        if bad_phones > 0:
            info.append(f"{bad_phones} specialists have missing or unrecognized phone numbers")
    if "email" in df.columns:
        bad_emails = int((~df["email"].apply(lambda e: validate_email(e)[0])).sum())
        if bad_emails > 0:
            info.append(f"{bad_emails} specialists have malformed email addresses")

    if "city" in df.columns:
        info.append(f"Cities covered: {df['city'].replace('', pd.NA).dropna().nunique()}")
    if "rating" in df.columns and df["rating"].notna().any():
        info.append(f"Average rating: {df['rating'].mean():.1f}")

    info.append(f"Total specialists in directory: {len(df)}")

    message_parts = []
    if issues:
        message_parts.append("⚠️ **Data Quality Issues**: " + "; ".join(issues))
    if info:
        message_parts.append("ℹ️ **Data Summary**: " + "; ".join(info))

    return len(issues) == 0, "\n\n".join(message_parts)


def _optional(row: pd.Series, col: str) -> Any:
    if col not in row.index:
        return None
    value = row[col]
    if isinstance(value, str):
        return value or None
    if isinstance(value, (list, tuple, np.ndarray)):
        return value
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def dataframe_to_specialists(df: pd.DataFrame) -> Tuple[List[Specialist], int]:
    """Convert a cleaned frame into ``Specialist`` records.

    Rows that break the data invariants are skipped and logged.

    Returns:
        Tuple of (specialists, rejected_count)
    """
    specialists: List[Specialist] = []
    rejected = 0
    if df.empty:
        return specialists, rejected

    missing_cols = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing_cols:
        raise ValueError(f"Specialist data is missing required columns: {', '.join(missing_cols)}")

    for position, (_, row) in enumerate(df.iterrows()):
        experience = _optional(row, "experience_years")
        fields = {
            "name": _optional(row, "name") or "",
            "latitude": _optional(row, "latitude"),
            "longitude": _optional(row, "longitude"),
            "experience_years": experience,
            "consultation_fee": _optional(row, "consultation_fee"),
            "rating": _optional(row, "rating"),
        }
        ok, msg = validate_specialist_record(fields)
        if not ok:
            rejected += 1
            logger.warning(f"Skipping specialist row {position} ({fields['name'] or 'unnamed'}): {msg}")
            continue

        record_id = _optional(row, "id")
        if record_id is None:
            record_id = f"row-{position}"
        specialists.append(
            Specialist(
                id=str(record_id),
                name=fields["name"],
                specialty=_optional(row, "specialty") or "",
                city=_optional(row, "city") or "",
                address=_optional(row, "address") or "",
                phone=_optional(row, "phone") or "",
                latitude=float(fields["latitude"]),
                longitude=float(fields["longitude"]),
                email=_optional(row, "email"),
                experience_years=int(experience) if experience is not None else None,
                consultation_fee=(
                    float(fields["consultation_fee"]) if fields["consultation_fee"] is not None else None
                ),
                available_days=parse_available_days(_optional(row, "available_days")),
                rating=float(fields["rating"]) if fields["rating"] is not None else None,
            )
        )

    return specialists, rejected
