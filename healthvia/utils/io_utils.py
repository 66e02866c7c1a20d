"""Display helpers: card formatting, results table and streamlit error handler."""
from typing import List, Optional, Sequence

import pandas as pd
import streamlit as st

from healthvia.models import Specialist

RESULT_COLUMNS = [
    "Name",
    "Specialty",
    "City",
    "Address",
    "Phone",
    "Email",
    "Experience (Years)",
    "Fee (₹)",
    "Rating",
    "Available Days",
    "Distance (km)",
]


def format_distance(distance_km: Optional[float]) -> Optional[str]:
    """Render a distance as ``"3.2 km away"`` (one decimal place)."""
    if distance_km is None or pd.isna(distance_km):
        return None
    return f"{distance_km:.1f} km away"


def format_fee(fee: Optional[float]) -> Optional[str]:
    if fee is None or pd.isna(fee):
        return None
    if float(fee).is_integer():
        return f"₹{int(fee)}"
    return f"₹{fee:.2f}"


def format_experience(years: Optional[int]) -> Optional[str]:
    if years is None:
        return None
    return f"{years} year" if years == 1 else f"{years} years"


def format_rating(rating: Optional[float]) -> Optional[str]:
    if rating is None or pd.isna(rating):
        return None
    return f"⭐ {rating:g}"


def format_available_days(days: Optional[Sequence[str]]) -> Optional[str]:
    if not days:
        return None
    return " · ".join(days)


def specialists_to_dataframe(specialists: Sequence[Specialist]) -> pd.DataFrame:
    """Tabular view of a result list, in result order.

    The distance column is only included when at least one record carries a
    distance.
    """
    rows: List[dict] = []
    for s in specialists:
        rows.append(
            {
                "Name": s.name,
                "Specialty": s.specialty,
                "City": s.city,
                "Address": s.address,
                "Phone": s.phone,
                "Email": s.email or "",
                "Experience (Years)": s.experience_years,
                "Fee (₹)": s.consultation_fee,
                "Rating": s.rating,
                "Available Days": ", ".join(s.available_days or ()),
                "Distance (km)": round(s.distance, 1) if s.distance is not None else None,
            }
        )
    df = pd.DataFrame(rows, columns=RESULT_COLUMNS)
    if df.empty or df["Distance (km)"].isna().all():
        df = df.drop(columns=["Distance (km)"])
    return df


def handle_streamlit_error(error: Exception, context: str = "operation") -> None:
    err = str(error)
    if "geocod" in err.lower() or "location" in err.lower():
        st.error(
            "❌ **Location Error**: Unable to find coordinates for the provided place. "
            "Please check the spelling or select a city instead."
        )
    elif "network" in err.lower() or "connection" in err.lower():
        st.error("❌ **Network Error**: Unable to connect to the data service. Please check your internet connection.")
    elif "timeout" in err.lower():
        st.error("❌ **Timeout Error**: The service is taking too long to respond. Please try again.")
    elif isinstance(error, FileNotFoundError) or "not found" in err.lower():
        st.error("❌ **Data Error**: The specialist directory file is missing. Please contact support.")
    else:
        st.error(f"❌ **Error during {context}**: {err}")

    st.exception(error)
