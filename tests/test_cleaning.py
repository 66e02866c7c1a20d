"""Tests for specialist export cleaning and conversion to records."""
import logging

import numpy as np
import pandas as pd
import pytest

from healthvia.utils.cleaning import (
    clean_specialist_data,
    dataframe_to_specialists,
    normalize_columns,
    parse_available_days,
    safe_numeric_conversion,
    validate_specialist_data,
)


@pytest.fixture
def raw_export():
    return pd.DataFrame(
        {
            "ID": ["sp-1", "sp-2"],
            "Doctor Name": ["  Dr. Aarti Sharma ", "Dr. Rajesh Gupta"],
            "Speciality": ["General Physician", "Cardiologist"],
            "City": ["Delhi", "Delhi"],
            "Address": ["Lajpat Nagar", "Karol Bagh"],
            "Phone Number": ["+91 98110 23456", "98100 55123"],
            "Email": ["aarti@healthvia.in", None],
            "Lat": ["28.5677", 28.6519],
            "Lng": [77.2433, "77.1909"],
            "Experience": [14, None],
            "Fee": ["500", 1200],
            "Days": ["Monday, Tuesday", None],
            "Rating": [4.6, 4.8],
        }
    )


def test_normalize_columns_applies_aliases():
    df = normalize_columns(pd.DataFrame(columns=["Full Name", "Speciality", "LAT", "lon", "consultation-fee"]))
    assert list(df.columns) == ["name", "specialty", "latitude", "longitude", "consultation_fee"]


@pytest.mark.parametrize(
    "value, expected",
    [("4.5", 4.5), (3, 3.0), ("", None), ("   ", None), ("abc", None), (None, None), (np.nan, None)],
)
def test_safe_numeric_conversion(value, expected):
    assert safe_numeric_conversion(value) == expected


def test_safe_numeric_conversion_default():
    assert safe_numeric_conversion("n/a", default=0.0) == 0.0


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Monday, Wednesday", ("Monday", "Wednesday")),
        ("{Mon,Wed,Fri}", ("Mon", "Wed", "Fri")),
        ('["Mon"; "Tue"]', ("Mon", "Tue")),
        ("Mon|Sat", ("Mon", "Sat")),
        (["Mon", " Tue "], ("Mon", "Tue")),
        (np.array(["Thu"]), ("Thu",)),
        (None, None),
        ("", None),
        (np.nan, None),
    ],
)
def test_parse_available_days(value, expected):
    assert parse_available_days(value) == expected


def test_clean_specialist_data(raw_export):
    df = clean_specialist_data(raw_export)

    assert df.loc[0, "name"] == "Dr. Aarti Sharma"
    assert df.loc[0, "latitude"] == pytest.approx(28.5677)
    assert df.loc[1, "longitude"] == pytest.approx(77.1909)
    assert df.loc[0, "consultation_fee"] == 500.0
    assert df.loc[1, "email"] == ""


def test_clean_empty_frame():
    assert clean_specialist_data(pd.DataFrame()).empty


def test_dataframe_to_specialists(raw_export):
    specialists, rejected = dataframe_to_specialists(clean_specialist_data(raw_export))

    assert rejected == 0
    assert [s.id for s in specialists] == ["sp-1", "sp-2"]

    aarti, rajesh = specialists
    assert aarti.specialty == "General Physician"
    assert aarti.experience_years == 14
    assert aarti.available_days == ("Monday", "Tuesday")
    assert aarti.distance is None
    assert rajesh.email is None
    assert rajesh.experience_years is None
    assert rajesh.available_days is None
    assert rajesh.consultation_fee == 1200.0


def test_invalid_rows_are_skipped_and_logged(raw_export, caplog):
    raw_export.loc[1, "Lat"] = "not a number"
    with caplog.at_level(logging.WARNING):
        specialists, rejected = dataframe_to_specialists(clean_specialist_data(raw_export))

    assert rejected == 1
    assert [s.name for s in specialists] == ["Dr. Aarti Sharma"]
    assert "Dr. Rajesh Gupta" in caplog.text


@pytest.mark.parametrize("experience", ["2.7", "inf"])
def test_bad_experience_rejects_only_that_row(raw_export, experience):
    raw_export["Experience"] = raw_export["Experience"].astype(object)
    raw_export.loc[0, "Experience"] = experience

    specialists, rejected = dataframe_to_specialists(clean_specialist_data(raw_export))

    assert rejected == 1
    assert [s.name for s in specialists] == ["Dr. Rajesh Gupta"]


def test_missing_id_falls_back_to_row_position(raw_export):
    raw_export = raw_export.drop(columns=["ID"])
    specialists, _ = dataframe_to_specialists(clean_specialist_data(raw_export))
    assert [s.id for s in specialists] == ["row-0", "row-1"]


def test_missing_required_columns_raise(raw_export):
    with pytest.raises(ValueError, match="longitude"):
        dataframe_to_specialists(clean_specialist_data(raw_export.drop(columns=["Lng"])))


class TestValidateSpecialistData:
    """Tests for the data quality summary shown on the update page."""

    def test_clean_data_passes(self, raw_export):
        ok, message = validate_specialist_data(clean_specialist_data(raw_export))
        assert ok is True
        assert "Total specialists in directory: 2" in message
        assert "Cities covered: 1" in message

    def test_empty_frame(self):
        ok, message = validate_specialist_data(pd.DataFrame())
        assert ok is False
        assert "No specialist data available" in message

    def test_missing_coordinates_is_an_issue(self, raw_export):
        raw_export.loc[0, "Lat"] = None
        ok, message = validate_specialist_data(clean_specialist_data(raw_export))
        assert ok is False
        assert "1 specialists missing geographic coordinates" in message

    def test_contact_problems_are_informational(self, raw_export):
        raw_export.loc[0, "Phone Number"] = "123"
        raw_export.loc[0, "Email"] = "not-an-email"
        ok, message = validate_specialist_data(clean_specialist_data(raw_export))
        assert ok is True
        assert "unrecognized phone numbers" in message
        assert "malformed email addresses" in message
