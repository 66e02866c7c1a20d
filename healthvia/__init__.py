"""HealthVia: find healthcare specialists by city, specialty, name and proximity."""

__version__ = "1.0.0"
