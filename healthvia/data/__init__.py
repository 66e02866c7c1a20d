"""Record-store package for the HealthVia specialist directory."""

from .ingestion import (
    DataIngestionManager,
    DataSource,
    DirectorySnapshot,
    get_data_ingestion_status,
    load_directory_snapshot,
    refresh_data_cache,
)

__all__ = [
    "DataIngestionManager",
    "DataSource",
    "DirectorySnapshot",
    "get_data_ingestion_status",
    "load_directory_snapshot",
    "refresh_data_cache",
]
