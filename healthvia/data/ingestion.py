"""
Data Ingestion Module - the specialist record store.

Serves the full specialist directory ordered by name, which is the fallback
ranking used by discovery when no user location is known. The latest export
is read from S3 when configured, otherwise from the local data file.

Key Features:
- S3 download of the newest export with automatic format detection
- Local file fallback (``directory.data_path``)
- Validation at the boundary: invalid rows are dropped and counted
- Streamlit cache integration (1 hour TTL) with explicit refresh
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
import streamlit as st

from healthvia.data.io_utils import load_dataframe
from healthvia.models import Specialist
from healthvia.utils.cleaning import clean_specialist_data, dataframe_to_specialists, validate_specialist_data
from healthvia.utils.config import get_directory_config
from healthvia.utils.s3_client import S3DataClient

logger = logging.getLogger(__name__)


class DataSource(Enum):
    """Where a directory snapshot was read from."""

    S3 = "s3"
    LOCAL_FILE = "local_file"


@dataclass
class DirectorySnapshot:
    """Specialists loaded in one pass, with provenance and quality summary."""

    specialists: List[Specialist]
    source: DataSource
    source_name: str
    rejected_count: int = 0
    quality_ok: bool = True
    quality_message: str = ""
    loaded_at: datetime = field(default_factory=datetime.now)


def sort_by_name(specialists: List[Specialist]) -> List[Specialist]:
    """Name-ascending order, the contract of "select all ordered by name"."""
    return sorted(specialists, key=lambda s: (s.name.casefold(), s.name))


class DataIngestionManager:
    """
    Loads the specialist directory from S3 or the local data file.

    Usage:
        manager = DataIngestionManager()
        snapshot = manager.load_directory()
        specialists = snapshot.specialists  # ordered by name
    """

    def __init__(self, data_path: Optional[str] = None, s3_client: Optional[S3DataClient] = None):
        self.cache_ttl = 3600
        self.data_path = Path(data_path or get_directory_config()["data_path"])
        self._s3_client = s3_client or S3DataClient()

    def _read_raw(self) -> Tuple[pd.DataFrame, DataSource, str]:
        if self._s3_client.is_configured():
            latest = self._s3_client.download_latest_file()
            if latest:
                file_bytes, filename = latest
                return load_dataframe(file_bytes, filename=filename), DataSource.S3, filename
            logger.warning("S3 is configured but no directory export could be downloaded; using local file")

        return load_dataframe(self.data_path), DataSource.LOCAL_FILE, str(self.data_path)

    def load_directory(self) -> DirectorySnapshot:
        """
        Read, clean and validate the directory.

        Returns:
            DirectorySnapshot with specialists ordered by name

        Raises:
            FileNotFoundError: If no S3 export is available and the local file is missing
            ValueError: If the export cannot be parsed or lacks required columns
        """
        raw_df, source, source_name = self._read_raw()
        df = clean_specialist_data(raw_df)
        quality_ok, quality_message = validate_specialist_data(df)
        specialists, rejected = dataframe_to_specialists(df)

        logger.info(
            f"Loaded {len(specialists)} specialists from {source.value} '{source_name}' ({rejected} rows rejected)"
        )
        return DirectorySnapshot(
            specialists=sort_by_name(specialists),
            source=source,
            source_name=source_name,
            rejected_count=rejected,
            quality_ok=quality_ok,
            quality_message=quality_message,
        )


@st.cache_data(ttl=3600, show_spinner=False)
def load_directory_snapshot(data_path: Optional[str] = None) -> DirectorySnapshot:
    return DataIngestionManager(data_path=data_path).load_directory()


def refresh_data_cache() -> None:
    """Drop the cached directory so the next load re-reads the source."""
    load_directory_snapshot.clear()
    logger.info("Specialist directory cache cleared")


def get_data_ingestion_status(data_path: Optional[str] = None) -> dict:
    """Describe where the directory would be loaded from, for display."""
    manager = DataIngestionManager(data_path=data_path)
    return {
        "s3_configured": manager._s3_client.is_configured(),
        "s3_folder": manager._s3_client.folder,
        "local_path": str(manager.data_path),
        "local_file_exists": manager.data_path.exists(),
    }
