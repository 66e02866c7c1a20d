"""
File loading for specialist directory exports.

Exports arrive either as a local file (``directory.data_path``) or as bytes
downloaded from S3. Both paths go through ``load_dataframe``.

Supported Formats:
- CSV (.csv) - primary export format
- Excel (.xlsx via openpyxl, .xls via xlrd)
- Parquet (.parquet)
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)


def looks_like_excel_bytes(buffer: BytesIO) -> bool:
    """Check the first bytes for an XLSX (ZIP ``PK``) or XLS (BIFF) signature."""
    buffer.seek(0)
    head = buffer.read(4)
    buffer.seek(0)
    if not head:
        return False
    return head.startswith(b"PK") or head[:4] == b"\xd0\xcf\x11\xe0"


def looks_like_parquet_bytes(buffer: BytesIO) -> bool:
    buffer.seek(0)
    head = buffer.read(4)
    buffer.seek(0)
    return head == b"PAR1"


def detect_file_format(filename: Optional[str] = None, buffer: Optional[BytesIO] = None) -> Optional[str]:
    """Detect the export format from the filename extension or buffer content.

    Args:
        filename: Optional filename to check for extension
        buffer: Optional buffer to inspect when the filename is inconclusive

    Returns:
        'csv', 'xlsx', 'xls', 'parquet', or None
    """
    if filename:
        suffix = Path(filename).suffix.lower()
        if suffix in (".csv", ".xlsx", ".xls", ".parquet"):
            return suffix.lstrip(".")

    if buffer is not None:
        if looks_like_parquet_bytes(buffer):
            return "parquet"
        if looks_like_excel_bytes(buffer):
            return "xlsx"
        return "csv"

    return None


def _read(source: Union[Path, BytesIO], format_type: Optional[str]) -> pd.DataFrame:
    if format_type == "csv":
        return pd.read_csv(source)
    if format_type == "parquet":
        return pd.read_parquet(source)
    if format_type == "xlsx":
        return pd.read_excel(source, engine="openpyxl")
    if format_type == "xls":
        return pd.read_excel(source, engine="xlrd")
    raise ValueError(f"Unsupported file type: {format_type}")


def load_dataframe(raw_input: Union[Path, str, bytes, BytesIO], *, filename: Optional[str] = None) -> pd.DataFrame:
    """Load an export from a path or in-memory bytes.

    Args:
        raw_input: File path, raw bytes or buffer
        filename: Optional filename hint for buffers (format detection, logging)

    Returns:
        pd.DataFrame with whitespace-stripped column names

    Raises:
        FileNotFoundError: If a file path doesn't exist
        ValueError: If the format is unsupported
    """
    if isinstance(raw_input, (Path, str)):
        path = Path(raw_input)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        logger.info("Loading specialist data from %s", path)
        df = _read(path, detect_file_format(path.name))
    else:
        buffer = raw_input if isinstance(raw_input, BytesIO) else BytesIO(bytes(raw_input))
        logger.info("Loading specialist data from memory (source: %s)", filename or "unknown")
        format_type = detect_file_format(filename, buffer)
        buffer.seek(0)
        df = _read(buffer, format_type)

    df.columns = [str(col).strip() for col in df.columns]
    return df


__all__ = [
    "detect_file_format",
    "load_dataframe",
    "looks_like_excel_bytes",
    "looks_like_parquet_bytes",
]
