"""
AWS S3 client utilities for the HealthVia specialist directory.

The directory export (one CSV/Excel/Parquet file per refresh) is published to
an S3 folder; the most recently modified file is the current directory.

Usage:
    from healthvia.utils.s3_client import S3DataClient

    client = S3DataClient()
    if client.is_configured():
        latest = client.download_latest_file()
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import List, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import get_api_config, is_api_enabled

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".csv", ".xlsx", ".xls", ".parquet")


class S3DataClient:
    """Client for accessing specialist directory exports in AWS S3."""

    def __init__(self, folder: Optional[str] = None):
        """Initialize the S3 client with configuration from secrets.

        Args:
            folder: Optional override of the configured ``s3.specialists_folder``
        """
        self.config = get_api_config("s3")
        self.enabled = is_api_enabled("s3")
        self._client = None

        folder = folder or self.config.get("specialists_folder") or "specialists"
        self.folder = folder if folder.endswith("/") else folder + "/"

    def is_configured(self) -> bool:
        """Check if S3 is properly configured."""
        return self.enabled

    def _get_client(self):
        """Lazy initialization of boto3 client."""
        if self._client is None and self.enabled:
            try:
                self._client = boto3.client(
                    "s3",
                    aws_access_key_id=self.config["aws_access_key_id"],
                    aws_secret_access_key=self.config["aws_secret_access_key"],
                    region_name=self.config["region_name"],
                )
            except (BotoCoreError, ClientError) as e:
                logger.error(f"Failed to initialize S3 client: {e}")
                self.enabled = False
        return self._client

    def list_files(self) -> List[Tuple[str, datetime]]:
        """
        List directory export files, newest first.

        Returns:
            List of tuples (filename, last_modified_datetime)
        """
        client = self._get_client()
        if not client:
            return []

        try:
            paginator = client.get_paginator("list_objects_v2")
            files = []
            for page in paginator.paginate(Bucket=self.config["bucket_name"], Prefix=self.folder):
                for obj in page.get("Contents", []):
                    if obj["Key"] == self.folder:
                        continue
                    if obj["Key"].lower().endswith(SUPPORTED_EXTENSIONS):
                        files.append((obj["Key"].split("/")[-1], obj["LastModified"]))

            return sorted(files, key=lambda x: x[1], reverse=True)

        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to list files in S3 folder '{self.folder}': {e}")
            return []

    def download_file(self, filename: str) -> Optional[bytes]:
        """
        Download a specific export file from S3.

        Args:
            filename: Name of the file inside the specialists folder

        Returns:
            File bytes or None if download fails
        """
        client = self._get_client()
        if not client:
            return None

        s3_key = f"{self.folder}{filename}"

        try:
            buffer = BytesIO()
            client.download_fileobj(self.config["bucket_name"], s3_key, buffer)
            buffer.seek(0)
            return buffer.getvalue()

        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to download file '{s3_key}' from S3: {e}")
            return None

    def download_latest_file(self) -> Optional[Tuple[bytes, str]]:
        """
        Download the most recently modified export.

        Returns:
            Tuple of (file_bytes, filename) or None if no files found
        """
        files = self.list_files()
        if not files:
            logger.warning(f"No files found in S3 folder '{self.folder}'")
            return None

        latest_filename, last_modified = files[0]
        logger.info(f"Downloading latest file '{latest_filename}' from S3 (modified: {last_modified})")

        file_bytes = self.download_file(latest_filename)
        if file_bytes:
            return file_bytes, latest_filename
        return None
