"""
Streamlit app entrypoint - navigation and directory cache warm-up.

This module handles:
- Logging setup from ``app.log_level``
- Navigation to the Home, Specialists and Update Data pages
- Background warm-up of the specialist directory cache on startup
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import streamlit as st

from healthvia.utils.config import configure_logging, validate_configuration

st.set_page_config(page_title="HealthVia", page_icon="❤️", layout="wide")

logger = logging.getLogger(__name__)

STATUS_FILE = Path("data/processed/directory_load_status.txt")

__all__ = ["show_auto_update_status", "warm_directory_cache"]


def show_auto_update_status():
    """
    Display the result of the startup directory load, once.

    The background loader writes a status file instead of touching session
    state; the file is removed after it has been shown.
    """
    try:
        if not STATUS_FILE.exists():
            return
        text = STATUS_FILE.read_text(encoding="utf-8").strip()
        if text.startswith("✅"):
            st.success(text)
        elif text.startswith("❌"):
            st.error(text)
        else:
            st.info(text)
        STATUS_FILE.unlink()
    except OSError as e:
        logger.warning(f"Could not read directory status file: {e}")


def _write_status(text: str) -> None:
    try:
        STATUS_FILE.parent.mkdir(parents=True, exist_ok=True)
        STATUS_FILE.write_text(text, encoding="utf-8")
    except OSError:
        logger.exception("Failed to write directory status file")


def warm_directory_cache():
    """
    Load the specialist directory into Streamlit's cache.

    Runs in a background thread: no st.* UI calls here.
    """
    from healthvia.data.ingestion import load_directory_snapshot

    try:
        snapshot = load_directory_snapshot()
        msg = (
            f"✅ Directory loaded: {len(snapshot.specialists)} specialists from {snapshot.source.value}"
            + (f" ({snapshot.rejected_count} invalid rows skipped)" if snapshot.rejected_count else "")
        )
        logger.info(msg)
        _write_status(msg)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Directory load failed: {e}")
        _write_status(f"❌ Directory load failed: {e}")


_nav_items = [
    ("pages/0_🏠_Home.py", "Home", "🏠"),
    ("pages/1_🔎_Specialists.py", "Find Specialists", "🔎"),
    ("pages/30_🔄_Update_Data.py", "Update Data", "🔄"),
]


def _build_and_run_app():
    """Build navigation and start the background directory load."""
    configure_logging()

    nav_pages = [st.Page(path, title=title, icon=icon) for path, title, icon in _nav_items]

    # Once per browser session; the entrypoint reruns on every interaction
    if not st.session_state.get("directory_warmup_started"):
        st.session_state["directory_warmup_started"] = True
        for component, issue in validate_configuration().items():
            logger.warning(f"Configuration issue ({component}): {issue}")
        threading.Thread(target=warm_directory_cache, daemon=True).start()

    pg = st.navigation(nav_pages)
    show_auto_update_status()
    pg.run()


if __name__ == "__main__":
    _build_and_run_app()
