"""
Configuration and secrets management for the HealthVia specialist directory.

All settings are read from Streamlit's secrets (``.streamlit/secrets.toml``)
with defaults for every key, so the app runs without any secrets file.

Usage:
    from healthvia.utils.config import get_api_config, get_directory_options

    geocoding_config = get_api_config("geocoding")
    user_agent = geocoding_config.get("nominatim_user_agent")

    options = get_directory_options()
    cities = options.cities

Example secrets.toml:
    [directory]
    cities = ["Delhi", "Mumbai"]
    data_path = "data/specialists.csv"

    [s3]
    aws_access_key_id = "..."
    aws_secret_access_key = "..."
    bucket_name = "healthvia-exports"
"""

import logging
from pathlib import Path
from typing import Any, Dict

import streamlit as st

from healthvia.models import DEFAULT_CITIES, DEFAULT_SPECIALTIES, DirectoryOptions

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = "data/specialists.csv"


def get_secret(key_path: str, default: Any = None) -> Any:
    """
    Safely retrieve a secret from Streamlit's secrets management.

    Args:
        key_path: Dot-notation path to the secret (e.g., 's3.bucket_name')
        default: Default value if secret is not found

    Returns:
        The secret value or default if not found

    Examples:
        >>> get_secret('geocoding.nominatim_user_agent', 'healthvia')
        >>> get_secret('app.debug_mode', False)
    """
    try:
        keys = key_path.split(".")
        value = st.secrets

        for key in keys:
            try:
                value = value[key]
            except Exception:
                return default

        return value
    except Exception as e:
        logger.warning(f"Failed to retrieve secret '{key_path}': {e}")
        return default


def get_api_config(api_name: str) -> Dict[str, Any]:
    """
    Get configuration for a specific external service.

    Args:
        api_name: Name of the service ('geocoding' or 's3')

    Returns:
        Dictionary containing the service configuration
    """
    if api_name == "geocoding":
        return {
            "nominatim_user_agent": get_secret("geocoding.nominatim_user_agent", "healthvia_directory"),
            "country_codes": get_secret("geocoding.country_codes", "in"),
            "request_timeout": get_secret("geocoding.request_timeout", 10),
            "rate_limit_delay": get_secret("geocoding.rate_limit_delay", 1.0),
            "max_retries": get_secret("geocoding.max_retries", 3),
        }
    elif api_name == "s3":
        return {
            "aws_access_key_id": get_secret("s3.aws_access_key_id", ""),
            "aws_secret_access_key": get_secret("s3.aws_secret_access_key", ""),
            "bucket_name": get_secret("s3.bucket_name", ""),
            "region_name": get_secret("s3.region_name", "ap-south-1"),
            "specialists_folder": get_secret("s3.specialists_folder", "specialists"),
        }
    else:
        return {}


def get_directory_config() -> Dict[str, Any]:
    """
    Get directory configuration: selectable options and the local data file.

    Returns:
        Dictionary containing directory configuration
    """
    return {
        "cities": list(get_secret("directory.cities", list(DEFAULT_CITIES))),
        "specialties": list(get_secret("directory.specialties", list(DEFAULT_SPECIALTIES))),
        "data_path": get_secret("directory.data_path", DEFAULT_DATA_PATH),
    }


def get_directory_options() -> DirectoryOptions:
    config = get_directory_config()
    return DirectoryOptions.from_lists(config["cities"], config["specialties"])


def get_app_config() -> Dict[str, Any]:
    """
    Get general application configuration.

    Returns:
        Dictionary containing app configuration
    """
    return {
        "environment": get_secret("app.environment", "production"),
        "debug_mode": get_secret("app.debug_mode", False),
        "log_level": get_secret("app.log_level", "INFO"),
    }


def is_api_enabled(api_name: str) -> bool:
    """
    Check if a specific service is enabled and properly configured.

    Args:
        api_name: Name of the service to check

    Returns:
        True if the service has its required configuration
    """
    if api_name == "s3":
        config = get_api_config("s3")
        return (
            bool(config["aws_access_key_id"]) and bool(config["aws_secret_access_key"]) and bool(config["bucket_name"])
        )
    elif api_name == "geocoding":
        return bool(get_api_config("geocoding")["nominatim_user_agent"])
    else:
        return False


def validate_configuration() -> Dict[str, str]:
    """
    Validate the application configuration and return any warnings or errors.

    Returns:
        Dictionary with configuration validation results
    """
    issues = {}

    directory_config = get_directory_config()
    for key in ("cities", "specialties"):
        values = directory_config[key]
        if not values:
            issues[key] = f"No {key} configured; the {key} filter will only offer 'all'"
        elif len(set(values)) != len(values):
            issues[key] = f"Duplicate entries in configured {key}"

    if not is_api_enabled("s3"):
        data_path = Path(directory_config["data_path"])
        if not data_path.exists():
            issues["data"] = f"S3 is not configured and local data file '{data_path}' does not exist"

    app_config = get_app_config()
    if app_config["environment"] not in ["development", "staging", "production"]:
        issues["app"] = f"Unknown environment: {app_config['environment']}"

    return issues


def configure_logging() -> None:
    level_name = str(get_app_config()["log_level"]).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


if __name__ == "__main__":
    print("HealthVia Specialist Directory - Configuration Status")
    print("=" * 50)

    issues = validate_configuration()
    if issues:
        print("⚠️  Configuration Issues Found:")
        for component, issue in issues.items():
            print(f"  - {component}: {issue}")
    else:
        print("✅ Configuration validation passed")

    print("\n📋 Service Status:")
    for api in ["s3", "geocoding"]:
        status = "✅ Enabled" if is_api_enabled(api) else "❌ Disabled/Not configured"
        print(f"  - {api}: {status}")

    print(f"\n🔧 Environment: {get_app_config()['environment']}")
