"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration."""

    # Logging
    LOG_LEVEL = os.getenv("CATALOG_LOG_LEVEL", "INFO").upper()

    # Output
    DEFAULT_FORMAT = os.getenv("CATALOG_DEFAULT_FORMAT", "table")
    TRUNCATE_WIDTH = int(os.getenv("CATALOG_TRUNCATE_WIDTH", "40"))

    # Search
    CASE_SENSITIVE_SEARCH = _env_flag("CATALOG_CASE_SENSITIVE")
