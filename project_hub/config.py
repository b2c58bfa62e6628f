"""Configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import Iterable, List, Optional

from dotenv import load_dotenv

APP_DIR = Path(__file__).resolve().parent


def _env_candidates() -> List[Path]:
    """PROJECT_HUB_ENV_FILE if set, else .env beside the app, then at the repo root."""
    explicit = os.getenv("PROJECT_HUB_ENV_FILE")
    if explicit:
        return [Path(explicit)]
    return [APP_DIR / ".env", APP_DIR.parent / ".env"]


def load_env(candidates: Optional[Iterable[Path]] = None) -> Optional[Path]:
    """Load the first existing env file. Variables already set in the process win."""
    for path in candidates if candidates is not None else _env_candidates():
        if path.is_file() and load_dotenv(path, override=False):
            return path
    return None


load_env()

# Telerivet credentials – never hardcode
TELERIVET_API_KEY: str = os.getenv("TELERIVET_API_KEY", "")
TELERIVET_PROJECT_ID: str = os.getenv("TELERIVET_PROJECT_ID", "")
TELERIVET_TABLE_ID: str = os.getenv("TELERIVET_TABLE_ID", "")
DEMO_TELERIVET_TABLE_ID: str = os.getenv("DEMO_TELERIVET_TABLE_ID", "")
TELERIVET_API_BASE: str = os.getenv("TELERIVET_API_BASE", "https://api.telerivet.com/v1")

# HTTP / fetch settings
HTTP_TIMEOUT_SECONDS: float = 30.0
HTTP_MAX_RETRIES: int = 3
HTTP_USER_AGENT: str = "ProjectHub/1.0"

# Logging: level name (DEBUG, INFO, WARNING, ...)
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Day boundaries for the date-range filter are computed in this zone
DATE_FILTER_TIMEZONE: str = os.getenv("DATE_FILTER_TIMEZONE", "UTC")

# Row mapping defaults (remote vars are sparse; never show blanks)
DEFAULT_TITLE: str = "Untitled Project"
DEFAULT_DESCRIPTION: str = "No description available"
DEFAULT_SERIAL_NO: str = "000"
DEFAULT_CATEGORY: str = "Uncategorized"
DEFAULT_INDUSTRY: str = "Uncategorized"
DEFAULT_CREATE_INDUSTRY: str = "General"
DEFAULT_OVERVIEW: str = "No overview available"
DEFAULT_CARD_IMAGE: str = "no-image.png"

# External links shown on a project card, in display order.
# Keyed by the row var prefix: "<prefix>_url" / "<prefix>_description".
PROJECT_LINK_TYPES: dict = {
    "telerivet": {
        "name": "Telerivet Project",
        "description": "Campaign automation and tracking",
        "icon": "📱",
    },
    "canva": {
        "name": "Canva Decks",
        "description": "Brand-aligned visual assets",
        "icon": "🎨",
    },
    "hubspot": {
        "name": "HubSpot Article",
        "description": "Performance metrics and leads",
        "icon": "📊",
    },
    "live": {
        "name": "Live Project",
        "description": "View the live project",
        "icon": "🌐",
    },
}
