"""
Runtime configuration for Maia.

Values come from the environment, optionally seeded from a `.env` file in
the project root:
- MAIA_HOME: directory for durable local state (default: ~/.maia)
- MAIA_LANGUAGE: UI language used when no preference has been saved
- MAIA_LOG_LEVEL: log level for the command line front end
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")

PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"
LEARN_LINES_DIR = DATA_DIR / "learn_lines"
TRANSLATIONS_DIR = DATA_DIR / "translations"

DEFAULT_STATE_DIR = Path(os.environ.get("MAIA_HOME", Path.home() / ".maia"))
DEFAULT_LANGUAGE = os.environ.get("MAIA_LANGUAGE", "en")
LOG_LEVEL = os.environ.get("MAIA_LOG_LEVEL", "INFO").upper()

# Well-known keys in the local key-value store
PROFILE_KEY = "userProfile"
LANGUAGE_KEY = "preferredLanguage"

DEFAULT_RECOMMENDATION_LIMIT = 3
