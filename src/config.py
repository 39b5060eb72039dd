"""
FreestyleHelper - Configuration
All settings loaded from environment variables with sensible defaults.

The application keeps no persistent state: the Swedish rhyme cache lives in
process memory and is rebuilt on every restart.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
_ = load_dotenv()

# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8000"))
APP_ENV = os.getenv("APP_ENV", "development")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
DEBUG = os.getenv("DEBUG", "true").lower() == "true"

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent

TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

# ---------------------------------------------------------------------------
# Logging: stdout only
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------
SUPPORTED_LANGUAGES = {"en": "English", "sv": "Swedish"}

# ---------------------------------------------------------------------------
# Outbound HTTP
# ---------------------------------------------------------------------------
# Descriptive client identifier sent to the rhyme sources
HTTP_USER_AGENT = os.getenv(
    "HTTP_USER_AGENT",
    "FreestyleHelper/1.0 (lyric writing aid; +https://github.com/freestyle-helper)",
)

# Swedish rhyme dictionary page, templated on the URL-encoded word
SWEDISH_RHYME_URL = os.getenv(
    "SWEDISH_RHYME_URL", "https://www.rimlexikon.se/rimord/{word}"
)
SWEDISH_FETCH_TIMEOUT = float(os.getenv("SWEDISH_FETCH_TIMEOUT", "5"))
SWEDISH_ACCEPT_LANGUAGE = "sv-SE,sv;q=0.9,en;q=0.5"

# Datamuse word API (English)
DATAMUSE_API_URL = os.getenv("DATAMUSE_API_URL", "https://api.datamuse.com/words")
DATAMUSE_TIMEOUT = float(os.getenv("DATAMUSE_TIMEOUT", "5"))

# ---------------------------------------------------------------------------
# Rhyme acquisition
# ---------------------------------------------------------------------------
RHYME_CACHE_TTL_HOURS = float(os.getenv("RHYME_CACHE_TTL_HOURS", "24"))
RHYME_CACHE_TTL_SECONDS = RHYME_CACHE_TTL_HOURS * 60 * 60

DEFAULT_RHYME_LIMIT = int(os.getenv("DEFAULT_RHYME_LIMIT", "10"))

# Number of rhyme suggestions attached to every scaffold line
SUGGESTIONS_PER_LINE = int(os.getenv("SUGGESTIONS_PER_LINE", "5"))
