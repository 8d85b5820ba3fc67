"""Configuration constants and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The two parsing constants (XML end epsilon, minimum
letter count) have no documented rationale; keeping them here at their
historical defaults lets deployments tune them without code changes.

HOW: python-dotenv loads the .env file on import. Constants are defined
at module level from environment variables with defaults.
default_parse_options() bundles the parsing constants into the
ParseOptions value the readers take.

RULES:
- All defaults can be overridden via CAPTION_SYNC_* environment variables
- A malformed numeric override raises ValueError naming the variable
- SUPPORTED_EXTENSIONS lists accepted caption file extensions
- Reader and core modules never import this module; options are passed in
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from caption_sync.core.ir import ParseOptions

# Load .env from the project root (where the script is run from)
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError("{} must be a number, got {!r}".format(name, raw)) from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError("{} must be an integer, got {!r}".format(name, raw)) from None


# ---------------------------------------------------------------------------
# Parsing constants
# ---------------------------------------------------------------------------

XML_END_EPSILON_S = _env_float("CAPTION_SYNC_XML_END_EPSILON", 0.01)
"""Gap left between consecutive XML transcript entries, in seconds."""

MIN_LETTER_COUNT = _env_int("CAPTION_SYNC_MIN_LETTER_COUNT", 2)
"""SRT lines need more than this many letters to be kept."""

# ---------------------------------------------------------------------------
# Playback polling and logging
# ---------------------------------------------------------------------------

POLL_INTERVAL_S = _env_float("CAPTION_SYNC_POLL_INTERVAL", 0.5)
"""How often a playback observer samples the active caption."""

LOG_LEVEL = os.getenv("CAPTION_SYNC_LOG_LEVEL", "WARNING").strip().upper()

# ---------------------------------------------------------------------------
# HTTP service
# ---------------------------------------------------------------------------

SERVER_HOST = os.getenv("CAPTION_SYNC_HOST", "127.0.0.1")
SERVER_PORT = _env_int("CAPTION_SYNC_PORT", 8000)
MAX_DOCUMENTS = _env_int("CAPTION_SYNC_MAX_DOCUMENTS", 100)

# ---------------------------------------------------------------------------
# Supported caption file extensions
# ---------------------------------------------------------------------------

SUPPORTED_EXTENSIONS: set[str] = {".srt", ".xml"}
"""Caption file extensions accepted by the CLI and HTTP service (lowercase, with dot)."""


def default_parse_options() -> ParseOptions:
    """Build ParseOptions from the configured constants."""
    return ParseOptions(
        xml_end_epsilon=XML_END_EPSILON_S,
        min_letter_count=MIN_LETTER_COUNT,
    )
