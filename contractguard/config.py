"""Configuration constants, paths, and LLM settings."""

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Load .env if present
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).parent.parent
_env_path = BASE_DIR / ".env"
if _env_path.exists():
    for _line in _env_path.read_text().splitlines():
        _line = _line.strip()
        if _line and not _line.startswith("#") and "=" in _line:
            _k, _, _v = _line.partition("=")
            os.environ.setdefault(_k.strip(), _v.strip().strip("\"'"))

# ---------------------------------------------------------------------------
# LLM Settings
# ---------------------------------------------------------------------------
API_KEY_ENV = "ANTHROPIC_API_KEY"
LLM_MODEL = os.environ.get("LLM_MODEL", "claude-sonnet-4-20250514")
LLM_TEMPERATURE = 0.1
LLM_MAX_TOKENS = 4000

# ---------------------------------------------------------------------------
# Pipeline thresholds
# ---------------------------------------------------------------------------
MIN_CONTRACT_LENGTH = 100

# ---------------------------------------------------------------------------
# Web
# ---------------------------------------------------------------------------
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")
    if o.strip()
]


def get_api_key() -> str:
    """Read the LLM credential at call time so it can change without re-import."""
    return os.environ.get(API_KEY_ENV, "").strip()
