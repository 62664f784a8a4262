"""Environment loading and defaults."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path)


def get_deepgram_api_key() -> str:
    key = os.environ.get("DEEPGRAM_API_KEY", "")
    if not key:
        raise RuntimeError(
            "DEEPGRAM_API_KEY not set. Add it to .env or export it."
        )
    return key


DEFAULT_DEEPGRAM_MODEL = "nova-2"
DEFAULT_LANGUAGE = "en"

# Maximum length of one audio window sent for transcription
DEFAULT_CHUNK_SECONDS = float(os.environ.get("AVIM_CHUNK_SECONDS", "300"))

DISCREPANCY_WARNING_SECONDS = 1.0
AUTOFIX_MAX_STDDEV = 1.0
SUGGESTED_SAMPLES = 3
TIME_NUDGE_SECONDS = 0.1

# Lines kept for the debug log panel
DEBUG_LOG_LINES = 500

CACHE_APP_NAME = "avim"
PROJECT_SUFFIX = ".avim"
