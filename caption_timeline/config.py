"""Configuration defaults and .env loading.

WHY: Cue grouping thresholds, the default display preset and the
playback frame rate differ between projects. Keeping them as plain
module-level values, overridable from the environment, means nobody has
to dig through the codec to retune them.

HOW: python-dotenv loads the .env file on import. Each value is read
once with os.getenv and converted; env_int() gives a clear error when an
override is not an integer.

RULES:
- CAPTION_MAX_GAP_MS / CAPTION_MAX_WORDS / CAPTION_MAX_CUE_MS override the
  "default" grouping preset; an empty CAPTION_MAX_CUE_MS means no bound
- DEFAULT_PRESET must name a display preset (bottom, top, karaoke)
- Window shapes are code constants (core.window), not configuration
- Invalid integers raise ValueError naming the variable
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

# Load .env from the project root (where the command is run from)
load_dotenv()


def env_int(name: str, default: Optional[int]) -> Optional[int]:
    """Read an integer environment variable.

    RULES:
    - Unset or blank → default
    - Anything else must parse as an integer

    Raises:
        ValueError: If the variable is set to a non-integer value.
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "{} must be an integer, got {!r}. Fix it in the environment or .env file.".format(
                name, raw
            )
        ) from None


# ---------------------------------------------------------------------------
# SRT cue grouping
# ---------------------------------------------------------------------------

CAPTION_MAX_GAP_MS = env_int("CAPTION_MAX_GAP_MS", 700)
CAPTION_MAX_WORDS = env_int("CAPTION_MAX_WORDS", 12)
CAPTION_MAX_CUE_MS = env_int("CAPTION_MAX_CUE_MS", None)

# ---------------------------------------------------------------------------
# Playback and rendering
# ---------------------------------------------------------------------------

DEFAULT_PRESET = os.getenv("DEFAULT_PRESET", "bottom").strip().lower()
DEFAULT_FPS = env_int("DEFAULT_FPS", 30)
DEFAULT_KARAOKE_IDLE = os.getenv("DEFAULT_KARAOKE_IDLE", "hold").strip().lower()

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").strip().upper()
