"""SubRip (SRT) codec for caption timelines.

WHY: SRT is the one interchange format the caption engine owns. Export
turns a word timeline into cues; import turns any SRT file back into a
timeline the player can use.

HOW: The public entry points are words_to_srt() and srt_to_words().
words_to_srt() resolves a grouping preset (or takes a custom config),
copies it, groups the words into cues and writes the document.
srt_to_words() parses the document and produces one synthetic Word per
cue.

RULES:
- Grouping presets: "default" (700 ms gap, 12 words) and "social"
- A custom config overrides the preset entirely
- Never mutate the preset constants — copies are made internally
- The round trip is cue-for-cue, not word-for-word: SRT keeps no
  per-word timing, so each decoded Word spans a whole cue
"""

import copy
from typing import Dict, List, Optional, Sequence

from caption_timeline import config as settings
from caption_timeline.core.ir import Timeline, Word

from .core import generate_srt, group_cues, ms_to_srt_time, parse_srt, srt_time_to_ms
from .models import Cue
from .presets import GROUPING_DEFAULT, GROUPING_PRESETS, GROUPING_SOCIAL

__all__ = [
    "words_to_srt",
    "srt_to_words",
    "resolve_grouping",
    "default_grouping",
    "group_cues",
    "parse_srt",
    "ms_to_srt_time",
    "srt_time_to_ms",
    "Cue",
    "GROUPING_PRESETS",
    "GROUPING_DEFAULT",
    "GROUPING_SOCIAL",
]


def default_grouping() -> Dict:
    """The "default" grouping preset with environment overrides applied."""
    cfg = copy.deepcopy(GROUPING_DEFAULT)
    cfg["max_gap_ms"] = settings.CAPTION_MAX_GAP_MS
    cfg["max_words"] = settings.CAPTION_MAX_WORDS
    cfg["max_cue_ms"] = settings.CAPTION_MAX_CUE_MS
    return cfg


def resolve_grouping(preset: str = "default", config: Optional[Dict] = None) -> Dict:
    """Return a private copy of the grouping config to use.

    Raises:
        ValueError: If preset name is not recognized and no config is provided.
    """
    if config is not None:
        return copy.deepcopy(config)
    if preset not in GROUPING_PRESETS:
        raise ValueError(
            "Unknown grouping preset '{}'. Available: {}".format(
                preset, ", ".join(GROUPING_PRESETS.keys())
            )
        )
    if preset == "default":
        return default_grouping()
    return copy.deepcopy(GROUPING_PRESETS[preset])


def words_to_srt(
    words: Sequence[Word],
    preset: str = "default",
    config: Optional[Dict] = None,
) -> str:
    """Format timed words into an SRT document.

    Args:
        words: Timeline or sequence of Word objects, in playback order.
        preset: Grouping preset name ("default", "social").
        config: Optional custom grouping config. If provided, preset is ignored.

    Returns:
        SRT document; "" for an empty word sequence.

    Raises:
        ValueError: If preset name is not recognized and no config is provided.
    """
    cfg = resolve_grouping(preset, config)
    if not words:
        return ""
    return generate_srt(group_cues(words, cfg))


def srt_to_words(srt_text: str) -> Timeline:
    """Parse an SRT document into a timeline of one synthetic Word per cue."""
    cues: List[Cue] = parse_srt(srt_text)
    return Timeline(cue.to_word() for cue in cues)
