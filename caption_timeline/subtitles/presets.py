"""Cue grouping presets for SRT export.

WHY: Different delivery targets want different cue sizes. A desktop
player is happy with a dozen words per cue; a vertical social clip
wants a few words at a time. Keeping the thresholds as named plain
dicts lets callers pick a preset by name, or pass their own dict.

HOW: Each preset holds three thresholds. A new cue starts when the
silence between two words exceeds max_gap_ms, when the current cue
already holds max_words words, or (when max_cue_ms is not None) when
adding the next word would stretch the cue past max_cue_ms.

RULES:
- Presets are frozen constants — never mutate them at runtime
- Callers copy a preset before modifying it (words_to_srt does this)
- max_cue_ms None disables the duration bound
"""

from typing import Dict

GROUPING_DEFAULT: Dict = {
    "max_gap_ms": 700,
    "max_words": 12,
    "max_cue_ms": None,
}

# Short cues for 9:16 vertical video
GROUPING_SOCIAL: Dict = {
    "max_gap_ms": 500,
    "max_words": 5,
    "max_cue_ms": 2500,
}

GROUPING_PRESETS: Dict[str, Dict] = {
    "default": GROUPING_DEFAULT,
    "social": GROUPING_SOCIAL,
}
