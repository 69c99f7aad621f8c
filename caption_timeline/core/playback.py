"""Per-tick caption queries for frame-driven playback.

WHY: Renderers think in frames, not milliseconds, and they need one call
per frame that answers "what do I draw now?". This module converts frame
numbers to elapsed time and combines the resolver and the window
selector into that single query.

HOW: caption_at() resolves the active word and selects its window. When
nothing is active under the karaoke preset, a small idle policy decides
what stays on screen between words.

RULES:
- frame_to_ms(frame, fps) = frame / fps * 1000; fps must be positive
- Karaoke idle policies:
    hold — window around the nearest prior word, nothing highlighted;
           before the first word, falls back to lead
    lead — select_window(words, None, karaoke): the opening words
    hide — nothing drawn
- Line presets draw nothing when no word is active, whatever the policy
"""

from __future__ import annotations

from typing import Union

from caption_timeline.core.ir import Preset
from caption_timeline.core.resolver import (
    WordSequence,
    resolve_active_index,
    resolve_anchor_index,
)
from caption_timeline.core.window import CaptionWindow, select_window, window_bounds

IDLE_HOLD = "hold"
IDLE_LEAD = "lead"
IDLE_HIDE = "hide"
KARAOKE_IDLE_POLICIES = (IDLE_HOLD, IDLE_LEAD, IDLE_HIDE)


def frame_to_ms(frame: float, fps: float) -> float:
    """Convert a frame number to elapsed milliseconds.

    Raises:
        ValueError: If fps is not positive.
    """
    if fps <= 0:
        raise ValueError("fps must be positive, got {}".format(fps))
    return frame / fps * 1000


def caption_at(
    words: WordSequence,
    time_ms: float,
    preset: Union[Preset, str],
    karaoke_idle: str = IDLE_HOLD,
) -> CaptionWindow:
    """Return the caption window to draw at ``time_ms``.

    Raises:
        ValueError: On an unknown preset or karaoke idle policy.
    """
    preset = Preset.parse(preset)
    if karaoke_idle not in KARAOKE_IDLE_POLICIES:
        raise ValueError(
            "Unknown karaoke idle policy '{}'. Available: {}".format(
                karaoke_idle, ", ".join(KARAOKE_IDLE_POLICIES)
            )
        )

    active = resolve_active_index(words, time_ms)
    if active is not None or preset is not Preset.KARAOKE:
        return select_window(words, active, preset)

    if karaoke_idle == IDLE_HIDE:
        return CaptionWindow(preset=preset)

    if karaoke_idle == IDLE_HOLD:
        anchor = resolve_anchor_index(words, time_ms)
        if anchor is not None:
            start, stop = window_bounds(len(words), anchor, preset)
            return CaptionWindow(preset=preset, offset=start, words=tuple(words[start:stop]))

    return select_window(words, None, preset)


def caption_at_frame(
    words: WordSequence,
    frame: float,
    fps: float,
    preset: Union[Preset, str],
    karaoke_idle: str = IDLE_HOLD,
) -> CaptionWindow:
    return caption_at(words, frame_to_ms(frame, fps), preset, karaoke_idle)
