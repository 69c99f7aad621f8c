"""Caption window selection around the active word.

WHY: Showing only the active word flickers; showing the whole transcript
is unreadable. Each preset shows a fixed-size, clamped slice of the
timeline around the active word. Line presets favour upcoming words;
karaoke shows a wider row and highlights the word being spoken.

HOW: WINDOW_SHAPES maps each preset to (words before, exclusive words
after) relative to the active index. select_window() clamps that range
to the timeline and wraps the slice in a CaptionWindow.

RULES:
- bottom / top: words[max(0, i-5) : min(len, i+6)], nothing highlighted
- karaoke: words[max(0, i-7) : min(len, i+12)], exactly words[i] highlighted
- active_index None: empty window for bottom / top; karaoke still computes
  its window from the -1 sentinel (the opening words), nothing highlighted
- Out-of-range active indices are treated as None
- Never indexes outside [0, len); pure and stateless
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from caption_timeline.core.ir import Preset, Word
from caption_timeline.core.resolver import WordSequence

# (before, after): the window is [i - before, i + after), clamped.
WINDOW_SHAPES: Dict[Preset, Tuple[int, int]] = {
    Preset.BOTTOM: (5, 6),
    Preset.TOP: (5, 6),
    Preset.KARAOKE: (7, 12),
}

# Index the karaoke window is computed from when no word is active.
NO_ACTIVE_SENTINEL = -1


@dataclass(frozen=True)
class CaptionWindow:
    """The words to draw for one tick, plus the highlighted one.

    Attributes:
        preset: Display preset the window was computed for.
        offset: Timeline index of the first displayed word.
        words: Displayed words in timeline order.
        highlight_index: Index within ``words`` of the highlighted word,
            or None when nothing is highlighted.
    """

    preset: Preset
    offset: int = 0
    words: Tuple[Word, ...] = ()
    highlight_index: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.words

    @property
    def text(self) -> str:
        """Single-line caption text (word texts joined by single spaces)."""
        return " ".join(w.text for w in self.words)

    @property
    def highlighted_word(self) -> Optional[Word]:
        if self.highlight_index is None:
            return None
        return self.words[self.highlight_index]

    @property
    def tokens(self) -> List[Tuple[Word, bool]]:
        """(word, highlighted) pairs for per-token rendering."""
        return [(w, i == self.highlight_index) for i, w in enumerate(self.words)]


def window_bounds(length: int, active_index: int, preset: Preset) -> Tuple[int, int]:
    """Clamped [start, stop) bounds of the window around ``active_index``."""
    before, after = WINDOW_SHAPES[preset]
    start = max(0, active_index - before)
    stop = min(length, active_index + after)
    return start, max(start, stop)


def select_window(
    words: WordSequence,
    active_index: Optional[int],
    preset: Union[Preset, str],
) -> CaptionWindow:
    """Select the displayed words for the given active index and preset.

    Args:
        words: A Timeline or any sequence of Word objects.
        active_index: Result of resolve_active_index(), or None.
        preset: Display preset (member or name).

    Returns:
        A CaptionWindow; empty when there is nothing to draw.

    Raises:
        ValueError: If ``preset`` names an unknown preset.
    """
    preset = Preset.parse(preset)
    length = len(words)

    if active_index is not None and not 0 <= active_index < length:
        active_index = None

    if active_index is None:
        if preset is not Preset.KARAOKE or length == 0:
            return CaptionWindow(preset=preset)
        start, stop = window_bounds(length, NO_ACTIVE_SENTINEL, preset)
        return CaptionWindow(preset=preset, offset=start, words=tuple(words[start:stop]))

    start, stop = window_bounds(length, active_index, preset)
    highlight = active_index - start if preset is Preset.KARAOKE else None
    return CaptionWindow(
        preset=preset,
        offset=start,
        words=tuple(words[start:stop]),
        highlight_index=highlight,
    )
