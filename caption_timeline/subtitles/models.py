"""Data model for SubRip cues.

WHY: SRT stores text per cue, not per word. The codec needs one
structured type for a cue on its way out (grouped from words) and on
its way in (parsed from a document).

RULES:
- index is 1-based, as written in the document
- start / end are integer milliseconds (SRT has millisecond resolution)
- text is the single-space join of the member words (or of the parsed
  text lines)
"""

from __future__ import annotations

from dataclasses import dataclass

from caption_timeline.core.ir import Word


@dataclass(frozen=True)
class Cue:
    """One SubRip subtitle block.

    Attributes:
        index: Sequence number, starting at 1.
        start: Start time in milliseconds.
        end: End time in milliseconds.
        text: Cue text on a single line.
    """

    index: int
    start: int
    end: int
    text: str

    def to_word(self) -> Word:
        """The synthetic Word standing in for this whole cue."""
        return Word(start=self.start, end=self.end, text=self.text)
