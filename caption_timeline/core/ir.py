"""Intermediate representation for word-timed caption timelines.

WHY: Transcription services return a flat list of ``{start, end, text}``
words in milliseconds. The resolver, the window selector, the subtitle
codec and every formatter need the same well-typed view of that list,
and playback needs to know once, up front, whether the list is safe to
search by bisection.

HOW: Three types form the IR:
  Word     — one timed display token (immutable)
  Preset   — closed enumeration of caption display modes
  Timeline — the ordered, read-only word sequence of one media asset

RULES:
- All times are in milliseconds from the start of the media
- Word and Timeline are never mutated; derive new views instead
- start <= end and non-decreasing starts are assumed, never enforced
- Timeline.indexable is computed once at construction; only an indexable
  timeline may be searched by bisection
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, Union, overload


@dataclass(frozen=True)
class Word:
    """A single timed caption token.

    RULES:
    - start / end: milliseconds from media start (float, ints are fine)
    - text: non-empty display token; may carry punctuation or be a
      sub-word fragment, the engine never splits or joins it
    """

    start: float
    end: float
    text: str

    def contains(self, time_ms: float) -> bool:
        """Half-open containment: start <= time_ms < end.

        Words with missing or non-numeric times contain nothing.
        """
        if not (is_finite_number(self.start) and is_finite_number(self.end)):
            return False
        return self.start <= time_ms < self.end

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end, "text": self.text}


class Preset(str, enum.Enum):
    """Caption display modes.

    WHY: The renderer offers three looks. ``bottom`` and ``top`` show one
    line of text and differ only in vertical placement; ``karaoke`` shows
    a wider row of individually styled tokens with the active one
    highlighted.

    RULES:
    - Inherits from str so values serialize cleanly to JSON
    - The preset never affects which word is active
    """

    BOTTOM = "bottom"
    TOP = "top"
    KARAOKE = "karaoke"

    @property
    def placement(self) -> str:
        """Vertical placement of the caption block ("top" or "bottom")."""
        return "top" if self is Preset.TOP else "bottom"

    @classmethod
    def parse(cls, value: Union[str, "Preset"]) -> "Preset":
        """Resolve a preset from a member or a case-insensitive name.

        Raises:
            ValueError: If the name is not a known preset.
        """
        if isinstance(value, Preset):
            return value
        name = str(value).strip().lower()
        for preset in cls:
            if preset.value == name:
                return preset
        raise ValueError(
            "Unknown preset '{}'. Available: {}".format(
                value, ", ".join(p.value for p in cls)
            )
        )


def is_finite_number(value: object) -> bool:
    """True for int/float values that are neither NaN nor infinite."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _is_indexable(words: Tuple[Word, ...]) -> bool:
    prev_end = None
    prev_start = None
    for w in words:
        if not (is_finite_number(w.start) and is_finite_number(w.end)):
            return False
        if w.start > w.end:
            return False
        if prev_start is not None and w.start < prev_start:
            return False
        if prev_end is not None and w.start < prev_end:
            return False
        prev_start = w.start
        prev_end = w.end
    return True


class Timeline:
    """The full ordered word sequence for one media asset.

    WHY: Playback queries run once per rendered frame. Checking the
    sortedness precondition on every query would cost as much as the
    linear scan it is meant to avoid, so it is checked once here and
    exposed as ``indexable``.

    HOW: Stores the words as a tuple, precomputes the start times for
    bisection, and implements the read-only sequence protocol.

    RULES:
    - indexable: finite times, start <= end, non-decreasing starts, and
      each word ends at or before the next one starts
    - Slicing returns a tuple of Word, not a Timeline
    - Owned by the caller; the engine only borrows it per query
    """

    __slots__ = ("_words", "_starts", "_indexable")

    def __init__(self, words: Iterable[Word] = ()) -> None:
        self._words: Tuple[Word, ...] = tuple(words)
        self._indexable = _is_indexable(self._words)
        self._starts: List[float] = [w.start for w in self._words] if self._indexable else []

    @classmethod
    def from_words(cls, words: Iterable[Word]) -> "Timeline":
        if isinstance(words, Timeline):
            return words
        return cls(words)

    @property
    def words(self) -> Tuple[Word, ...]:
        return self._words

    @property
    def indexable(self) -> bool:
        return self._indexable

    @property
    def starts(self) -> List[float]:
        """Start times of all words; empty unless the timeline is indexable."""
        return self._starts

    @property
    def duration_ms(self) -> float:
        return self._words[-1].end if self._words else 0

    @property
    def text(self) -> str:
        return " ".join(w.text for w in self._words)

    def to_dicts(self) -> List[dict]:
        return [w.to_dict() for w in self._words]

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[Word]:
        return iter(self._words)

    @overload
    def __getitem__(self, index: int) -> Word: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Word, ...]: ...

    def __getitem__(self, index):
        return self._words[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timeline):
            return NotImplemented
        return self._words == other._words

    def __hash__(self) -> int:
        return hash(self._words)

    def __repr__(self) -> str:
        return "Timeline({} words, indexable={})".format(len(self._words), self._indexable)
