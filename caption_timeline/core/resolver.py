"""Active-word resolution: which word is on screen at a playback time.

WHY: The render loop asks "what is being said right now?" once per
frame. The answer drives both the caption line and the karaoke
highlight, so boundary handling must be exact: a query landing on a
word's end belongs to the next word (or to nothing, in a gap).

HOW: A linear scan returns the first word whose half-open interval
[start, end) contains the query time. Timelines verified as indexable
at construction are searched by bisection over their start times
instead, which gives the same answer in O(log n).

RULES:
- Half-open intervals: start <= t < end
- None (never an exception) for empty timelines, times before the first
  word, gaps, times after the last end, and non-numeric times
- Bisection only for Timeline objects with indexable=True
- Pure functions, no state between calls
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Optional, Sequence, Union

from caption_timeline.core.ir import Timeline, Word, is_finite_number

WordSequence = Union[Timeline, Sequence[Word]]


def _linear_active_index(words: WordSequence, time_ms: float) -> Optional[int]:
    for i, word in enumerate(words):
        if word.contains(time_ms):
            return i
    return None


def _bisect_active_index(timeline: Timeline, time_ms: float) -> Optional[int]:
    # Non-overlapping words: only the last word starting at or before
    # time_ms can contain it.
    i = bisect_right(timeline.starts, time_ms) - 1
    if i < 0:
        return None
    return i if timeline[i].contains(time_ms) else None


def resolve_active_index(words: WordSequence, time_ms: float) -> Optional[int]:
    """Return the index of the word active at ``time_ms``, or None.

    Args:
        words: A Timeline or any sequence of Word objects.
        time_ms: Elapsed playback time in milliseconds.

    Returns:
        Index of the first word with start <= time_ms < end, else None.
    """
    if not words or not is_finite_number(time_ms):
        return None
    if isinstance(words, Timeline) and words.indexable:
        return _bisect_active_index(words, time_ms)
    return _linear_active_index(words, time_ms)


def resolve_active_word(words: WordSequence, time_ms: float) -> Optional[Word]:
    index = resolve_active_index(words, time_ms)
    return None if index is None else words[index]


def resolve_anchor_index(words: WordSequence, time_ms: float) -> Optional[int]:
    """Return the last word that started at or before ``time_ms``.

    Used to keep a karaoke line on screen through the gaps between words.
    For unsorted input this is the highest index whose start qualifies.
    """
    if not words or not is_finite_number(time_ms):
        return None
    if isinstance(words, Timeline) and words.indexable:
        i = bisect_right(words.starts, time_ms) - 1
        return i if i >= 0 else None
    anchor = None
    for i, word in enumerate(words):
        if is_finite_number(word.start) and word.start <= time_ms:
            anchor = i
    return anchor
