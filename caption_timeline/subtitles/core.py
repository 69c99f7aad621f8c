"""Cue grouping, SRT writing and SRT parsing.

WHY: SRT is the portable subtitle format every player and editor reads.
Words have to be grouped into readable cues on the way out, and SRT
files from elsewhere have to be turned back into something the caption
engine can play, even when a few blocks are damaged.

HOW: group_cues() walks the words once and cuts a new cue whenever a
grouping threshold trips. generate_srt() writes numbered blocks.
parse_srt() splits a document on blank lines and decodes each block on
its own, so one bad block cannot sink the rest.

RULES:
- Timestamps are HH:MM:SS,mmm; milliseconds are truncated, never rounded
- Negative or non-finite times are written as 00:00:00,000
- Every block ends with a blank line; an empty cue list writes ""
- Grouping skips words with blank text; missing or non-numeric times
  never split a cue and are written as 00:00:00,000
- Parsing accepts CRLF / CR line endings, a UTF-8 BOM, runs of blank
  lines and "." as the millisecond separator
- A block with a non-numeric index, no "-->", an unparsable timestamp or
  no text is skipped and logged; parsing carries on
"""

from __future__ import annotations

import logging
import math
import re
from typing import Dict, List, Sequence, Tuple

from caption_timeline.core.ir import Word, is_finite_number

from .models import Cue

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^(\d+):(\d{1,2}):(\d{1,2})[,.](\d{1,3})$")
_BLOCK_SPLIT_RE = re.compile(r"\n[ \t]*\n")
_ARROW = "-->"


# =============================================================================
# Timestamps
# =============================================================================

def _truncate_ms(ms: float) -> int:
    if not is_finite_number(ms) or ms < 0:
        return 0
    return int(math.floor(ms))


def ms_to_srt_time(ms: float) -> str:
    """Convert milliseconds to an SRT timestamp: HH:MM:SS,mmm (truncated)."""
    total = _truncate_ms(ms)
    hours, rest = divmod(total, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1000)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, seconds, millis)


def srt_time_to_ms(value: str) -> int:
    """Parse an SRT timestamp into integer milliseconds.

    Raises:
        ValueError: If the value is not a HH:MM:SS,mmm timestamp.
    """
    match = _TIME_RE.match(value.strip())
    if not match:
        raise ValueError("Invalid SRT timestamp: {!r}".format(value))
    hours, minutes, seconds, millis = match.groups()
    if int(minutes) > 59 or int(seconds) > 59:
        raise ValueError("Invalid SRT timestamp: {!r}".format(value))
    return (
        int(hours) * 3_600_000
        + int(minutes) * 60_000
        + int(seconds) * 1000
        + int(millis.ljust(3, "0"))
    )


# =============================================================================
# Grouping
# =============================================================================

def _word_text(word: Word) -> str:
    if not isinstance(word.text, str):
        return ""
    return " ".join(word.text.split())


def _cue_text(words: Sequence[Word]) -> str:
    return " ".join(_word_text(w) for w in words)


def _exceeds(later: float, earlier: float, limit: float) -> bool:
    # Missing or non-numeric times never force a split
    if not (is_finite_number(later) and is_finite_number(earlier)):
        return False
    return later - earlier > limit


def _starts_new_cue(current: List[Word], word: Word, config: Dict) -> bool:
    if not current:
        return False
    if len(current) >= config["max_words"]:
        return True
    if _exceeds(word.start, current[-1].end, config["max_gap_ms"]):
        return True
    max_cue_ms = config.get("max_cue_ms")
    if max_cue_ms is not None and _exceeds(word.end, current[0].start, max_cue_ms):
        return True
    return False


def _build_cue(index: int, words: Sequence[Word]) -> Cue:
    return Cue(
        index=index,
        start=_truncate_ms(words[0].start),
        end=_truncate_ms(words[-1].end),
        text=_cue_text(words),
    )


def group_cues(words: Sequence[Word], config: Dict) -> List[Cue]:
    """Group consecutive words into numbered cues.

    Words with blank text are left out, so every cue has text.

    Args:
        words: Words in playback order.
        config: Grouping thresholds (max_gap_ms, max_words, max_cue_ms).

    Returns:
        Cues numbered from 1, in input order.
    """
    groups: List[List[Word]] = []
    current: List[Word] = []
    blank = 0
    for word in words:
        if not _word_text(word):
            blank += 1
            continue
        if _starts_new_cue(current, word, config):
            groups.append(current)
            current = []
        current.append(word)
    if current:
        groups.append(current)

    if blank:
        logger.debug("Left out %d word(s) with blank text", blank)
    logger.debug("Grouped %d words into %d cues", len(words) - blank, len(groups))
    return [_build_cue(i, group) for i, group in enumerate(groups, 1)]


# =============================================================================
# SRT output
# =============================================================================

def generate_srt(cues: Sequence[Cue]) -> str:
    """Write cues as an SRT document.

    Each block is index, time range, text and a blank separator line.
    """
    blocks: List[str] = []
    for cue in cues:
        time_line = "{} {} {}".format(ms_to_srt_time(cue.start), _ARROW, ms_to_srt_time(cue.end))
        blocks.append("{}\n{}\n{}\n\n".format(cue.index, time_line, cue.text))
    return "".join(blocks)


# =============================================================================
# SRT input
# =============================================================================

def _parse_time_range(line: str) -> Tuple[int, int]:
    if _ARROW not in line:
        raise ValueError("missing '{}'".format(_ARROW))
    left, right = line.split(_ARROW, 1)
    right_parts = right.split()
    if not right_parts:
        raise ValueError("missing end timestamp")
    # Anything after the end timestamp (position hints) is ignored
    return srt_time_to_ms(left), srt_time_to_ms(right_parts[0])


def _parse_block(block: str) -> Cue:
    lines = [line.strip() for line in block.split("\n")]
    lines = [line for line in lines if line]
    if len(lines) < 2:
        raise ValueError("incomplete block")
    if not lines[0].isdigit():
        raise ValueError("non-numeric index {!r}".format(lines[0]))
    start, end = _parse_time_range(lines[1])
    text = " ".join(" ".join(lines[2:]).split())
    if not text:
        raise ValueError("no text")
    return Cue(index=int(lines[0]), start=start, end=end, text=text)


def parse_srt(text: str) -> List[Cue]:
    """Parse an SRT document into cues, skipping malformed blocks.

    Args:
        text: The SRT document.

    Returns:
        The cues of all well-formed blocks, in document order.
    """
    if not text:
        return []
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    if normalized.startswith("\ufeff"):
        normalized = normalized[1:]
    normalized = normalized.strip()
    if not normalized:
        return []

    cues: List[Cue] = []
    for number, block in enumerate(_BLOCK_SPLIT_RE.split(normalized), 1):
        if not block.strip():
            continue
        try:
            cues.append(_parse_block(block))
        except ValueError as exc:
            logger.warning("Skipping malformed SRT block %d: %s", number, exc)
    return cues
