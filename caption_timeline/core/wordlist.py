"""Word-list import and export.

WHY: The transcription collaborator hands over words as JSON, and not
always in the same wrapper: a bare array, a ``{"text", "words"}``
result object, or segments with nested word arrays. Files saved from
an interrupted download may even be truncated. The engine needs a
Timeline either way.

HOW: try_parse_json() cuts a truncated file back to its last complete
word object and closes it again in one of the known wrappers.
parse_word_list() walks whatever shape it receives and builds
Word objects from the items that carry usable text and timing; the rest
are skipped with a warning.

RULES:
- Text keys: "text", then "word", then "t"; stripped; empty text is skipped
- Start keys: "start" / "s" (default 0); end keys: "end" / "e" (default start)
- Integer times stay integers; numeric strings are converted to float
- Non-dict items and items with unconvertible times are skipped, never fatal
- Extra fields (confidence, speaker, ...) are ignored
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from caption_timeline.core.ir import Timeline, Word

logger = logging.getLogger(__name__)

_TEXT_KEYS = ("text", "word", "t")


def _to_ms(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("boolean is not a time value")
    if isinstance(value, int):
        return value
    return float(value)


def _item_text(item: dict) -> str:
    for key in _TEXT_KEYS:
        value = item.get(key)
        if value:
            return str(value).strip()
    return ""


def _parse_word(item: Any) -> Optional[Word]:
    if not isinstance(item, dict):
        return None
    text = _item_text(item)
    if not text:
        return None
    try:
        start = _to_ms(item.get("start", item.get("s", 0)))
        end = _to_ms(item.get("end", item.get("e", start)))
    except (TypeError, ValueError):
        logger.warning("Skipping word %r: unusable timing", text)
        return None
    return Word(start=start, end=end, text=text)


def parse_word_list(data: Any) -> Timeline:
    """Build a Timeline from parsed word-list JSON.

    Accepts a flat list of word objects, a list of segments with nested
    ``words`` arrays, or an object with a ``words`` array (the
    transcription result shape).

    Args:
        data: Parsed JSON data.

    Returns:
        Timeline of the usable words, in input order.
    """
    if isinstance(data, dict):
        data = data.get("words", [])
    if not isinstance(data, list):
        return Timeline()

    words: List[Word] = []
    skipped = 0
    for item in data:
        if isinstance(item, dict) and isinstance(item.get("words"), list):
            for nested in item["words"]:
                word = _parse_word(nested)
                if word is None:
                    skipped += 1
                else:
                    words.append(word)
            continue
        word = _parse_word(item)
        if word is None:
            skipped += 1
        else:
            words.append(word)

    if skipped:
        logger.warning("Skipped %d unusable word item(s)", skipped)
    return Timeline(words)


# Closers for a document cut right after a word object: flat list,
# {text, words} result, segments with nested words, result of segments.
_REPAIR_CLOSERS = ("]", "]}", "]}]", "]}]}")
_MAX_REPAIR_CUTS = 50


def try_parse_json(raw: str) -> Any:
    """Parse word-list JSON, recovering the complete words of a truncated file.

    A download cut off mid-file is cut back to the last complete word
    object and closed again as a word array, a ``{text, words}`` result
    or a segment list. Only the words after the cut are lost.

    Raises:
        ValueError: If no complete word object can be recovered.
    """
    raw = raw.replace("\r\n", "\n").replace("\r", "\n")
    if raw.startswith("\ufeff"):
        raw = raw[1:]
    raw = raw.strip()

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass

    cut = len(raw)
    for _ in range(_MAX_REPAIR_CUTS):
        cut = raw.rfind("}", 0, cut)
        if cut < 0:
            break
        head = raw[:cut + 1]
        for closer in _REPAIR_CLOSERS:
            try:
                data = json.loads(head + closer)
            except json.JSONDecodeError:
                continue
            logger.warning(
                "Word list was truncated; recovered it by dropping %d trailing character(s)",
                len(raw) - len(head),
            )
            return data

    raise ValueError("Could not parse JSON input (no complete word object to recover)")


def load_word_list(path: Union[str, Path]) -> Timeline:
    """Read a word-list JSON file into a Timeline.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not parsable JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return parse_word_list(try_parse_json(raw))


def dump_word_list(words: Timeline, indent: Optional[int] = 2) -> str:
    """Serialize a Timeline to the word-list JSON shape."""
    return json.dumps(words.to_dicts(), indent=indent, ensure_ascii=False)
