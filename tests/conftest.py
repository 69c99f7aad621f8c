"""Shared test fixtures for the caption_timeline test suite.

WHY: Most test modules need the same small, hand-checked timelines: the
three-word "Hi there friend" scenario with a gap before the last word,
and a longer evenly spaced timeline for window clamping.

RULES:
- Times are integer milliseconds so expected values stay exact
- Fixtures return fresh objects; tests may not rely on shared state
"""

import json
from typing import List

import pytest

from caption_timeline.core.ir import Timeline, Word

SCENARIO_WORDS = [
    {"start": 0, "end": 500, "text": "Hi"},
    {"start": 500, "end": 900, "text": "there"},
    {"start": 2000, "end": 2500, "text": "friend"},
]


def _make_words(count: int, start: int = 0, duration: int = 100, gap: int = 0) -> List[Word]:
    """Evenly spaced words named w0, w1, ... for clamping tests."""
    words = []
    t = start
    for i in range(count):
        words.append(Word(start=t, end=t + duration, text="w{}".format(i)))
        t += duration + gap
    return words


@pytest.fixture
def scenario_dicts():
    return [dict(w) for w in SCENARIO_WORDS]


@pytest.fixture
def scenario_words():
    """[Hi 0-500] [there 500-900] gap [friend 2000-2500]"""
    return [Word(**w) for w in SCENARIO_WORDS]


@pytest.fixture
def scenario_timeline(scenario_words):
    return Timeline(scenario_words)


@pytest.fixture
def long_timeline():
    """30 contiguous 100 ms words, w0 at 0 ms to w29 ending at 3000 ms."""
    return Timeline(_make_words(30))


@pytest.fixture
def word_list_file(tmp_path, scenario_dicts):
    """The scenario written as a transcription result JSON file."""
    path = tmp_path / "clip.json"
    path.write_text(
        json.dumps({"text": "Hi there friend", "words": scenario_dicts}),
        encoding="utf-8",
    )
    return path
