"""Unit tests for word-list JSON import/export (core/wordlist.py).

WHY: Word lists arrive in several wrappers and sometimes truncated. The
lenient reader must recover every usable word and never fail on a bad
item.
"""

import json
import logging

import pytest

from caption_timeline.core.ir import Timeline, Word
from caption_timeline.core.wordlist import (
    dump_word_list,
    load_word_list,
    parse_word_list,
    try_parse_json,
)


class TestParseWordList:

    def test_transcription_result_shape(self, scenario_dicts, scenario_timeline):
        data = {"text": "Hi there friend", "words": scenario_dicts}
        assert parse_word_list(data) == scenario_timeline

    def test_flat_list(self, scenario_dicts, scenario_timeline):
        assert parse_word_list(scenario_dicts) == scenario_timeline

    def test_segments_with_nested_words(self, scenario_dicts, scenario_timeline):
        data = [{"speaker": "1", "words": scenario_dicts[:2]}, {"words": scenario_dicts[2:]}]
        assert parse_word_list(data) == scenario_timeline

    def test_extra_fields_are_ignored(self):
        data = [{"start": 0, "end": 100, "text": "a", "confidence": 0.9, "speaker": "2"}]
        assert parse_word_list(data)[0] == Word(0, 100, "a")

    def test_alternative_keys(self):
        data = [{"s": 10, "e": 20, "word": " hey "}, {"start": 20, "end": 30, "t": "you"}]
        assert [w.to_dict() for w in parse_word_list(data)] == [
            {"start": 10, "end": 20, "text": "hey"},
            {"start": 20, "end": 30, "text": "you"},
        ]

    def test_missing_times_default(self):
        word = parse_word_list([{"text": "a"}, {"start": 50, "text": "b"}])
        assert word[0] == Word(0, 0, "a")
        assert word[1] == Word(50, 50, "b")

    def test_numeric_strings_are_converted(self):
        word = parse_word_list([{"start": "100", "end": "250.5", "text": "a"}])[0]
        assert word.start == 100.0
        assert word.end == 250.5

    def test_integer_times_stay_integers(self, scenario_dicts):
        word = parse_word_list(scenario_dicts)[1]
        assert isinstance(word.start, int)

    def test_unusable_items_are_skipped(self, caplog):
        data = [
            "not a dict",
            {"start": 0, "end": 100, "text": ""},
            {"start": "soon", "end": 100, "text": "bad"},
            {"start": True, "end": 100, "text": "bool"},
            {"start": 100, "end": 200, "text": "ok"},
        ]
        with caplog.at_level(logging.WARNING, logger="caption_timeline.core.wordlist"):
            timeline = parse_word_list(data)
        assert [w.text for w in timeline] == ["ok"]
        assert any("Skipped 4 unusable word item(s)" in r.message for r in caplog.records)

    @pytest.mark.parametrize("data", [None, 42, "words", {"text": "no words"}])
    def test_non_list_input_is_empty(self, data):
        assert len(parse_word_list(data)) == 0


class TestTryParseJson:

    def test_valid_json(self):
        assert try_parse_json('{"words": []}') == {"words": []}

    def test_bom_and_crlf(self):
        assert try_parse_json('\ufeff[\r\n{"text": "a"}\r\n]') == [{"text": "a"}]

    def test_truncated_array_with_trailing_comma(self):
        raw = '[{"start": 0, "end": 500, "text": "Hi"},'
        assert try_parse_json(raw) == [{"start": 0, "end": 500, "text": "Hi"}]

    def test_truncated_result_object(self):
        raw = '{"text": "Hi", "words": [{"start": 0, "end": 500, "text": "Hi"}'
        assert try_parse_json(raw)["words"][0]["text"] == "Hi"

    def test_cut_inside_a_word_keeps_complete_words(self, caplog):
        raw = '{"text": "Hi there", "words": [{"start": 0, "end": 500, "text": "Hi"}, {"start": 500, "en'
        with caplog.at_level(logging.WARNING, logger="caption_timeline.core.wordlist"):
            data = try_parse_json(raw)
        assert data == {"text": "Hi there", "words": [{"start": 0, "end": 500, "text": "Hi"}]}
        assert any("truncated" in r.message for r in caplog.records)

    def test_truncated_segment_list(self):
        raw = '[{"speaker": "1", "words": [{"start": 0, "end": 500, "text": "Hi"}, {"sta'
        assert parse_word_list(try_parse_json(raw)).text == "Hi"

    def test_unrepairable_raises(self):
        with pytest.raises(ValueError, match="Could not parse JSON"):
            try_parse_json("this is not json")


class TestFiles:

    def test_load_word_list(self, word_list_file, scenario_timeline):
        assert load_word_list(word_list_file) == scenario_timeline

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            load_word_list(tmp_path / "missing.json")

    def test_dump_is_word_list_json(self, scenario_timeline, scenario_dicts):
        assert json.loads(dump_word_list(scenario_timeline)) == scenario_dicts

    def test_dump_keeps_non_ascii(self):
        assert "välkommen" in dump_word_list(Timeline([Word(0, 1, "välkommen")]))

    def test_dump_then_parse(self, scenario_timeline):
        assert parse_word_list(json.loads(dump_word_list(scenario_timeline))) == scenario_timeline
