"""Tests for the command-line interface (cli.py).

WHY: The CLI is how captions are produced in practice. Each subcommand
must write exactly its content to stdout (so it can be piped), keep
status on stderr, and turn caller errors into exit code 1.

HOW: main() is called with an explicit argv; files live in tmp_path.
"""

import json

import pytest

from caption_timeline.cli import _resolve_output_path, build_parser, main

SCENARIO_SRT = (
    "1\n00:00:00,000 --> 00:00:00,900\nHi there\n\n"
    "2\n00:00:02,000 --> 00:00:02,500\nfriend\n\n"
)


def _run_error(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 1
    return capsys.readouterr().err


class TestParser:

    def test_srt_defaults(self):
        args = build_parser().parse_args(["srt", "clip.json"])
        assert args.input_file == "clip.json"
        assert args.grouping == "default"
        assert args.output is None
        assert args.max_words is None

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_show_needs_a_moment(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["show", "clip.json"])

    def test_show_moments_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["show", "clip.json", "--at-ms", "1", "--frame", "2"])

    def test_props_requires_video_src(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["props", "clip.json"])


class TestSrtCommand:

    def test_stdout(self, word_list_file, capsys):
        main(["srt", str(word_list_file)])
        captured = capsys.readouterr()
        assert captured.out == SCENARIO_SRT
        assert "Loaded 3 words" in captured.err

    def test_output_file(self, word_list_file, tmp_path, capsys):
        out = tmp_path / "out.srt"
        main(["srt", str(word_list_file), "-o", str(out)])
        assert out.read_text(encoding="utf-8") == SCENARIO_SRT
        assert capsys.readouterr().out == ""

    def test_threshold_overrides(self, word_list_file, capsys):
        main(["srt", str(word_list_file), "--max-words", "1"])
        assert capsys.readouterr().out.count(" --> ") == 3

    def test_gap_override(self, word_list_file, capsys):
        main(["srt", str(word_list_file), "--max-gap-ms", "5000"])
        out = capsys.readouterr().out
        assert out.count(" --> ") == 1
        assert "Hi there friend" in out


class TestWordsCommand:

    def test_decodes_cues(self, tmp_path, capsys):
        srt = tmp_path / "clip.srt"
        srt.write_text(SCENARIO_SRT, encoding="utf-8")
        main(["words", str(srt)])
        assert json.loads(capsys.readouterr().out) == [
            {"start": 0, "end": 900, "text": "Hi there"},
            {"start": 2000, "end": 2500, "text": "friend"},
        ]


class TestPropsCommand:

    def test_stdout(self, word_list_file, scenario_dicts, capsys):
        main(["props", str(word_list_file), "--video-src", "clip.mp4", "--preset", "karaoke"])
        payload = json.loads(capsys.readouterr().out)
        assert payload == {"videoSrc": "clip.mp4", "preset": "karaoke", "words": scenario_dicts}


class TestShowCommand:

    def test_karaoke_marks_highlight(self, word_list_file, capsys):
        main(["show", str(word_list_file), "--at-ms", "600", "--preset", "karaoke"])
        assert capsys.readouterr().out == "Hi [there] friend\n"

    def test_frame(self, word_list_file, capsys):
        main(["show", str(word_list_file), "--frame", "18", "--fps", "30", "--preset", "karaoke"])
        assert capsys.readouterr().out == "Hi [there] friend\n"

    def test_line_preset(self, word_list_file, capsys):
        main(["show", str(word_list_file), "--at-ms", "2100", "--preset", "top"])
        assert capsys.readouterr().out == "Hi there friend\n"

    def test_gap_prints_nothing(self, word_list_file, capsys):
        main(["show", str(word_list_file), "--at-ms", "1000", "--preset", "bottom"])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "No caption at 1000 ms" in captured.err

    def test_bad_fps(self, word_list_file, capsys):
        err = _run_error(["show", str(word_list_file), "--frame", "1", "--fps", "0"], capsys)
        assert "fps must be positive" in err


class TestConvertCommand:

    def test_all_formats(self, word_list_file, tmp_path):
        main(["convert", str(word_list_file), "--video-src", "clip.mp4"])
        assert (tmp_path / "clip.srt").read_text(encoding="utf-8") == SCENARIO_SRT
        assert (tmp_path / "clip-transcript.txt").read_text(encoding="utf-8") == "Hi there friend\n"
        assert json.loads((tmp_path / "clip-props.json").read_text(encoding="utf-8"))["videoSrc"] == "clip.mp4"

    def test_render_props_skipped_without_video_src(self, word_list_file, tmp_path, capsys):
        main(["convert", str(word_list_file)])
        assert not (tmp_path / "clip-props.json").exists()
        assert (tmp_path / "clip.srt").exists()
        assert "Skipping render_props" in capsys.readouterr().err

    def test_selected_formats_and_output_dir(self, word_list_file, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main(["convert", str(word_list_file), "--formats", "plain_text", "--output-dir", str(out_dir)])
        assert [p.name for p in out_dir.iterdir()] == ["clip-transcript.txt"]

    def test_conflicting_names_get_numeric_suffix(self, word_list_file, tmp_path):
        main(["convert", str(word_list_file), "--formats", "srt_captions,plain_text"])
        main(["convert", str(word_list_file), "--formats", "srt_captions,plain_text"])
        assert (tmp_path / "clip-2.srt").exists()
        assert (tmp_path / "clip-transcript-2.txt").exists()

    def test_unknown_format(self, word_list_file, capsys):
        err = _run_error(["convert", str(word_list_file), "--formats", "premiere"], capsys)
        assert "Unknown format 'premiere'" in err

    def test_render_props_requested_without_video_src(self, word_list_file, capsys):
        err = _run_error(["convert", str(word_list_file), "--formats", "render_props"], capsys)
        assert err.startswith("Error:")

    def test_missing_output_dir(self, word_list_file, tmp_path, capsys):
        err = _run_error(["convert", str(word_list_file), "--output-dir", str(tmp_path / "nope")], capsys)
        assert "Output directory does not exist" in err


class TestConvertArgumentChecks:

    def test_bad_format_fails_before_reading_input(self, tmp_path, capsys):
        err = _run_error(
            ["convert", str(tmp_path / "missing.json"), "--formats", "render_props"], capsys
        )
        assert err == "Error: Render props need a video source (--video-src)\n"

    def test_nothing_written_on_bad_arguments(self, word_list_file, tmp_path, capsys):
        _run_error(["convert", str(word_list_file), "--formats", "plain_text,render_props"], capsys)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["clip.json"]


class TestErrors:

    def test_missing_input_file(self, tmp_path, capsys):
        err = _run_error(["srt", str(tmp_path / "missing.json")], capsys)
        assert err.startswith("Error: File not found")

    def test_unparsable_json(self, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text("definitely not json", encoding="utf-8")
        err = _run_error(["srt", str(bad)], capsys)
        assert "Could not parse JSON" in err


class TestResolveOutputPath:

    def test_free_name(self, tmp_path):
        assert _resolve_output_path("clip", "-props.json", tmp_path) == tmp_path / "clip-props.json"

    def test_counter_increments(self, tmp_path):
        (tmp_path / "clip-props.json").write_text("{}")
        (tmp_path / "clip-props-2.json").write_text("{}")
        assert _resolve_output_path("clip", "-props.json", tmp_path) == tmp_path / "clip-props-3.json"

    def test_dot_suffix(self, tmp_path):
        (tmp_path / "clip.srt").write_text("")
        assert _resolve_output_path("clip", ".srt", tmp_path) == tmp_path / "clip-2.srt"
