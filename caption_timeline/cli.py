"""Command-line interface for the caption timeline engine.

WHY: Captions are usually produced in a shell pipeline: a transcription
step drops a word-list JSON next to the video, and someone needs the SRT,
the renderer's props file, or a quick look at what the player will show
at a given moment. The CLI wires the engine, the SRT codec and the
formatter registry behind one command.

HOW: argparse subcommands, one per task. Each subcommand handler loads
its input, calls the library and writes the result either to the
requested file or to stdout. Caller errors (bad input, unknown preset,
unreadable file) surface as ``Error: ...`` on stderr with exit code 1.

RULES:
- Subcommands: srt, words, props, show, convert
- Word-list input is parsed leniently (core.wordlist); SRT input skips
  malformed blocks with a logged warning
- Content goes to stdout when no output path is given; status to stderr
- convert names outputs {stem}{suffix}, numeric suffix for conflicts
  (-props-2.json); render_props is skipped when no --video-src is given
  and --formats was not set explicitly
- Logging is configured here, and only here, from LOG_LEVEL
"""

from __future__ import annotations

import argparse
import logging
import sys
from itertools import chain, count
from pathlib import Path
from typing import List, Optional

import jsonschema

from caption_timeline import __version__
from caption_timeline import config as settings
from caption_timeline.core.ir import Preset, Timeline
from caption_timeline.core.playback import KARAOKE_IDLE_POLICIES, caption_at, frame_to_ms
from caption_timeline.core.window import CaptionWindow
from caption_timeline.core.wordlist import dump_word_list, load_word_list
from caption_timeline.formatters import FORMATTERS
from caption_timeline.formatters.base import BaseFormatter, FormatterOutput
from caption_timeline.formatters.render_props import RenderPropsFormatter
from caption_timeline.subtitles import GROUPING_PRESETS, resolve_grouping, srt_to_words, words_to_srt


def _status(msg: str) -> None:
    """Print a status message to stderr.

    Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _emit(content: str, output: Optional[str]) -> None:
    """Write content to the output file, or to stdout when none is given."""
    if output is None:
        sys.stdout.write(content)
        if content and not content.endswith("\n"):
            sys.stdout.write("\n")
        return
    path = Path(output)
    path.write_text(content, encoding="utf-8")
    _status("Saved: {}".format(path))


def _load_words(input_file: str) -> Timeline:
    path = Path(input_file)
    if not path.is_file():
        raise ValueError("File not found: {}".format(path))
    timeline = load_word_list(path)
    _status("Loaded {} words from {}".format(len(timeline), path.name))
    return timeline


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Return a free path for ``{stem}{suffix}`` inside output_dir.

    Re-running convert on the same word list never overwrites earlier
    output: clip-props.json is followed by clip-props-2.json, -3, ...
    and clip.srt by clip-2.srt.
    """
    name, dot, ext = suffix.rpartition(".")
    if not dot:
        name, ext = suffix, ""
    else:
        ext = dot + ext

    names = chain(
        ["{}{}".format(stem, suffix)],
        ("{}{}-{}{}".format(stem, name, n, ext) for n in count(2)),
    )
    return next(output_dir / n for n in names if not (output_dir / n).exists())


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save a single formatter output to disk and return its path."""
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _render_window(window: CaptionWindow) -> str:
    """Caption text for the terminal; the highlighted token is bracketed."""
    return " ".join(
        "[{}]".format(word.text) if highlighted else word.text
        for word, highlighted in window.tokens
    )


# =============================================================================
# Subcommands
# =============================================================================

def _cmd_srt(args: argparse.Namespace) -> None:
    timeline = _load_words(args.input_file)

    config = None
    overrides = {
        "max_gap_ms": args.max_gap_ms,
        "max_words": args.max_words,
        "max_cue_ms": args.max_cue_ms,
    }
    if any(value is not None for value in overrides.values()):
        config = resolve_grouping(args.grouping)
        config.update({k: v for k, v in overrides.items() if v is not None})

    _emit(words_to_srt(timeline, preset=args.grouping, config=config), args.output)


def _cmd_words(args: argparse.Namespace) -> None:
    path = Path(args.input_file)
    if not path.is_file():
        raise ValueError("File not found: {}".format(path))
    timeline = srt_to_words(path.read_text(encoding="utf-8"))
    _status("Decoded {} cues from {}".format(len(timeline), path.name))
    _emit(dump_word_list(timeline) + "\n", args.output)


def _cmd_props(args: argparse.Namespace) -> None:
    timeline = _load_words(args.input_file)
    formatter = RenderPropsFormatter(video_src=args.video_src, preset=args.preset)
    output = formatter.format(timeline)[0]
    _emit(output.content + "\n", args.output)


def _cmd_show(args: argparse.Namespace) -> None:
    timeline = _load_words(args.input_file)

    if args.frame is not None:
        time_ms = frame_to_ms(args.frame, args.fps)
    else:
        time_ms = args.at_ms

    window = caption_at(timeline, time_ms, args.preset, karaoke_idle=args.karaoke_idle)
    if window.is_empty:
        _status("No caption at {:g} ms".format(time_ms))
        return
    print(_render_window(window))


def _build_formatter(key: str, args: argparse.Namespace) -> BaseFormatter:
    if key == "render_props":
        return RenderPropsFormatter(video_src=args.video_src, preset=args.preset)
    return FORMATTERS[key]()


def _cmd_convert(args: argparse.Namespace) -> None:
    # Formatter arguments are checked before any input is read
    if args.formats:
        format_keys = [f.strip() for f in args.formats.split(",") if f.strip()]
        for key in format_keys:
            if key not in FORMATTERS:
                raise ValueError(
                    "Unknown format '{}'. Available formats: {}".format(
                        key, ", ".join(sorted(FORMATTERS.keys()))
                    )
                )
    else:
        format_keys = list(FORMATTERS.keys())
        if not args.video_src:
            format_keys.remove("render_props")
            _status("  Skipping render_props (no --video-src)")
    formatters = [_build_formatter(key, args) for key in format_keys]

    input_path = Path(args.input_file).resolve()
    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        raise ValueError("Output directory does not exist: {}".format(output_dir))
    timeline = _load_words(str(input_path))

    stem = input_path.stem
    saved_files: List[Path] = []
    for formatter in formatters:
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(timeline):
            saved_path = _save_output(output, stem, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))


# =============================================================================
# Parser
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    a subcommand.
    """
    presets = [p.value for p in Preset]

    parser = argparse.ArgumentParser(
        prog="caption-timeline",
        description="Build, inspect and convert word-timed captions "
                    "(SRT export/import, render props, per-moment caption preview).",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    # srt
    p_srt = subparsers.add_parser("srt", help="Export a word-list JSON as SRT.")
    p_srt.add_argument("input_file", help="Path to the word-list JSON file.")
    p_srt.add_argument("-o", "--output", default=None, help="Output .srt path (default: stdout).")
    p_srt.add_argument(
        "--grouping",
        default="default",
        choices=sorted(GROUPING_PRESETS.keys()),
        help="Cue grouping preset (default: %(default)s).",
    )
    p_srt.add_argument("--max-gap-ms", type=int, default=None,
                       help="Start a new cue after a silence longer than this.")
    p_srt.add_argument("--max-words", type=int, default=None,
                       help="Maximum number of words per cue.")
    p_srt.add_argument("--max-cue-ms", type=int, default=None,
                       help="Maximum cue duration.")
    p_srt.set_defaults(handler=_cmd_srt)

    # words
    p_words = subparsers.add_parser("words", help="Decode an SRT file into word-list JSON.")
    p_words.add_argument("input_file", help="Path to the .srt file.")
    p_words.add_argument("-o", "--output", default=None, help="Output .json path (default: stdout).")
    p_words.set_defaults(handler=_cmd_words)

    # props
    p_props = subparsers.add_parser("props", help="Write the renderer's props JSON.")
    p_props.add_argument("input_file", help="Path to the word-list JSON file.")
    p_props.add_argument("--video-src", required=True, help="URL or path of the source video.")
    p_props.add_argument("--preset", default=settings.DEFAULT_PRESET, choices=presets,
                         help="Caption display preset (default: %(default)s).")
    p_props.add_argument("-o", "--output", default=None, help="Output .json path (default: stdout).")
    p_props.set_defaults(handler=_cmd_props)

    # show
    p_show = subparsers.add_parser("show", help="Print the caption shown at a moment.")
    p_show.add_argument("input_file", help="Path to the word-list JSON file.")
    moment = p_show.add_mutually_exclusive_group(required=True)
    moment.add_argument("--at-ms", type=float, default=None, help="Playback position in milliseconds.")
    moment.add_argument("--frame", type=int, default=None, help="Frame number (see --fps).")
    p_show.add_argument("--fps", type=float, default=settings.DEFAULT_FPS,
                        help="Frames per second for --frame (default: %(default)s).")
    p_show.add_argument("--preset", default=settings.DEFAULT_PRESET, choices=presets,
                        help="Caption display preset (default: %(default)s).")
    p_show.add_argument("--karaoke-idle", default=settings.DEFAULT_KARAOKE_IDLE,
                        choices=KARAOKE_IDLE_POLICIES,
                        help="What karaoke shows between words (default: %(default)s).")
    p_show.set_defaults(handler=_cmd_show)

    # convert
    p_convert = subparsers.add_parser("convert", help="Run output formatters and save files.")
    p_convert.add_argument("input_file", help="Path to the word-list JSON file.")
    p_convert.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )
    p_convert.add_argument("--output-dir", default=None,
                           help="Directory to save output files (default: same as input file).")
    p_convert.add_argument("--video-src", default=None, help="Video URL or path for render_props.")
    p_convert.add_argument("--preset", default=settings.DEFAULT_PRESET, choices=presets,
                           help="Display preset for render_props (default: %(default)s).")
    p_convert.set_defaults(handler=_cmd_convert)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``caption-timeline`` and ``python -m caption_timeline``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging()

    try:
        args.handler(args)
    except jsonschema.ValidationError as e:
        print("Error: Invalid output: {}".format(e.message), file=sys.stderr)
        sys.exit(1)
    except (ValueError, OSError) as e:
        # ValueError also covers pydantic.ValidationError
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
