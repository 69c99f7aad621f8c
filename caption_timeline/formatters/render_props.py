"""Render props formatter — the JSON payload for the video renderer.

WHY: Burning captions into a video is done by a separate renderer that
reads a single props file. The file names the source video, the display
preset and the timed words, and the renderer draws each frame's caption
with the same window rules the engine uses.

HOW: Builds a RenderJob from the timeline, dumps it with wire field
names (``videoSrc``) and validates the result against
render_props.schema.json before returning it.

RULES:
- Output suffix: "-props.json", media type "application/json"
- Key order is videoSrc, preset, words
- Non-ASCII text is written as-is (ensure_ascii=False)
- Invalid output raises jsonschema.ValidationError — never written silently
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Union

import jsonschema

from caption_timeline.core.ir import Preset, Timeline
from caption_timeline.formatters.base import BaseFormatter, FormatterOutput
from caption_timeline.models import RenderJob

_SCHEMA_PATH = Path(__file__).resolve().parent / "render_props.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    """Load and cache the render props JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def validate_render_props(payload: dict) -> None:
    """Raise jsonschema.ValidationError if payload is not valid render props."""
    jsonschema.validate(instance=payload, schema=_get_schema())


class RenderPropsFormatter(BaseFormatter):
    """Formatter that writes the renderer's props JSON.

    Args:
        video_src: URL or path of the source video.
        preset: Display preset the renderer should draw.
    """

    def __init__(self, video_src: str, preset: Union[Preset, str] = Preset.BOTTOM) -> None:
        if not video_src:
            raise ValueError("Render props need a video source (--video-src)")
        self.video_src = video_src
        self.preset = Preset.parse(preset)

    @property
    def name(self) -> str:
        return "Render Props"

    def format(self, timeline: Timeline) -> List[FormatterOutput]:
        job = RenderJob.from_timeline(timeline, self.video_src, self.preset)
        payload = job.to_payload()
        validate_render_props(payload)
        return [
            FormatterOutput(
                suffix="-props.json",
                content=json.dumps(payload, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
