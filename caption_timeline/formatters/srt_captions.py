"""SRT subtitle formatter.

WHY: Players and editors import captions as SRT. This formatter is the
bridge between the formatter registry and the subtitle codec.

HOW: Calls words_to_srt() with the grouping preset (or custom config)
given at construction.

RULES:
- Registered as "srt_captions" in the FORMATTERS dict
- Suffix ".srt", media type "application/x-subrip"
- An empty timeline produces an empty (zero-cue) document
"""

from typing import Dict, List, Optional

from caption_timeline.core.ir import Timeline
from caption_timeline.formatters.base import BaseFormatter, FormatterOutput
from caption_timeline.subtitles import resolve_grouping, words_to_srt


class SRTCaptionFormatter(BaseFormatter):
    """Formatter that writes the timeline as one SRT file."""

    def __init__(self, grouping: str = "default", config: Optional[Dict] = None) -> None:
        # Fail on a bad preset name at construction, not at format time
        resolve_grouping(grouping, config)
        self.grouping = grouping
        self.config = config

    @property
    def name(self) -> str:
        return "SRT Subtitles"

    def format(self, timeline: Timeline) -> List[FormatterOutput]:
        content = words_to_srt(timeline, preset=self.grouping, config=self.config)
        return [
            FormatterOutput(
                suffix=".srt",
                content=content,
                media_type="application/x-subrip",
            )
        ]
