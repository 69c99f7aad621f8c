"""Plain text transcript formatter.

WHY: Alongside timed captions, people want the transcript itself for
review and quick reference — no timecodes, just the words.

RULES:
- Word texts joined by single spaces, one trailing newline
- Empty timeline → empty file
- Output suffix: "-transcript.txt", media type "text/plain"
"""

from __future__ import annotations

from typing import List

from caption_timeline.core.ir import Timeline
from caption_timeline.formatters.base import BaseFormatter, FormatterOutput


class PlainTextFormatter(BaseFormatter):

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, timeline: Timeline) -> List[FormatterOutput]:
        content = timeline.text
        if content:
            content += "\n"
        return [
            FormatterOutput(
                suffix="-transcript.txt",
                content=content,
                media_type="text/plain",
            )
        ]
