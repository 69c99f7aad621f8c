"""Output formatter registry — pluggable format hub.

WHY: The CLI needs a single lookup to find the right formatter by name.
A central dict makes it trivial to add new formats: create the formatter
class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["plain_text"]()``.
Formatters with required arguments (render_props needs a video source)
are instantiated with keyword arguments by the caller.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from caption_timeline.formatters.plain_text import PlainTextFormatter
from caption_timeline.formatters.render_props import RenderPropsFormatter
from caption_timeline.formatters.srt_captions import SRTCaptionFormatter

if TYPE_CHECKING:
    from caption_timeline.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "srt_captions": SRTCaptionFormatter,
    "plain_text": PlainTextFormatter,
    "render_props": RenderPropsFormatter,
}
