"""Abstract base formatter and output container.

WHY: Every export format consumes the same Timeline but produces
different file content. This base class keeps the interface consistent
so the CLI can run any formatter generically.

HOW: BaseFormatter is an ABC with two requirements — a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list, even for single-file formats
- ``suffix`` starts with a hyphen or a dot, e.g. ``"-props.json"``
- The caller is responsible for prepending the source filename stem
- Formatters never modify the Timeline
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from caption_timeline.core.ir import Timeline


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``".srt"`` → ``"interview.srt"``.
        content: The file content as a string.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SRT Subtitles'."""

    @abstractmethod
    def format(self, timeline: Timeline) -> list[FormatterOutput]:
        """Convert the timeline into one or more output files.

        Args:
            timeline: The word timeline of one media asset.

        Returns:
            List of FormatterOutput objects, each containing a file suffix,
            content string, and MIME type.
        """
