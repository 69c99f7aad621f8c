"""Pydantic models for the JSON shapes exchanged with collaborators.

WHY: Two external parties speak JSON to the engine. The transcription
service delivers ``{text, words: [{start, end, text}]}`` and the video
renderer consumes ``{videoSrc, preset, words}``. Typed models validate
these at the boundary, generate their JSON Schema, and keep the
camelCase wire name out of Python code.

HOW: WordItem mirrors one word-list entry. TranscriptionResult wraps the
transcription output. RenderJob is the render payload; its ``video_src``
field serializes as ``videoSrc``. Each model converts to and from the
engine's IR (Word / Timeline).

RULES:
- All models use Field(description=...) for schema documentation
- Extra fields from the transcription service are ignored
- RenderJob.preset only accepts "bottom", "top" or "karaoke"
- Strict: invalid payloads raise pydantic.ValidationError; use
  core.wordlist.parse_word_list() for lenient, best-effort input
"""

from __future__ import annotations

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

from caption_timeline.core.ir import Preset, Timeline, Word


class WordItem(BaseModel):
    """One entry of the word-list JSON."""

    start: Union[int, float] = Field(description="Start time in milliseconds from media start.")
    end: Union[int, float] = Field(description="End time in milliseconds from media start.")
    text: str = Field(min_length=1, description="Display token.")

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_word(cls, word: Word) -> "WordItem":
        return cls(start=word.start, end=word.end, text=word.text)

    def to_word(self) -> Word:
        return Word(start=self.start, end=self.end, text=self.text)


class TranscriptionResult(BaseModel):
    """A completed transcription as delivered to the engine.

    RULES:
    - text is the transcript as plain text (may be empty)
    - words are in playback order
    """

    text: str = Field(default="", description="Full transcript text.")
    words: List[WordItem] = Field(default_factory=list, description="Timed words in playback order.")

    model_config = ConfigDict(extra="ignore")

    def timeline(self) -> Timeline:
        return Timeline(w.to_word() for w in self.words)


class RenderJob(BaseModel):
    """Render payload consumed by the external video renderer.

    WHY: The renderer is a separate CLI step fed a props JSON file. This
    model is the single definition of that file's shape.
    """

    video_src: str = Field(alias="videoSrc", description="URL or path of the source video.")
    preset: Preset = Field(description="Caption display preset.")
    words: List[WordItem] = Field(default_factory=list, description="Timed words to caption.")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", json_schema_extra={
        "examples": [
            {
                "videoSrc": "http://localhost:3001/static/clip.mp4",
                "preset": "karaoke",
                "words": [
                    {"start": 0, "end": 500, "text": "Hi"},
                    {"start": 500, "end": 900, "text": "there"},
                ],
            }
        ]
    })

    @classmethod
    def from_timeline(cls, timeline: Timeline, video_src: str, preset: Preset) -> "RenderJob":
        return cls(
            video_src=video_src,
            preset=Preset.parse(preset),
            words=[WordItem.from_word(w) for w in timeline],
        )

    def to_payload(self) -> dict:
        """The payload as a JSON-ready dict with wire field names."""
        return self.model_dump(mode="json", by_alias=True)

    def timeline(self) -> Timeline:
        return Timeline(w.to_word() for w in self.words)
