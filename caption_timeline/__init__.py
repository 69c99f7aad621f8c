"""Caption Timeline Engine — word-timed captions for playback and export.

WHY: A transcription service delivers words with millisecond timings.
Players and renderers need to know, at any moment, which word is being
spoken and which neighbouring words to show with it; editors and players
need the same captions as SRT files.

HOW: core/ holds the timeline IR, the active-word resolver, the window
selector and the per-frame playback query. subtitles/ is the SRT codec.
formatters/ turns a timeline into output files (SRT, plain text, render
props). models.py validates the JSON exchanged with collaborators.

RULES:
- All formatters consume the same Timeline
- Engine queries are pure: no I/O, no shared mutable state
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
