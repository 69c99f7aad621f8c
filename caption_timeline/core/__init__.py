"""Timeline IR and playback-time caption queries.

WHY: The core package is the stable heart of the engine — the Word and
Timeline types, and the pure functions the player calls every frame.

HOW: ir.py defines the data structures, resolver.py finds the active
word, window.py picks the displayed words around it, playback.py ties
both to frame numbers, wordlist.py reads and writes word-list JSON.

RULES:
- IR dataclasses are the contract — change with care
- resolver / window / playback never raise on malformed timelines
- Only wordlist.py touches files
"""
