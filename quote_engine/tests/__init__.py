"""
Test suite for the quote engine.

Focus areas:
- Event decoding (all-or-nothing on malformed payloads)
- Reducer purity
- Replay determinism
- Price resolution
"""
