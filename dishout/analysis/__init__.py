"""
Dish analysis pipeline.

Responsibilities:
- Normalize any uploaded photo into one canonical JPEG.
- Acquire a best-effort location hint.
- Call the grounded model and turn its answer into dish + place records.
- Drive the per-session Idle / Analyzing / Results / Error state machine.
"""
