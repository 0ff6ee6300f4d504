"""
Local persisted state.

Responsibilities:
- Keep small JSON documents under fixed keys in a data directory.
- Wrap every document in a version tag so older payloads stay readable.
"""
