"""
Remote collaborators.

Responsibilities:
- Upload the normalized dish photo to get a shareable link.
- Report completed order leads.
- Run both as background tasks whose failures are only logged.
"""
