"""
Order bridge.

Responsibilities:
- Canonicalize restaurant phone numbers for one regional numbering plan.
- Compose the templated WhatsApp order message and deep link.
- Report completed leads to the tracking endpoint without blocking.
"""
