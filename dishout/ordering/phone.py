from __future__ import annotations

import re

from .config import DEFAULT_PHONE_PLAN, PhonePlan

_NON_DIGIT_RE = re.compile(r"\D")


def normalize_phone(raw: str | None, plan: PhonePlan = DEFAULT_PHONE_PLAN) -> str:
    """
    Reduce a free-form phone string to dialable digits.

    Numbers carrying the plan's calling code are truncated to the fixed
    length of their mobile or landline range. Anything else comes back as
    the stripped digits, unchanged; no calling code is ever added.
    """
    digits = _NON_DIGIT_RE.sub("", raw or "")
    if digits.startswith(plan.calling_code):
        rest = digits[len(plan.calling_code):]
        if rest.startswith(plan.mobile_prefixes):
            return plan.calling_code + rest[: plan.mobile_digits]
        if rest.startswith(plan.landline_prefixes):
            return plan.calling_code + rest[: plan.landline_digits]
    return digits


def is_dialable(digits: str, plan: PhonePlan = DEFAULT_PHONE_PLAN) -> bool:
    # Loose length check only, not E.164 validation.
    return len(digits) > plan.min_usable_length
