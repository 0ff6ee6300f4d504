from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisConfig:
    jpeg_quality: int = 85
    location_timeout: float = 10.0
    phone_lookahead: int = 300
    fallback_answer: str = "I couldn't identify the dish or find places."


DEFAULT_ANALYSIS_CONFIG = AnalysisConfig()
