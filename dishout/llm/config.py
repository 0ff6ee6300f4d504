from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

# Search results hosted here describe a specific place rather than a web page.
PLACE_HOSTS: tuple[str, ...] = (
    "google.com/maps",
    "maps.google.",
    "maps.app.goo.gl",
    "goo.gl/maps",
    "tripadvisor.",
    "zomato.com",
    "yelp.",
    "talabat.com",
    "deliveroo.",
    "foursquare.com",
)


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("GROQ_API_KEY", "")
    vision_model: str = "meta-llama/llama-4-scout-17b-16e-instruct"
    search_model: str = "groq/compound"
    timeout: float = 30.0
    max_tokens: int = 1024
    enabled: bool = True
    place_hosts: tuple[str, ...] = PLACE_HOSTS


DEFAULT_LLM_CONFIG = LLMConfig()
