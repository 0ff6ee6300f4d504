from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class EndpointConfig:
    base_url: str = os.getenv("DISHOUT_API_BASE", "")
    upload_path: str = "/api/upload-dish-image"
    track_path: str = "/api/track-lead"
    timeout: float = 10.0

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)


DEFAULT_ENDPOINT_CONFIG = EndpointConfig()
