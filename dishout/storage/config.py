from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class StorageConfig:
    data_dir: Path = Path(
        os.getenv("DISHOUT_DATA_DIR", str(Path(__file__).resolve().parent.parent / "data"))
    )
    schema_version: int = 1


DEFAULT_STORAGE_CONFIG = StorageConfig()
