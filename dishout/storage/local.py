from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from .config import DEFAULT_STORAGE_CONFIG, StorageConfig

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")

_store: "LocalStore | None" = None


class LocalStore:
    """
    A key-value store of JSON documents, one file per key.

    Documents are written as ``{"version": N, "data": ...}``. A bare payload
    (no wrapper) is read back as-is; a payload from a newer schema version or
    an unreadable file is reported as missing.
    """

    def __init__(self, root: Path, schema_version: int = 1) -> None:
        self.root = Path(root)
        self.schema_version = schema_version

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}.json"

    def get(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Could not read stored document %s", key, exc_info=True)
            return None

        if isinstance(document, dict) and "version" in document and "data" in document:
            version = document["version"]
            if not isinstance(version, int) or version > self.schema_version:
                logger.warning(
                    "Stored document %s has unsupported version %r (max %s); ignoring",
                    key, version, self.schema_version,
                )
                return None
            return document["data"]
        return document

    def put(self, key: str, value: Any) -> None:
        path = self._path(key)
        self.root.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(
            json.dumps({"version": self.schema_version, "data": value}, indent=2),
            encoding="utf-8",
        )
        os.replace(tmp, path)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def get_local_store(config: StorageConfig = DEFAULT_STORAGE_CONFIG) -> LocalStore:
    """Return the process-wide store, creating it on first call."""
    global _store
    if _store is None:
        _store = LocalStore(config.data_dir, config.schema_version)
    return _store
