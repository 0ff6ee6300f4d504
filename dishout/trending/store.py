from __future__ import annotations

import logging
import threading
import uuid

from pydantic import ValidationError

from ..storage.local import LocalStore, get_local_store
from .config import DEFAULT_TRENDING_CONFIG, TrendingConfig
from .models import TrendingEntry

logger = logging.getLogger(__name__)

_store: "TrendingStore | None" = None


def _title_case(term: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in term.split())


class TrendingStore:
    """
    Popularity-ranked dish queries backed by one local document.

    Every mutation rewrites the whole collection. There is no concurrency
    check, so two writers sharing a data directory can lose updates.
    """

    def __init__(self, storage: LocalStore, config: TrendingConfig = DEFAULT_TRENDING_CONFIG) -> None:
        self.storage = storage
        self.config = config
        self._lock = threading.Lock()
        self._entries = self._load()

    def _load(self) -> list[TrendingEntry]:
        raw = self.storage.get(self.config.store_key)
        entries: list[TrendingEntry] = []
        if isinstance(raw, list):
            for item in raw:
                try:
                    entries.append(TrendingEntry.model_validate(item))
                except ValidationError:
                    logger.warning("Skipping malformed trending entry %r", item)
        elif raw is not None:
            logger.warning("Ignoring trending document of unexpected shape %s", type(raw).__name__)

        # Defaults are appended, never dropped, even if storage lost them.
        known = {e.display_name.lower() for e in entries}
        for seed in self.config.seeds:
            if seed["display_name"].lower() not in known:
                entries.append(TrendingEntry.model_validate(seed))
        return entries

    def _persist(self) -> None:
        self.storage.put(self.config.store_key, [e.model_dump() for e in self._entries])

    def entries(self) -> list[TrendingEntry]:
        return [e.model_copy() for e in self._entries]

    def list(self) -> list[TrendingEntry]:
        ranked = sorted(self._entries, key=lambda e: e.popularity, reverse=True)
        return [e.model_copy() for e in ranked[: self.config.max_listed]]

    def get(self, entry_id: str) -> TrendingEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry.model_copy()
        return None

    def image_for(self, term: str) -> str:
        lowered = term.lower()
        for keyword, image in self.config.keyword_images.items():
            if keyword in lowered:
                return image
        return self.config.default_image

    def record(self, term: str) -> TrendingEntry | None:
        """Bump a matching entry or insert a new one; terms under 3 chars are ignored."""
        cleaned = (term or "").strip()
        if len(cleaned) < self.config.min_term_length:
            return None
        # Analyses record from worker threads.
        with self._lock:
            return self._record(cleaned)

    def _record(self, cleaned: str) -> TrendingEntry:
        lowered = cleaned.lower()
        for entry in self._entries:
            if entry.display_name.lower() == lowered:
                entry.popularity += self.config.increment
                self._persist()
                return entry.model_copy()

        entry = TrendingEntry(
            id=f"user-{uuid.uuid4().hex[:8]}",
            display_name=_title_case(cleaned),
            query_text=self.config.query_template.format(term=cleaned),
            image_url=self.image_for(cleaned),
            popularity=self.config.base_score,
        )
        self._entries.append(entry)
        self._persist()
        logger.info("Added trending entry %s", entry.display_name)
        return entry.model_copy()


def get_trending_store() -> TrendingStore:
    global _store
    if _store is None:
        _store = TrendingStore(get_local_store())
    return _store
