from __future__ import annotations

import re
from typing import Callable

from .config import DEFAULT_ANALYSIS_CONFIG
from .models import GroundingChunk, PlaceRecord

PHONE_PATTERN = re.compile(r"Phone:\s*([+\d\s()-]+)", re.IGNORECASE)
_MARKUP_RE = re.compile(r"[*#]")

# (answer text, place title) -> phone string or None
PhoneExtractor = Callable[[str, str], "str | None"]


def split_answer(text: str) -> tuple[str, str]:
    """First line (markup stripped) is the title; the rest is the description."""
    lines = text.split("\n")
    title = _MARKUP_RE.sub("", lines[0]).strip()
    description = "\n".join(lines[1:]).strip()
    return title, description


def extract_phone_after_title(
    text: str,
    title: str,
    lookahead: int = DEFAULT_ANALYSIS_CONFIG.phone_lookahead,
) -> str | None:
    """
    Find ``Phone: ...`` within ``lookahead`` chars of the title's first occurrence.

    Best effort: a title that is not in the text verbatim, or no phone in
    the window, yields None.
    """
    index = text.find(title)
    if index == -1:
        return None
    match = PHONE_PATTERN.search(text[index:index + lookahead])
    if match and match.group(1):
        return match.group(1).strip()
    return None


def enrich_chunks(
    text: str,
    chunks: list[GroundingChunk],
    extractor: PhoneExtractor = extract_phone_after_title,
) -> list[GroundingChunk]:
    enriched: list[GroundingChunk] = []
    for chunk in chunks:
        if chunk.maps is not None and chunk.maps.title:
            phone = extractor(text, chunk.maps.title)
            if phone:
                chunk = chunk.model_copy(
                    update={"maps": chunk.maps.model_copy(update={"phone_number": phone})}
                )
        enriched.append(chunk)
    return enriched


def to_place_records(chunks: list[GroundingChunk]) -> list[PlaceRecord]:
    """Keep only chunks with a place component; pure web citations are dropped."""
    records: list[PlaceRecord] = []
    for chunk in chunks:
        if chunk.maps is None:
            continue
        records.append(PlaceRecord(
            title=chunk.maps.title,
            map_uri=chunk.maps.uri,
            phone_number=chunk.maps.phone_number,
            review_snippet=chunk.maps.review_snippets[0] if chunk.maps.review_snippets else None,
        ))
    return records


def parse_places(
    text: str,
    chunks: list[GroundingChunk],
    extractor: PhoneExtractor = extract_phone_after_title,
) -> list[PlaceRecord]:
    return to_place_records(enrich_chunks(text, chunks, extractor))
