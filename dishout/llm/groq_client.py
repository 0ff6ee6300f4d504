from __future__ import annotations

import logging
from typing import Any

from groq import AsyncGroq

from ..analysis.models import (
    GeoCoordinate,
    GroundedAnswer,
    GroundingChunk,
    ImageAsset,
    MapsSource,
    ModelRequest,
    WebSource,
)
from ..errors import AnalysisFailed
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

IDENTIFY_PROMPT = (
    "Identify the dish in this photo. Reply with only the dish name, "
    "no punctuation or explanation."
)

FIND_PLACES_PROMPT = """\
Identify this dish with a catchy title on the first line. Describe its key flavors.
Then, using web search, find 3 highly-rated restaurants nearby that serve this specific dish or cuisine.
For each restaurant, write its name exactly as listed, provide a reason why it is good and explicitly \
state its International Phone Number in the format "Phone: +xxxxxxxxxxx" if available."""

_TITLE_SEPARATORS = (" | ", " - ", " – ", " — ", ", ")


def _build_search_message(subject: str, location: GeoCoordinate | None, from_photo: bool) -> str:
    lines = [FIND_PLACES_PROMPT, ""]
    if from_photo:
        lines.append(f"The dish in the user's photo is: {subject}")
    else:
        lines.append(f"The user is looking for: {subject}")
    if location is not None:
        lines.append(
            f"The user is near latitude {location.latitude:.5f}, "
            f"longitude {location.longitude:.5f}. Prefer restaurants close to them."
        )
    return "\n".join(lines)


def _place_title(page_title: str) -> str:
    """'Al Mallah - Dubai - Tripadvisor' -> 'Al Mallah'."""
    title = page_title.strip()
    for sep in _TITLE_SEPARATORS:
        if sep in title:
            title = title.split(sep, 1)[0].strip()
    return title


def _is_place_url(url: str, hosts: tuple[str, ...]) -> bool:
    lowered = url.lower()
    return any(host in lowered for host in hosts)


def _attr(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def chunks_from_tools(executed_tools: list[Any] | None, hosts: tuple[str, ...]) -> list[GroundingChunk]:
    """Turn compound-model search results into grounding chunks."""
    chunks: list[GroundingChunk] = []
    seen: set[str] = set()
    for tool in executed_tools or []:
        search_results = _attr(tool, "search_results")
        for result in _attr(search_results, "results") or []:
            url = _attr(result, "url") or ""
            title = _attr(result, "title") or ""
            if not url or url in seen:
                continue
            seen.add(url)
            if _is_place_url(url, hosts):
                content = (_attr(result, "content") or "").strip()
                chunks.append(GroundingChunk(maps=MapsSource(
                    uri=url,
                    title=_place_title(title),
                    review_snippets=[content] if content else [],
                )))
            else:
                chunks.append(GroundingChunk(web=WebSource(uri=url, title=title)))
    return chunks


class GroqPlacesModel:
    """Grounded search-and-identify model backed by Groq."""

    def __init__(self, config: LLMConfig = DEFAULT_LLM_CONFIG) -> None:
        self.config = config
        self._client: AsyncGroq | None = None

    def _groq(self) -> AsyncGroq:
        # One client per model so its connection pool is reused across requests.
        if self._client is None:
            self._client = AsyncGroq(api_key=self.config.api_key, timeout=self.config.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def _identify_dish(self, client: AsyncGroq, image: ImageAsset) -> str:
        response = await client.chat.completions.create(
            model=self.config.vision_model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": IDENTIFY_PROMPT},
                        {"type": "image_url", "image_url": {"url": image.data_url}},
                    ],
                },
            ],
            max_tokens=64,
            temperature=0.2,
        )
        return (response.choices[0].message.content or "").strip()

    async def generate(self, request: ModelRequest) -> GroundedAnswer:
        """
        Identify the dish (for photos) and search for places serving it.

        Raises AnalysisFailed for a disabled client, a missing key, or any
        upstream error; the cause is logged but never shown to the user.
        """
        if not self.config.enabled or not self.config.api_key:
            logger.error("Groq client is disabled or GROQ_API_KEY is not set")
            raise AnalysisFailed()

        try:
            client = self._groq()
            if request.image is not None:
                subject = await self._identify_dish(client, request.image)
                if not subject:
                    raise AnalysisFailed("Vision model returned no dish name")
            else:
                subject = request.query or ""

            response = await client.chat.completions.create(
                model=self.config.search_model,
                messages=[
                    {
                        "role": "user",
                        "content": _build_search_message(
                            subject, request.location, from_photo=request.image is not None,
                        ),
                    },
                ],
                max_tokens=self.config.max_tokens,
                temperature=0.3,
            )
        except AnalysisFailed:
            raise
        except Exception as exc:
            logger.error("Groq API error", exc_info=True)
            raise AnalysisFailed() from exc

        message = response.choices[0].message
        text = message.content or ""
        chunks = chunks_from_tools(_attr(message, "executed_tools"), self.config.place_hosts)
        return GroundedAnswer(text=text, chunks=chunks)
