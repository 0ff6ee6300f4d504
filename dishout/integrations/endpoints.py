from __future__ import annotations

import logging

import httpx

from ..analysis.models import ImageAsset
from ..errors import TrackingFailed, UploadFailed
from ..ordering.models import LeadRecord
from .config import DEFAULT_ENDPOINT_CONFIG, EndpointConfig

logger = logging.getLogger(__name__)

_client: "DishOutApi | None" = None


class DishOutApi:
    """Client for the image-hosting and lead-tracking endpoints."""

    def __init__(
        self,
        config: EndpointConfig = DEFAULT_ENDPOINT_CONFIG,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            transport=self._transport,
        )

    async def _post_image(self, image: ImageAsset) -> str:
        try:
            async with self._http() as client:
                response = await client.post(
                    self.config.upload_path, json={"image": image.data_url}
                )
        except httpx.HTTPError as exc:
            raise UploadFailed(f"Upload request failed: {exc}") from exc

        if response.status_code != 200:
            raise UploadFailed(f"Upload endpoint returned {response.status_code}")
        try:
            url = response.json().get("url")
        except ValueError as exc:
            raise UploadFailed("Upload endpoint returned invalid JSON") from exc
        if not url:
            raise UploadFailed("Upload endpoint returned no url")
        return url

    async def upload_dish_image(self, image: ImageAsset) -> str | None:
        """
        Upload the canonical JPEG and return its shareable URL.

        Returns None when uploads are not configured or fail; order messages
        are then composed without an image link.
        """
        if not self.config.enabled:
            logger.debug("Image upload endpoint not configured, skipping upload")
            return None
        try:
            return await self._post_image(image)
        except UploadFailed:
            logger.warning("Image upload failed, proceeding without shareable link", exc_info=True)
            return None

    async def track_lead(self, lead: LeadRecord) -> None:
        if not self.config.enabled:
            logger.debug("Lead tracking endpoint not configured, skipping")
            return
        try:
            try:
                async with self._http() as client:
                    response = await client.post(
                        self.config.track_path, json=lead.model_dump(by_alias=True)
                    )
            except httpx.HTTPError as exc:
                raise TrackingFailed(f"Tracking request failed: {exc}") from exc
            if response.status_code >= 400:
                raise TrackingFailed(f"Tracking endpoint returned {response.status_code}")
        except TrackingFailed:
            logger.error("Background lead tracking failed", exc_info=True)


def get_api_client(config: EndpointConfig = DEFAULT_ENDPOINT_CONFIG) -> DishOutApi:
    global _client
    if _client is None:
        _client = DishOutApi(config)
    return _client
