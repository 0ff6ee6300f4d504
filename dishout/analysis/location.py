from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from ..errors import LocationUnavailable
from .config import DEFAULT_ANALYSIS_CONFIG
from .models import GeoCoordinate

logger = logging.getLogger(__name__)

LocationProvider = Callable[[], Awaitable[GeoCoordinate]]


def fixed_location(latitude: float | None, longitude: float | None) -> LocationProvider:
    """A provider for coordinates the client already resolved; missing means denied."""

    async def provide() -> GeoCoordinate:
        if latitude is None or longitude is None:
            raise LocationUnavailable("Location denied or not shared by the client")
        return GeoCoordinate(latitude=latitude, longitude=longitude)

    return provide


async def acquire_location(
    provider: LocationProvider | None,
    timeout: float = DEFAULT_ANALYSIS_CONFIG.location_timeout,
) -> GeoCoordinate | None:
    """Single attempt; any failure means proceeding without a location."""
    if provider is None:
        logger.info("Geolocation not supported, proceeding without location")
        return None
    try:
        return await asyncio.wait_for(provider(), timeout)
    except LocationUnavailable as exc:
        logger.info("Proceeding without location: %s", exc)
    except asyncio.TimeoutError:
        logger.info("Location lookup timed out after %.1fs, proceeding without location", timeout)
    except Exception:
        logger.warning("Location provider failed, proceeding without location", exc_info=True)
    return None
