from __future__ import annotations

import io
import logging

from PIL import Image

from ..errors import ConversionError
from .config import DEFAULT_ANALYSIS_CONFIG
from .models import ImageAsset

logger = logging.getLogger(__name__)

_WHITE = (255, 255, 255)


def normalize_image(raw: bytes, quality: int = DEFAULT_ANALYSIS_CONFIG.jpeg_quality) -> ImageAsset:
    """
    Re-encode any decodable image as an opaque JPEG.

    Transparent pixels are flattened onto white. Raises ConversionError when
    the bytes cannot be decoded or the image has no drawable area.
    """
    try:
        with Image.open(io.BytesIO(raw)) as source:
            source.load()
            rgba = source.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        logger.warning("Failed to decode uploaded image", exc_info=True)
        raise ConversionError() from exc

    width, height = rgba.size
    if width == 0 or height == 0:
        raise ConversionError()

    canvas = Image.new("RGB", rgba.size, _WHITE)
    canvas.paste(rgba, mask=rgba.getchannel("A"))

    buf = io.BytesIO()
    try:
        canvas.save(buf, format="JPEG", quality=quality)
    except OSError as exc:
        logger.warning("Failed to encode canonical JPEG", exc_info=True)
        raise ConversionError() from exc

    logger.debug("Normalized %d-byte upload to %d-byte JPEG (%dx%d)", len(raw), buf.tell(), width, height)
    return ImageAsset(data=buf.getvalue(), mime_type="image/jpeg")
