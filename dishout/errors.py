from __future__ import annotations


class DishOutError(Exception):
    """Base class for every error raised by the dish pipeline."""

    user_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)
        self.message = message or self.user_message


class ConversionError(DishOutError):
    """The uploaded file could not be decoded or re-encoded."""

    user_message = "Unable to process this image format. Please try a standard JPEG or PNG."


class LocationUnavailable(DishOutError):
    """Geolocation was denied, timed out, or is not supported."""

    user_message = "Location unavailable."


class AnalysisFailed(DishOutError):
    """The grounded model call failed for any reason."""

    user_message = "Failed to analyze dish. Please check your API key and connection."


class AnalysisInProgress(DishOutError):
    user_message = "An analysis is already running for this session."


class UploadFailed(DishOutError):
    user_message = "Dish image upload failed."


class TrackingFailed(DishOutError):
    user_message = "Lead tracking failed."
