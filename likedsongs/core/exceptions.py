"""
Exception hierarchy for the liked-songs organizer.

Failures are grouped by where they are contained: external services
(Spotify, OpenAI) raise ExternalServiceFailure, the classification stage
raises ClassificationError subclasses. The analysis loop catches both per
month so one bad bucket never aborts its siblings.
"""

from typing import Optional


class LikedSongsError(Exception):
    """Base class for all application-specific errors."""
    pass


class ConfigurationError(LikedSongsError):
    """Raised when required settings or credentials are missing or invalid."""
    pass


class ExternalServiceFailure(LikedSongsError):
    """Raised for network, HTTP status or auth problems with an external service."""

    def __init__(
        self,
        service: str,
        reason: str,
        status_code: Optional[int] = None,
    ):
        self.service = service
        self.reason = reason
        self.status_code = status_code

        message = f"{service} request failed"
        if status_code is not None:
            message += f" with status {status_code}"
        message += f": {reason}"

        super().__init__(message)


class SpotifyTokenMissing(ExternalServiceFailure):
    """Raised when no usable Spotify token or refresh token is available."""

    def __init__(self, reason: str = "no Spotify token available"):
        super().__init__("spotify", reason)


class ClassificationError(LikedSongsError):
    """Base class for errors while classifying a bucket of tracks."""
    pass


class SchemaViolation(ClassificationError):
    """Raised when the classifier output is not valid JSON or fails schema validation."""

    def __init__(
        self,
        schema_name: str,
        validation_error: str,
        raw_output: Optional[str] = None,
    ):
        self.schema_name = schema_name
        self.validation_error = validation_error
        self.raw_output = raw_output

        message = f"Classifier output failed {schema_name} schema validation: {validation_error}"
        super().__init__(message)


class MergeMismatch(ClassificationError):
    """
    A track id that could not be matched between the submitted batch,
    the classifier response and the fetched track details.

    Collected and logged by the merge step rather than raised.
    """

    MISSING_FROM_RESPONSE = "missing_from_response"
    UNKNOWN_TRACK = "unknown_track"
    MISSING_DETAILS = "missing_details"

    def __init__(self, track_id: str, reason: str, title: Optional[str] = None):
        self.track_id = track_id
        self.reason = reason
        self.title = title

        label = f"'{title}' ({track_id})" if title else track_id
        super().__init__(f"Track {label} could not be merged: {reason}")


class BatchTooLarge(ClassificationError):
    """Raised when a bucket holds more tracks than the classifier batch limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Batch of {size} tracks exceeds the classifier limit of {limit}"
        )
