"""Public façade for the likedsongs.llm package.

Exposes the classifier collaborators and the response schemas used to
validate their output.
"""

from .client import (
    OpenAITrackClassifier,
    TrackClassifier,
    build_classification_prompt,
)
from .schemas import (
    RESPONSE_SCHEMA_NAME,
    ClassificationResult,
    TrackVerdict,
    build_response_schema,
)

__all__ = [
    "TrackClassifier",
    "OpenAITrackClassifier",
    "build_classification_prompt",
    "ClassificationResult",
    "TrackVerdict",
    "RESPONSE_SCHEMA_NAME",
    "build_response_schema",
]
