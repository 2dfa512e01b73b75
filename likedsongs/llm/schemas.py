"""
Pydantic schemas for the sentiment classifier.

The models validate what comes back from the LLM. build_response_schema()
produces the matching JSON schema sent with the request, in the strict
dialect OpenAI structured outputs accept (every property required,
no additional properties).
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictStr

from likedsongs.core import Category

RESPONSE_SCHEMA_NAME = "song_sentiment"

POSITIVITY_MIN = -100
POSITIVITY_MAX = 100


class TrackVerdict(BaseModel):
    """Classification of a single submitted track."""

    model_config = ConfigDict(extra="forbid")

    title: StrictStr = Field(..., description="Song title as submitted")
    artist: StrictStr = Field(..., description="Artist names as submitted")
    id: StrictStr = Field(..., description="Spotify track id, copied verbatim")
    category: Category = Field(..., description="One of the fixed mood categories")
    # Ints pass, numeric strings and bools do not
    positivity: StrictFloat = Field(
        ...,
        description="Tone and lyrical sentiment, -100 (very negative) to 100 (very positive)",
        ge=POSITIVITY_MIN,
        le=POSITIVITY_MAX,
    )


class ClassificationResult(BaseModel):
    """Whole-batch answer: per-track verdicts plus the overall mood."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    tracks: List[TrackVerdict]
    sentiment: Category
    typical_track: TrackVerdict = Field(..., alias="typicalTrack")


def _verdict_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "title": {"type": "string"},
            "artist": {"type": "string"},
            "id": {"type": "string"},
            "category": {
                "type": "string",
                "enum": [c.value for c in Category],
            },
            "positivity": {"type": "number"},
        },
        "required": ["title", "artist", "id", "category", "positivity"],
        "additionalProperties": False,
    }


def build_response_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "tracks": {"type": "array", "items": _verdict_schema()},
            "sentiment": {
                "type": "string",
                "enum": [c.value for c in Category],
            },
            "typicalTrack": _verdict_schema(),
        },
        "required": ["tracks", "sentiment", "typicalTrack"],
        "additionalProperties": False,
    }
