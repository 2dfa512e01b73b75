from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

# Reserved month-bucket key holding every entry of a year
ALL_KEY = "all"

MONTH_NAMES: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class Category(str, Enum):
    ENERGETIC = "Energetic"
    SAD = "Sad"
    RELAXED = "Relaxed"
    HAPPY = "Happy"
    MELLOW = "Mellow"
    INTENSE = "Intense"
    HOPEFUL = "Hopeful"
    NOSTALGIC = "Nostalgic"
    CALM = "Calm"
    UPLIFTED = "Uplifted"


# Guidance for the classifier prompt only; nothing branches on these.
CATEGORY_DESCRIPTIONS: Dict[Category, str] = {
    Category.ENERGETIC: "High energy, high sentiment, fast tempo (120+)",
    Category.SAD: "Low energy, low sentiment, slow tempo (below 80)",
    Category.RELAXED: "Low energy, high sentiment, slow tempo (below 80)",
    Category.HAPPY: "High energy, high sentiment, moderate-fast tempo (100-120)",
    Category.MELLOW: "Low energy, low sentiment, slow tempo (below 80)",
    Category.INTENSE: "High energy, low sentiment, fast tempo (110+)",
    Category.HOPEFUL: "Moderate energy, moderate sentiment, moderate tempo (90-120)",
    Category.NOSTALGIC: "Low-moderate energy, low sentiment, slow tempo (below 90)",
    Category.CALM: "Low energy, neutral sentiment, slow tempo (below 100)",
    Category.UPLIFTED: "Moderate-high energy, moderate-high sentiment, moderate tempo (100+)",
}


@dataclass(frozen=True)
class LibraryEntry:
    """
    One saved track as returned by the library, read-only.

    date_liked is timezone-aware (Spotify's `added_at`, in UTC).
    """

    uri: str
    id: str
    title: str
    artists: Tuple[str, ...]
    date_liked: datetime


@dataclass(frozen=True)
class TrackDetails:
    """Per-track metadata fetched from /tracks/{id}."""

    id: str
    name: str
    artists: Tuple[str, ...]
    popularity: int


@dataclass(frozen=True)
class ClassifiedTrack:
    uri: str
    id: str
    title: str
    artists: Tuple[str, ...]
    date_liked: datetime
    category: Category
    positivity: float
    popularity: int

    @classmethod
    def from_entry(
        cls,
        entry: LibraryEntry,
        category: Category,
        positivity: float,
        popularity: int,
    ) -> "ClassifiedTrack":
        return cls(
            uri=entry.uri,
            id=entry.id,
            title=entry.title,
            artists=entry.artists,
            date_liked=entry.date_liked,
            category=category,
            positivity=positivity,
            popularity=popularity,
        )


@dataclass(frozen=True)
class MonthAnalysis:
    """
    Aggregate statistics for one bucket.

    `popularity` and `positivity` hold running sums; averages are derived on
    read so every consumer divides the same sums by the same count.
    """

    tracks: Tuple[ClassifiedTrack, ...]
    sentiment: Optional[Category] = None
    typical_track: Optional[ClassifiedTrack] = None
    most_popular: Optional[ClassifiedTrack] = None
    least_popular: Optional[ClassifiedTrack] = None
    popularity: float = 0
    positivity: float = 0

    @property
    def track_count(self) -> int:
        return len(self.tracks)

    @property
    def has_data(self) -> bool:
        return self.track_count > 0

    @property
    def average_popularity(self) -> float:
        if not self.has_data:
            return 0.0
        return self.popularity / self.track_count

    @property
    def average_positivity(self) -> float:
        if not self.has_data:
            return 0.0
        return self.positivity / self.track_count


BucketTrack = Union[LibraryEntry, ClassifiedTrack]


@dataclass
class MonthBucket:
    """
    Tracks of one month (or of the whole year under ALL_KEY).

    `tracks` holds LibraryEntry items until the bucket is analysed, then the
    merged ClassifiedTrack items. `error` is set when analysis failed.
    """

    tracks: List[BucketTrack] = field(default_factory=list)
    analysis: Optional[MonthAnalysis] = None
    error: Optional[str] = None


YearBuckets = Dict[int, List[LibraryEntry]]
MonthBuckets = Dict[str, MonthBucket]
