"""LLM classification of one bucket and merge back onto library entries.

classify_bucket() is the per-month unit of work of the analysis pipeline:

  1. submit the whole bucket to the classifier as a single batch
  2. validate the raw answer against the closed response schema
     (SchemaViolation aborts the bucket, nothing partial is merged)
  3. fetch Spotify details for every submitted track on a thread pool,
     waiting for all of them before going further
  4. merge verdicts and popularity onto the entries, strictly by track id
  5. fold the merged tracks into a MonthAnalysis

Ids that cannot be matched in step 4 are MergeMismatch records: they are
logged and the track is left out of the aggregate.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
import json
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from likedsongs import config
from likedsongs.core import (
    BatchTooLarge,
    ClassifiedTrack,
    ExternalServiceFailure,
    LibraryEntry,
    MergeMismatch,
    MonthAnalysis,
    SchemaViolation,
    TrackDetails,
    log_debug,
    log_progress,
    log_warning,
)
from likedsongs.llm import (
    RESPONSE_SCHEMA_NAME,
    ClassificationResult,
    TrackClassifier,
)

from .aggregation import aggregate


@dataclass
class MergeOutcome:
    tracks: List[ClassifiedTrack] = field(default_factory=list)
    mismatches: List[MergeMismatch] = field(default_factory=list)
    typical_track: Optional[ClassifiedTrack] = None


def validate_classification(payload: Any) -> ClassificationResult:
    """
    Validate a raw classifier answer (decoded JSON or a JSON string).

    Raises SchemaViolation on anything that does not match the closed
    schema: missing or extra fields, unknown category, out-of-range
    positivity, malformed JSON.
    """
    try:
        if isinstance(payload, (str, bytes)):
            return ClassificationResult.model_validate_json(payload)
        return ClassificationResult.model_validate(payload)
    except ValidationError as e:
        if isinstance(payload, (str, bytes)):
            raw = payload if isinstance(payload, str) else payload.decode("utf-8", "replace")
        else:
            raw = json.dumps(payload, ensure_ascii=False, default=str)
        raise SchemaViolation(RESPONSE_SCHEMA_NAME, str(e), raw) from e


def fetch_track_details(
    entries: Sequence[LibraryEntry],
    library: Any,
    max_workers: Optional[int] = None,
) -> Dict[str, TrackDetails]:
    """
    Look up every entry with library.fetch_track_metadata(), in parallel.

    All lookups are awaited before returning. If any of them failed, the
    first failure is raised as ExternalServiceFailure once the others have
    settled.
    """
    track_ids = list(dict.fromkeys(e.id for e in entries))
    if not track_ids:
        return {}

    workers = max_workers or config.DETAIL_FETCH_WORKERS
    details: Dict[str, TrackDetails] = {}
    failures: List[tuple] = []

    total = len(track_ids)
    processed = 0
    with ThreadPoolExecutor(max_workers=min(workers, total)) as executor:
        future_to_id = {
            executor.submit(library.fetch_track_metadata, track_id): track_id
            for track_id in track_ids
        }

        for future in as_completed(future_to_id):
            track_id = future_to_id[future]
            processed += 1
            try:
                details[track_id] = future.result()
            except Exception as e:
                failures.append((track_id, e))
            if processed % 50 == 0 or processed == total:
                log_progress(processed, total, prefix="  Track details")

    if failures:
        track_id, error = failures[0]
        if isinstance(error, ExternalServiceFailure):
            raise error
        raise ExternalServiceFailure(
            "spotify",
            f"track details lookup failed for {track_id} "
            f"({len(failures)}/{total} lookups failed): {error}",
        ) from error

    return details


def merge_classifications(
    entries: Sequence[LibraryEntry],
    result: ClassificationResult,
    details: Dict[str, TrackDetails],
) -> MergeOutcome:
    """
    Join entries, verdicts and details on track id.

    Entries keep their source order. The first verdict for an id wins.
    Titles and artists are never used for matching.
    """
    outcome = MergeOutcome()
    submitted_ids = {e.id for e in entries}

    verdicts = {}
    for verdict in result.tracks:
        if verdict.id not in submitted_ids:
            outcome.mismatches.append(
                MergeMismatch(verdict.id, MergeMismatch.UNKNOWN_TRACK, verdict.title)
            )
            continue
        if verdict.id in verdicts:
            log_debug(f"Duplicate verdict for {verdict.id} ignored")
            continue
        verdicts[verdict.id] = verdict

    for entry in entries:
        verdict = verdicts.get(entry.id)
        if verdict is None:
            outcome.mismatches.append(
                MergeMismatch(entry.id, MergeMismatch.MISSING_FROM_RESPONSE, entry.title)
            )
            continue

        detail = details.get(entry.id)
        if detail is None:
            outcome.mismatches.append(
                MergeMismatch(entry.id, MergeMismatch.MISSING_DETAILS, entry.title)
            )
            continue

        outcome.tracks.append(
            ClassifiedTrack.from_entry(
                entry,
                category=verdict.category,
                positivity=verdict.positivity,
                popularity=detail.popularity,
            )
        )

    typical_id = result.typical_track.id
    outcome.typical_track = next(
        (t for t in outcome.tracks if t.id == typical_id), None
    )
    return outcome


def classify_bucket(
    entries: Sequence[LibraryEntry],
    classifier: TrackClassifier,
    library: Any,
    max_workers: Optional[int] = None,
    max_batch_size: Optional[int] = None,
    context: str = "bucket",
) -> MonthAnalysis:
    """
    Classify, enrich and aggregate one bucket.

    `context` (e.g. "2023 / March") prefixes the mismatch warnings.
    Raises BatchTooLarge, SchemaViolation or ExternalServiceFailure; the
    caller decides how far the failure propagates.
    """
    if not entries:
        return aggregate([])

    limit = max_batch_size if max_batch_size is not None else config.CLASSIFIER_MAX_BATCH
    if limit and len(entries) > limit:
        raise BatchTooLarge(len(entries), limit)

    payload = classifier.classify(list(entries))
    result = validate_classification(payload)

    details = fetch_track_details(entries, library, max_workers=max_workers)
    outcome = merge_classifications(entries, result, details)

    for mismatch in outcome.mismatches:
        log_warning(f"{context}: {mismatch}")
    if outcome.mismatches:
        log_warning(
            f"{context}: {len(outcome.mismatches)} track(s) excluded from aggregation."
        )
    if outcome.typical_track is None:
        log_warning(
            f"{context}: typical track {result.typical_track.id} "
            f"is not among the merged tracks."
        )

    return aggregate(
        outcome.tracks,
        sentiment=result.sentiment,
        typical_track=outcome.typical_track,
    )
