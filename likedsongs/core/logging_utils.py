"""Project-wide logging helpers.

Every pipeline stage reports through these functions instead of calling
print(), so the CLI and the token helper server share one output format.
"""

import logging
from typing import Optional

logger = logging.getLogger("liked_songs_organizer")


def log_section(title: str) -> None:
    """Top-level section header, preceded by a blank line."""
    logger.info("")
    logger.info("=== %s ===", title)


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_debug(message: str) -> None:
    logger.debug("%s", message)


def log_step(message: str) -> None:
    """Ongoing work."""
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    """Non-fatal problem; the run continues."""
    logger.warning("⚠️ %s", message)


def log_error(message: str) -> None:
    logger.error("❌ %s", message)


def log_failure(context: str, exc: BaseException, hint: Optional[str] = None) -> None:
    """
    Log a contained failure with the unit of work it belongs to.

    Example:
      log_failure("2023 / March", SchemaViolation(...), hint="skipping month")
      -> "❌ 2023 / March: SchemaViolation: LLM output failed ... (skipping month)"
    """
    message = f"{context}: {type(exc).__name__}: {exc}"
    if hint:
        message += f" ({hint})"
    logger.error("❌ %s", message)
    logger.debug("Traceback for %s", context, exc_info=exc)


def log_progress(current: int, total: Optional[int], prefix: str = "") -> None:
    """
    Progress line for paged or fanned-out work.

    Example:
      log_progress(3, 12, prefix="Fetching pages")
      -> "Fetching pages 3/12 (25%)"

    An unknown or zero total prints the bare count.
    """
    label = f"{prefix} " if prefix else ""
    if not total:
        logger.info("%s%d", label, current)
        return
    percent = 100 * min(max(current, 0), total) / total
    logger.info("%s%d/%d (%.0f%%)", label, current, total, percent)
