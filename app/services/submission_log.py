from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from app.core.config import Settings
from app.core.errors import PersistenceError
from app.schemas.submission import Submission

logger = logging.getLogger(__name__)

RECORD_HEADER = "--- New Submission ---"


def format_record(submission: Submission) -> str:
    """Render the plain-text block appended for one submission."""
    return (
        f"\n{RECORD_HEADER}\n"
        f"{submission.pretty_fields()}\n"
        f"File URL: {submission.file_reference}\n"
    )


class SubmissionLog:
    """Append-only plain-text history of accepted submissions."""

    def __init__(self, settings: Settings):
        self.path = Path(settings.SUBMISSIONS_LOG_PATH)
        # serializes appends from concurrent requests in this process
        self._lock = asyncio.Lock()

    def _append_sync(self, entry: str) -> None:
        with open(self.path, "a", encoding="utf-8") as handle:
            handle.write(entry)

    async def append(self, submission: Submission) -> None:
        entry = format_record(submission)
        try:
            async with self._lock:
                await asyncio.to_thread(self._append_sync, entry)
        except OSError as exc:
            logger.error("Error saving submission to %s: %s", self.path, exc)
            raise PersistenceError("Failed to save submission.") from exc

        logger.info("Submission saved to %s", self.path)
