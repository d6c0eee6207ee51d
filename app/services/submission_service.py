"""
Submission pipeline for internship applications.

Runs the fallible steps of an accepted request in strict order:
validate -> persist -> notify. Every step returns a StepResult and the
pipeline stops at the first one that did not succeed. The upload has
already been resolved by the route dependency when the pipeline starts.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from fastapi import status

from app.core.errors import NotificationError, PersistenceError
from app.schemas.submission import NO_FILE_REFERENCE, Submission
from app.services.notification_service import NotificationService
from app.services.submission_log import SubmissionLog

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields."
SAVE_FAILED_MESSAGE = "Failed to save submission."
EMAIL_FAILED_MESSAGE = "Form submitted, but email failed."
SUCCESS_MESSAGE = "Form submitted and emailed successfully!"


@dataclass(frozen=True)
class StepResult:
    """Outcome of one pipeline step, mapped straight to the HTTP response."""

    ok: bool
    status_code: int = status.HTTP_200_OK
    message: str = ""

    @classmethod
    def proceed(cls) -> "StepResult":
        return cls(ok=True)

    @classmethod
    def fail(cls, status_code: int, message: str) -> "StepResult":
        return cls(ok=False, status_code=status_code, message=message)


Step = Callable[[Submission], Awaitable[StepResult]]


class SubmissionService:
    """Validate, persist and announce one internship application."""

    def __init__(self, submission_log: SubmissionLog, notifier: NotificationService):
        self.submission_log = submission_log
        self.notifier = notifier

    async def validate(self, submission: Submission) -> StepResult:
        missing = submission.missing_fields()
        if missing:
            logger.info("Submission rejected missing_fields=%s", ",".join(missing))
            return StepResult.fail(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS_MESSAGE)
        return StepResult.proceed()

    async def persist(self, submission: Submission) -> StepResult:
        try:
            await self.submission_log.append(submission)
        except PersistenceError:
            return StepResult.fail(
                status.HTTP_500_INTERNAL_SERVER_ERROR, SAVE_FAILED_MESSAGE
            )
        return StepResult.proceed()

    async def notify(self, submission: Submission) -> StepResult:
        try:
            await self.notifier.send(submission)
        except NotificationError as exc:
            # the record is already on disk and is kept
            logger.error("Notification failed after save: %s", exc)
            return StepResult.fail(
                status.HTTP_500_INTERNAL_SERVER_ERROR, EMAIL_FAILED_MESSAGE
            )
        return StepResult.proceed()

    @property
    def steps(self) -> Sequence[Step]:
        return (self.validate, self.persist, self.notify)

    async def process(self, submission: Submission) -> StepResult:
        for step in self.steps:
            result = await step(submission)
            if not result.ok:
                return result

        logger.info(
            "Submission accepted has_file=%s",
            submission.file_reference != NO_FILE_REFERENCE,
        )
        return StepResult(ok=True, status_code=status.HTTP_200_OK, message=SUCCESS_MESSAGE)
