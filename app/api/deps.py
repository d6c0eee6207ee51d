from typing import Dict

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.services.notification_service import NotificationService
from app.services.submission_log import SubmissionLog
from app.services.submission_service import SubmissionService
from app.services.upload_service import UploadService

# one log per path so concurrent requests share its append lock
_submission_logs: Dict[str, SubmissionLog] = {}


def get_upload_service(settings: Settings = Depends(get_settings)) -> UploadService:
    return UploadService(settings)


def get_submission_log(settings: Settings = Depends(get_settings)) -> SubmissionLog:
    """
    Submission log dependency.

    Usage:
        @router.post("/items")
        async def create_item(log: SubmissionLog = Depends(get_submission_log)):
            ...
    """
    path = settings.SUBMISSIONS_LOG_PATH
    if path not in _submission_logs:
        _submission_logs[path] = SubmissionLog(settings)
    return _submission_logs[path]


def get_notification_service(
    settings: Settings = Depends(get_settings),
) -> NotificationService:
    return NotificationService(settings)


def get_submission_service(
    submission_log: SubmissionLog = Depends(get_submission_log),
    notifier: NotificationService = Depends(get_notification_service),
) -> SubmissionService:
    return SubmissionService(submission_log, notifier)
