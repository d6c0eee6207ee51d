"""
Internship Intake Services Module.

Services:
    - UploadService: Cloudinary upload adapter
    - SubmissionLog: append-only plain-text submission history
    - NotificationService: SendGrid confirmation email
    - SubmissionService: validate -> persist -> notify pipeline
"""

from .notification_service import NotificationService
from .submission_log import SubmissionLog
from .submission_service import StepResult, SubmissionService
from .upload_service import UploadResult, UploadService

__all__ = [
    "NotificationService",
    "StepResult",
    "SubmissionLog",
    "SubmissionService",
    "UploadResult",
    "UploadService",
]
