from __future__ import annotations

import asyncio
import logging
from typing import List

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.core.config import Settings
from app.core.errors import NotificationError
from app.schemas.submission import Submission

logger = logging.getLogger(__name__)


class NotificationService:
    """Service to build and deliver the confirmation email via SendGrid."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def recipients(self, submission: Submission) -> List[str]:
        email = submission.email
        addresses = list(email) if isinstance(email, list) else [str(email)]
        if self.settings.ADMIN_EMAIL:
            addresses.append(self.settings.ADMIN_EMAIL)
        else:
            logger.warning("ADMIN_EMAIL not configured; notifying applicant only")
        return addresses

    @staticmethod
    def build_body(submission: Submission) -> str:
        return (
            "Thank you for applying!\n\n"
            f"Details:\n{submission.pretty_fields()}\n\n"
            f"File URL:\n{submission.file_reference}"
        )

    def build_message(self, submission: Submission) -> Mail:
        if not self.settings.VERIFIED_SENDER:
            raise NotificationError("VERIFIED_SENDER not configured")

        # is_multiple: one personalization per recipient, like sendMultiple
        return Mail(
            from_email=self.settings.VERIFIED_SENDER,
            to_emails=self.recipients(submission),
            subject=self.settings.NOTIFICATION_SUBJECT,
            plain_text_content=self.build_body(submission),
            is_multiple=True,
        )

    def _send_sync(self, message: Mail) -> int:
        if not self.settings.SENDGRID_API_KEY:
            raise NotificationError("SendGrid not configured")

        client = SendGridAPIClient(self.settings.SENDGRID_API_KEY.get_secret_value())
        response = client.send(message)
        return response.status_code

    async def send(self, submission: Submission) -> None:
        """Deliver one multi-recipient email; raises NotificationError on failure."""
        try:
            message = self.build_message(submission)
            status_code = await asyncio.to_thread(self._send_sync, message)
        except NotificationError:
            raise
        except Exception as exc:
            logger.error("SendGrid error: %s", exc)
            raise NotificationError(str(exc)) from exc

        if status_code >= 400:
            logger.error("SendGrid rejected the send status=%s", status_code)
            raise NotificationError(f"SendGrid responded with status {status_code}")

        logger.info("Email sent via SendGrid status=%s", status_code)
