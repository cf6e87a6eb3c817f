"""
Notification Service - transactional email through SendGrid and the in-app inbox
Following Single Responsibility Principle
"""
import html
import logging
from typing import Optional

import sendgrid
from fastapi.concurrency import run_in_threadpool
from sendgrid.helpers.mail import Mail, Email, To, Content

from jobboard.core.config import settings
from jobboard.core.exceptions import NotFoundError
from jobboard.repositories.notification_repo import NotificationRepository

logger = logging.getLogger(__name__)

# Singleton pattern for NotificationService
_notification_service_instance = None


def get_notification_service():
    global _notification_service_instance
    if _notification_service_instance is None:
        _notification_service_instance = NotificationService()
    return _notification_service_instance


class EmailDeliveryError(Exception):
    """Raised when SendGrid refuses or fails to accept a message."""


class NotificationService:
    def __init__(self, api_key: Optional[str] = None, from_email: Optional[str] = None):
        self.sg = sendgrid.SendGridAPIClient(api_key=api_key or settings.SENDGRID_API_KEY)
        self.from_email = Email(from_email or settings.MAIL_FROM)

    def send_email(self, to_email: str, subject: str, html_content: str) -> int:
        to = To(to_email)
        content = Content("text/html", html_content)
        mail = Mail(self.from_email, to, subject, content)
        try:
            response = self.sg.client.mail.send.post(request_body=mail.get())
        except Exception as exc:
            # python_http_client raises one HTTPError subclass per status code
            raise EmailDeliveryError(f"SendGrid rejected message to {to_email}: {exc}") from exc
        if response.status_code >= 400:
            raise EmailDeliveryError(f"SendGrid returned {response.status_code} for {to_email}")
        return response.status_code

    def send_password_reset_email(self, to_email: str, reset_link: str, expires_minutes: int) -> int:
        subject = "Password Reset Request"
        html_content = f"""
            <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
                <p>Hello,</p>
                <p>You requested a password reset. Click the link below to choose a new password:</p>
                <p><a href="{html.escape(reset_link)}">Reset Password</a></p>
                <p>This link expires in {expires_minutes} minutes. If you did not request it, ignore this email.</p>
            </div>
        """
        return self.send_email(to_email, subject, html_content)

    def send_alumni_status_email(self, to_email: str, status: str) -> int:
        subject = "Alumni Registration Status"
        html_content = f"<p>Hello,</p><p>Your alumni registration has been <b>{html.escape(status)}</b>.</p>"
        return self.send_email(to_email, subject, html_content)

    def send_company_approved_email(self, to_email: str) -> int:
        subject = "Company Approved"
        html_content = "<p>Hello,</p><p>Your company has been approved. You can now post jobs.</p>"
        return self.send_email(to_email, subject, html_content)

    def send_admin_notification(self, to_email: str, title: str, message: str) -> int:
        html_content = f"<p>{html.escape(message)}</p>"
        return self.send_email(to_email, title, html_content)


async def notify_safely(send, *args) -> bool:
    """Run a blocking send in the threadpool; log and swallow delivery failures."""
    try:
        await run_in_threadpool(send, *args)
        return True
    except EmailDeliveryError as exc:
        logger.error("Email send error: %s", exc)
        return False


def serialize_notification(notification) -> dict:
    return {
        "id": notification.id,
        "title": notification.title,
        "message": notification.message,
        "is_read": notification.is_read,
        "created_at": notification.created_at,
    }


class InboxService:
    """In-app notifications addressed to one user."""

    async def list_for_user(self, identity, db) -> dict:
        notifications = await NotificationRepository.get_for_user(db, identity.id)
        data = [serialize_notification(n) for n in notifications]
        return {"success": True, "count": len(data), "notifications": data}

    async def mark_read(self, identity, notification_id: str, db) -> dict:
        notification = await NotificationRepository.get_owned(db, notification_id, identity.id)
        if not notification:
            raise NotFoundError("Notification not found")
        notification.is_read = True
        await db.commit()
        return {"success": True, "notification": serialize_notification(notification)}

    async def delete(self, identity, notification_id: str, db) -> dict:
        notification = await NotificationRepository.get_owned(db, notification_id, identity.id)
        if not notification:
            raise NotFoundError("Notification not found")
        await db.delete(notification)
        await db.commit()
        return {"success": True, "message": "Notification deleted"}
