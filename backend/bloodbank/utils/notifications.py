from __future__ import annotations

import asyncio
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Protocol, Set

from loguru import logger

from ..database import Settings, settings


@dataclass
class EmailNotification:
    to: str
    subject: str
    body: str


class Notifier(Protocol):
    def dispatch(self, message: EmailNotification) -> None:
        """Queue ``message`` for delivery and return immediately.

        Delivery is best-effort: failures are logged by the notifier and never
        reported back to the caller.
        """


class NotificationService:
    def __init__(self, config: Settings = settings) -> None:
        self.host = config.smtp_host
        self.port = config.smtp_port
        self.user = config.smtp_user
        self.password = config.smtp_password
        self.use_tls = config.smtp_use_tls
        self.sender = config.mail_sender
        if not self.host:
            logger.warning("SMTP host missing; e-mail notifications will be mocked.")
        self.pending: Set[asyncio.Task] = set()

    def _build_message(self, message: EmailNotification) -> EmailMessage:
        email = EmailMessage()
        email["From"] = self.sender
        email["To"] = message.to
        email["Subject"] = message.subject
        email.set_content(message.body)
        return email

    def _send_blocking(self, message: EmailNotification) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=10) as server:
            if self.use_tls:
                server.starttls()
            if self.user and self.password:
                server.login(self.user, self.password)
            server.send_message(self._build_message(message))

    async def send_email(self, message: EmailNotification) -> bool:
        if not self.host:
            logger.info("Mock e-mail to {}: {} | {}", message.to, message.subject, message.body)
            return True
        try:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._send_blocking, message)
        except (OSError, smtplib.SMTPException) as exc:
            logger.warning("E-mail delivery failed for {}: {}", message.to, exc)
            return False
        logger.info("E-mail sent to {} ({})", message.to, message.subject)
        return True

    def dispatch(self, message: EmailNotification) -> None:
        task = asyncio.create_task(self.send_email(message))
        self.pending.add(task)
        task.add_done_callback(self.pending.discard)

    async def drain(self) -> None:
        if self.pending:
            await asyncio.gather(*self.pending, return_exceptions=True)


notification_service = NotificationService()


def get_notifier() -> Notifier:
    return notification_service
