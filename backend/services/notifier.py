"""
Email notifications.
SmtpNotifier sends through any SMTP relay (Gmail, Outlook, SES SMTP, ...).
When no SMTP credentials are configured, LogNotifier just logs the message.
Neither ever raises: send() returns False on failure.
"""

import logging
import os
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

logger = logging.getLogger(__name__)


class SmtpNotifier:
    def __init__(self, server: str, port: int, username: str, password: str, from_email: Optional[str] = None):
        self.server = server
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email or username

    @classmethod
    def from_env(cls) -> Optional["SmtpNotifier"]:
        username = os.getenv("SMTP_USERNAME", "")
        password = os.getenv("SMTP_PASSWORD", "")
        server = os.getenv("SMTP_SERVER", "")
        if not (username and password and server):
            return None
        return cls(
            server=server,
            port=int(os.getenv("SMTP_PORT", "587")),
            username=username,
            password=password,
            from_email=os.getenv("SMTP_FROM_EMAIL") or None,
        )

    def send(self, to_email: str, subject: str, body_html: str) -> bool:
        try:
            msg = MIMEMultipart("alternative")
            msg["Subject"] = subject
            msg["From"] = self.from_email
            msg["To"] = to_email
            msg.attach(MIMEText(body_html, "html"))

            context = ssl.create_default_context()
            # 465 is implicit SSL, everything else upgrades with STARTTLS
            if self.port == 465:
                with smtplib.SMTP_SSL(self.server, self.port, context=context) as server:
                    server.login(self.username, self.password)
                    server.send_message(msg)
            else:
                with smtplib.SMTP(self.server, self.port) as server:
                    server.starttls(context=context)
                    server.login(self.username, self.password)
                    server.send_message(msg)

            logger.info("Email sent to %s", to_email)
            return True
        except Exception as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            return False


class LogNotifier:
    def send(self, to_email: str, subject: str, body_html: str) -> bool:
        logger.info("Email (not sent, SMTP not configured) to=%s subject=%r", to_email, subject)
        return True


_notifier = None


def get_notifier():
    global _notifier
    if _notifier is None:
        _notifier = SmtpNotifier.from_env() or LogNotifier()
    return _notifier
