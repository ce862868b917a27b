"""
Outbound mail for account notifications (password reset links).

Delivery is best-effort: callers catch and log whatever ``send`` raises.
"""
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional, Protocol

from accounthub.shared.config import Settings

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def send(self, to: str, subject: str, body: str) -> None: ...


class SmtpNotifier:
    """Plain-text mail over SMTP, STARTTLS and login when configured."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        sender: str = "no-reply@accounthub.local",
        username: Optional[str] = None,
        password: Optional[str] = None,
        starttls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.starttls = starttls
        self.timeout = timeout

    def send(self, to: str, subject: str, body: str) -> None:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(body)

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.starttls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)
        logger.info("mail sent to %s (%s)", to, subject)


def build_notifier(cfg: Settings) -> Optional[Notifier]:
    if not cfg.SMTP_HOST:
        return None
    return SmtpNotifier(
        host=cfg.SMTP_HOST,
        port=cfg.SMTP_PORT,
        sender=cfg.SMTP_FROM,
        username=cfg.SMTP_USERNAME,
        password=cfg.SMTP_PASSWORD,
        starttls=cfg.SMTP_STARTTLS,
    )
