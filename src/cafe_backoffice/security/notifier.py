from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)


class AlertNotifier(Protocol):
    """Outbound channel used to tell administrators about a security alert."""

    def send(self, *, recipients: Sequence[str], subject: str, body: str, html: str | None = None) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class SMTPConfig:
    host: str
    port: int = 587
    user: str = ""
    password: str = ""
    from_address: str = ""


class SMTPAlertNotifier(AlertNotifier):
    def __init__(self, config: SMTPConfig):
        self._config = config

    def send(self, *, recipients: Sequence[str], subject: str, body: str, html: str | None = None) -> None:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self._config.from_address or self._config.user
        msg["To"] = ", ".join(recipients)
        msg.set_content(body)
        if html:
            msg.add_alternative(html, subtype="html")

        with smtplib.SMTP(self._config.host, self._config.port) as s:
            s.ehlo()
            if self._config.port in (587, 25):
                s.starttls()
                s.ehlo()
            if self._config.user and self._config.password:
                s.login(self._config.user, self._config.password)
            s.send_message(msg)

        logger.info("Security alert mail sent to %d recipient(s): %s", len(recipients), subject)
