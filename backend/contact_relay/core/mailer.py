# contact_relay/core/mailer.py
import logging
import smtplib
from dataclasses import dataclass
from email.errors import MessageError
from email.mime.text import MIMEText
from typing import Protocol

from contact_relay.core.settings import SmtpConfig

log = logging.getLogger("uvicorn.error")

SUBJECT_TEMPLATE = "Contact Us Form Submission From {name}"
BODY_TEMPLATE = "You have a message from {name}, with the email {email} and they said: {message}"


class Submission(Protocol):
    name: str
    email: str
    message: str


class DeliveryError(Exception):
    """The relay could not be reached, refused the login, or rejected the message."""


@dataclass(frozen=True)
class OutboundEmail:
    sender: str
    recipient: str
    subject: str
    body: str

    def to_mime(self) -> MIMEText:
        msg = MIMEText(self.body, "plain", "utf-8")
        msg["Subject"] = self.subject
        msg["From"] = self.sender
        msg["To"] = self.recipient
        return msg


def compose_email(submission: Submission, config: SmtpConfig) -> OutboundEmail:
    """Render the notification for one submission; user text is interpolated as-is."""
    return OutboundEmail(
        sender=config.smtp_user,
        recipient=config.default_receiver,
        subject=SUBJECT_TEMPLATE.format(name=submission.name),
        body=BODY_TEMPLATE.format(
            name=submission.name,
            email=submission.email,
            message=submission.message,
        ),
    )


def send_email(email: OutboundEmail, config: SmtpConfig) -> None:
    """
    Deliver one message through the configured relay.

    Blocks for the whole round-trip. A fresh connection is opened per call and
    nothing is retried; every failure surfaces as DeliveryError.
    """
    try:
        msg = email.to_mime()
        with smtplib.SMTP_SSL(config.smtp_server, config.smtp_port) as smtp:
            smtp.login(config.smtp_user, config.smtp_password)
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError, MessageError) as exc:
        raise DeliveryError(f"{type(exc).__name__}: {exc}") from exc
    log.info(f"[mailer] sent contact notification to {email.recipient}")
