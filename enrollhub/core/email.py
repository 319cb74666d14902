"""Transactional email via Resend.

Routes and services depend on the ``Mailer`` protocol; ``get_mailer`` hands
out the Resend-backed implementation and tests override it with a fake.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

import resend

from enrollhub.core.constants import JinjaEmailTemplatesEnv
from enrollhub.core.exceptions import MailDeliveryError
from enrollhub.core.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailMessage:
    email: str
    subject: str
    message: str


class Mailer(Protocol):
    def send(self, mail: MailMessage) -> None:
        """Deliver ``mail`` or raise MailDeliveryError."""
        ...


def _render_template(template_name: str, **context: object) -> str:
    """Render a plain-text email body from ``templates/emails``."""
    template = JinjaEmailTemplatesEnv.get_template(template_name)
    return template.render(**context)


def init_resend() -> None:
    """Initialize Resend with API key if available."""
    settings = get_settings()
    if not settings.resend_api_key:
        return
    resend.api_key = settings.resend_api_key


class ResendMailer:
    """Sends plain-text mail through the Resend API."""

    def __init__(self, from_email: str):
        self._from_email = from_email

    def send(self, mail: MailMessage) -> None:
        try:
            resend.Emails.send(
                {
                    "from": self._from_email,
                    "to": mail.email,
                    "subject": mail.subject,
                    "text": mail.message,
                }
            )
        except Exception as e:
            logger.warning(
                "Resend rejected mail %r to %s: %s", mail.subject, mail.email, e
            )
            raise MailDeliveryError(str(e) or "Failed to send email") from e
        logger.info("Sent mail %r to %s", mail.subject, mail.email)


@lru_cache
def get_mailer() -> Mailer:
    """Get cached mailer instance."""
    return ResendMailer(from_email=get_settings().email_from)


def activation_message(
    *, email: str, first_name: str, activation_url: str, expires_minutes: int
) -> MailMessage:
    return MailMessage(
        email=email,
        subject="Activate your account",
        message=_render_template(
            "activation.txt",
            first_name=first_name,
            activation_url=activation_url,
            expires_minutes=expires_minutes,
        ),
    )


def welcome_message(*, email: str, first_name: str, last_name: str) -> MailMessage:
    return MailMessage(
        email=email,
        subject="Account created successfully",
        message=_render_template(
            "welcome.txt", first_name=first_name, last_name=last_name
        ),
    )


def password_reset_message(
    *, email: str, first_name: str, reset_url: str, expires_minutes: int
) -> MailMessage:
    return MailMessage(
        email=email,
        subject="Reset your password",
        message=_render_template(
            "password-reset.txt",
            first_name=first_name,
            reset_url=reset_url,
            expires_minutes=expires_minutes,
        ),
    )


def enrollment_message(
    *, email: str, first_name: str, course_title: str
) -> MailMessage:
    return MailMessage(
        email=email,
        subject="Course Enrollment Confirmation",
        message=_render_template(
            "enrollment.txt", first_name=first_name, course_title=course_title
        ),
    )
