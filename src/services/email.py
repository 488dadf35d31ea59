"""Outbound email over SMTP."""

import logging
import smtplib
from email.message import EmailMessage

from src.config import get_settings
from src.errors import EmailDeliveryError

logger = logging.getLogger(__name__)


def send_email(to_email: str, subject: str, body: str) -> None:
    """Send a plain-text email through the configured relay.

    Port 465 uses implicit TLS; any other port upgrades with STARTTLS when
    the server offers it. Transport failures raise EmailDeliveryError.
    """
    settings = get_settings()

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.email_from
    msg["To"] = to_email
    msg.set_content(body)

    try:
        if settings.smtp_port == 465:
            smtp = smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, timeout=30)
        else:
            smtp = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30)
        with smtp:
            if settings.smtp_port != 465:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
            if settings.smtp_user and settings.smtp_password:
                smtp.login(settings.smtp_user, settings.smtp_password)
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        raise EmailDeliveryError() from e

    logger.info(f"Email sent to {to_email}: {subject}")
