# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Emailing the plain-text report.

The address is validated before any check runs, so a typo in --email fails
fast instead of after the whole report has been printed. Delivery goes
through an SMTP relay, localhost:25 by default, which is where the host's
own mail transfer agent listens.
"""

import re
import smtplib
from email.message import EmailMessage

from hostcheck import __version__
from hostcheck.config.schema import MailConfig
from hostcheck.logging.logger import get_logger
from hostcheck.mail.exceptions import InvalidEmailAddressError, MailDeliveryError

_logger = get_logger(__name__)

_LOCAL_PART = re.compile(r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*")
_DOMAIN_LABEL = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")

MAX_ADDRESS_LENGTH = 254
MAX_LOCAL_PART_LENGTH = 64


def validate_email_address(address: str) -> bool:
    """
    Check that an address looks like local@domain.tld.

    Dot-atom local part, at least two domain labels, no label starting or
    ending with a hyphen. Quoted local parts and IP-literal domains are not
    accepted.
    """
    if len(address) > MAX_ADDRESS_LENGTH or address.count("@") != 1:
        return False

    local, domain = address.split("@")
    if not local or len(local) > MAX_LOCAL_PART_LENGTH:
        return False
    if not _LOCAL_PART.fullmatch(local):
        return False

    labels = domain.split(".")
    if len(labels) < 2:
        return False
    return all(_DOMAIN_LABEL.fullmatch(label) for label in labels)


def require_valid_address(address: str) -> str:
    """Return the address unchanged, or raise InvalidEmailAddressError."""
    if not validate_email_address(address):
        raise InvalidEmailAddressError(f"Invalid email address: {address!r}")
    return address


def build_message(
    recipient: str,
    body: str,
    settings: MailConfig,
    hostname: str,
) -> EmailMessage:
    message = EmailMessage()
    message["To"] = recipient
    message["From"] = settings.sender
    message["Subject"] = f"{settings.subject} on {hostname}"
    message["X-Mailer"] = f"hostcheck/{__version__}"
    message.set_content(body)
    return message


def send_report(
    recipient: str,
    body: str,
    settings: MailConfig,
    hostname: str,
) -> None:
    """
    Send the plain-text report to a single recipient.

    Raises:
        InvalidEmailAddressError: If the recipient address is malformed.
        MailDeliveryError: If the relay can't be reached or rejects the message.
    """
    require_valid_address(recipient)
    message = build_message(recipient, body, settings, hostname)

    try:
        with smtplib.SMTP(
            settings.smtp_host,
            settings.smtp_port,
            timeout=settings.timeout_seconds,
        ) as smtp:
            smtp.send_message(message)
    except (smtplib.SMTPException, OSError) as err:
        raise MailDeliveryError(
            f"Could not send report to {recipient} via "
            f"{settings.smtp_host}:{settings.smtp_port}: {err}"
        ) from err

    _logger.info(
        "Report emailed",
        extra={"recipient": recipient, "smtp_host": settings.smtp_host},
    )
