# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Exceptions for emailing the report."""


class MailError(Exception):
    """Base for all mail errors."""


class InvalidEmailAddressError(MailError):
    """The recipient address is not syntactically valid."""


class MailDeliveryError(MailError):
    """The SMTP relay refused the message or could not be reached."""
