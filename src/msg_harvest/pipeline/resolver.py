"""Sender and recipient identity resolution."""

import re
from collections.abc import Callable, Iterable

from ..decoder.message import DecodedMessage, RawRecipient
from ..models import RecipientIdentity
from ..parsers.identity import (
    clean_display_name,
    extract_email,
    is_directory_identifier,
    is_plausible_address,
)
from .precedence import first_match

UNKNOWN_SENDER = "Unknown Sender"
UNKNOWN_RECIPIENT = "Unknown"

# First "From:" line of the raw transport headers
FROM_HEADER_PATTERN = re.compile(r"^From:[ \t]*(.*)$", re.IGNORECASE | re.MULTILINE)


def from_header_value(headers: str | None) -> str | None:
    """Return the value of the first From: header line, if any."""
    if not headers:
        return None
    match = FROM_HEADER_PATTERN.search(headers)
    return match.group(1) if match else None


def sender_email_candidates(message: DecodedMessage) -> list[Callable[[], str | None]]:
    """Sender address sources, best first."""
    return [
        lambda: extract_email(message.sender_smtp_address),
        lambda: extract_email(message.sent_representing_smtp_address),
        lambda: extract_email(from_header_value(message.transport_headers)),
        lambda: extract_email(message.sender_email),
        lambda: extract_email(message.sent_representing_email),
        # Some clients store the address in the display name
        lambda: extract_email(message.sender_name),
    ]


def resolve_sender_email(message: DecodedMessage) -> str:
    """Resolve the sender's SMTP address, or "" when none is recoverable."""
    email = first_match(sender_email_candidates(message)) or ""

    # Never keep a DN or anything that is not an address
    if is_directory_identifier(email) or "@" not in email:
        return ""
    return email


def resolve_sender_name(message: DecodedMessage) -> str:
    name = first_match(
        [
            lambda: message.sender_name,
            lambda: message.sent_representing_name,
        ]
    )
    return clean_display_name(name or UNKNOWN_SENDER)


def resolve_recipient(raw: RawRecipient) -> RecipientIdentity:
    """Resolve one recipient entry.

    The address comes from the address field, then the SMTP field, then the
    raw address field verbatim if it at least looks like an address.
    """
    email = first_match(
        [
            lambda: extract_email(raw.email),
            lambda: extract_email(raw.smtp_address),
            lambda: raw.email if is_plausible_address(raw.email) else None,
        ]
    )
    return RecipientIdentity(
        name=clean_display_name(raw.name or UNKNOWN_RECIPIENT),
        email=email or "",
    )


def resolve_recipients(raws: Iterable[RawRecipient]) -> tuple[RecipientIdentity, ...]:
    """Resolve recipients, preserving source order."""
    return tuple(resolve_recipient(raw) for raw in raws)
