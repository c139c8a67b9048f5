"""Typed view of a decoded mail container.

Decoders translate their own property bags into these dataclasses so the
resolution pipeline never touches a decoder library directly.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

# PR_ATTACH_METHOD value for attachments whose bytes live in the container
ATTACH_BY_VALUE = 1


@dataclass(frozen=True)
class RawRecipient:
    """Recipient entry as stored in the container."""

    name: str | None = None
    email: str | None = None  # address field (may hold a DN)
    smtp_address: str | None = None


@dataclass(frozen=True)
class RawAttachment:
    """Attachment descriptor with a lazy accessor for its payload."""

    short_name: str | None = None
    long_name: str | None = None
    method: int | None = None
    data_id: str | None = None  # identifier of the payload stream, if any
    mime_type: str | None = None
    reader: Callable[[], bytes | None] | None = field(default=None, repr=False, compare=False)

    @property
    def has_payload(self) -> bool:
        """Embedded data, or at least a payload stream to read from."""
        return self.method == ATTACH_BY_VALUE or bool(self.data_id)

    def read_content(self) -> bytes | None:
        """Fetch the payload through the decoder's accessor.

        Raises:
            AttachmentExtractionFailure (or any decoder error) on failure
        """
        if self.reader is None:
            return None
        return self.reader()


@dataclass(frozen=True)
class DecodedMessage:
    """Read-only structured properties of one message."""

    subject: str | None = None
    sender_smtp_address: str | None = None
    sent_representing_smtp_address: str | None = None
    transport_headers: str | None = None
    sender_email: str | None = None
    sent_representing_email: str | None = None
    sender_name: str | None = None
    sent_representing_name: str | None = None
    body: str | None = None
    html_body: str | None = None
    client_submit_time: datetime | None = None
    delivery_time: datetime | None = None
    recipients: tuple[RawRecipient, ...] = ()
    attachments: tuple[RawAttachment, ...] = ()


class MessageDecoder(Protocol):
    """Anything that turns container bytes into a DecodedMessage."""

    def decode(self, data: bytes) -> DecodedMessage | None:
        """Decode raw bytes.

        Raises:
            DecodeFailure: data is not a valid container
        """
        ...
