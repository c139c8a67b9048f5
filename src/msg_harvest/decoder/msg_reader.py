"""Outlook .msg decoder backed by the extract-msg library."""

import logging
from datetime import datetime
from typing import Any

import extract_msg
from extract_msg.enums import ErrorBehavior

from ..errors import AttachmentExtractionFailure, DecodeFailure
from .message import ATTACH_BY_VALUE, DecodedMessage, RawAttachment, RawRecipient

logger = logging.getLogger(__name__)

# MAPI string property streams
SENDER_SMTP_ADDRESS = "__substg1.0_5D01"
SENT_REPRESENTING_SMTP_ADDRESS = "__substg1.0_5D02"
TRANSPORT_MESSAGE_HEADERS = "__substg1.0_007D"
SENDER_EMAIL_ADDRESS = "__substg1.0_0C1F"
SENT_REPRESENTING_EMAIL_ADDRESS = "__substg1.0_0065"
SENDER_NAME = "__substg1.0_0C1A"
SENT_REPRESENTING_NAME = "__substg1.0_0042"
RECIPIENT_EMAIL_ADDRESS = "__substg1.0_3003"
RECIPIENT_SMTP_ADDRESS = "__substg1.0_39FE"

# Attachment properties
ATTACH_DATA_STREAM = "__substg1.0_37010102"
ATTACH_METHOD_PROP = "37050003"

# Unsupported (by-reference, OLE link) and broken attachments load as
# placeholders with no payload instead of failing the whole message
OPEN_BEHAVIOR = (
    ErrorBehavior.ATTACH_NOT_IMPLEMENTED
    | ErrorBehavior.ATTACH_BROKEN
    | ErrorBehavior.STANDARDS_VIOLATION
)


def _text(value: Any) -> str | None:
    """Normalize a property value to a non-empty string or None."""
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    value = str(value)
    return value if value.strip() else None


def _datetime(value: Any) -> datetime | None:
    return value if isinstance(value, datetime) else None


class MsgFileDecoder:
    """Decode Outlook .msg bytes into a DecodedMessage."""

    def decode(self, data: bytes) -> DecodedMessage:
        """Decode a .msg byte buffer.

        Args:
            data: Raw bytes of the .msg file

        Returns:
            DecodedMessage with every property the container provides

        Raises:
            DecodeFailure: extract-msg could not open or read the container
        """
        if not data:
            raise DecodeFailure("Could not parse file data.")

        try:
            msg = extract_msg.Message(data, errorBehavior=OPEN_BEHAVIOR)
        except Exception as e:
            raise DecodeFailure(f"Failed to parse MSG: {e}") from e

        try:
            return self._read_message(msg)
        except Exception as e:
            raise DecodeFailure(f"Failed to read MSG properties: {e}") from e
        finally:
            # extract-msg keeps the OLE file open
            msg.close()

    def _read_message(self, msg: Any) -> DecodedMessage:
        return DecodedMessage(
            subject=_text(msg.subject),
            sender_smtp_address=_text(msg.getStringStream(SENDER_SMTP_ADDRESS)),
            sent_representing_smtp_address=_text(
                msg.getStringStream(SENT_REPRESENTING_SMTP_ADDRESS)
            ),
            transport_headers=_text(msg.getStringStream(TRANSPORT_MESSAGE_HEADERS)),
            sender_email=_text(msg.getStringStream(SENDER_EMAIL_ADDRESS)),
            sent_representing_email=_text(msg.getStringStream(SENT_REPRESENTING_EMAIL_ADDRESS)),
            sender_name=_text(msg.getStringStream(SENDER_NAME)),
            sent_representing_name=_text(msg.getStringStream(SENT_REPRESENTING_NAME)),
            body=_text(msg.body),
            html_body=_text(msg.htmlBody),
            client_submit_time=_datetime(getattr(msg, "date", None)),
            delivery_time=_datetime(getattr(msg, "receivedTime", None)),
            recipients=tuple(self._read_recipient(r) for r in msg.recipients),
            attachments=tuple(
                self._read_attachment(att, index)
                for index, att in enumerate(msg.attachments, 1)
            ),
        )

    @staticmethod
    def _read_recipient(recipient: Any) -> RawRecipient:
        return RawRecipient(
            name=_text(recipient.name),
            email=_text(recipient.getStringStream(RECIPIENT_EMAIL_ADDRESS)),
            smtp_address=_text(recipient.getStringStream(RECIPIENT_SMTP_ADDRESS)),
        )

    @staticmethod
    def _read_attachment(att: Any, index: int) -> RawAttachment:
        method_prop = att.props.get(ATTACH_METHOD_PROP)
        method = method_prop.value if method_prop is not None else None
        data_id = ATTACH_DATA_STREAM if att.exists(ATTACH_DATA_STREAM) else None
        short_name = _text(att.shortFilename)
        long_name = _text(att.longFilename)
        label = short_name or long_name or f"#{index}"

        # Payloads are read now because the container is closed after decode;
        # a failure is deferred to the accessor so it only affects this attachment.
        payload: bytes | None = None
        error: Exception | None = None
        if method == ATTACH_BY_VALUE or data_id:
            try:
                payload = att.data
            except Exception as e:
                error = e
            if payload is not None and not isinstance(payload, bytes):
                error = TypeError(f"payload is {type(payload).__name__}, not bytes")
                payload = None

        def reader() -> bytes | None:
            if error is not None:
                raise AttachmentExtractionFailure(
                    f"Failed to extract attachment {label}: {error}", attachment_name=label
                ) from error
            return payload

        return RawAttachment(
            short_name=short_name,
            long_name=long_name,
            method=method,
            data_id=data_id,
            mime_type=_text(att.mimetype),
            reader=reader,
        )
