"""Message resolution: one source file in, one normalized record out."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from ..config import DEFAULT_CONFIG, HarvestConfig
from ..decoder.message import DecodedMessage, MessageDecoder
from ..decoder.msg_reader import MsgFileDecoder
from ..errors import DecodeFailure
from ..models import NormalizedMessage, new_message_id
from ..parsers.phone import SignaturePhoneExtractor
from .attachments import collect_attachments
from .precedence import first_match
from .resolver import resolve_recipients, resolve_sender_email, resolve_sender_name

logger = logging.getLogger(__name__)

NO_SUBJECT = "(No Subject)"


@dataclass(frozen=True)
class SourceFile:
    """An input file: its name, timestamp and a way to read its bytes."""

    name: str
    last_modified: datetime
    loader: Callable[[], bytes] = field(repr=False, compare=False)

    def read_bytes(self) -> bytes:
        return self.loader()

    @classmethod
    def from_path(cls, path: Path | str) -> "SourceFile":
        """Source backed by a file on disk (read lazily)."""
        path = Path(path)
        return cls(
            name=path.name,
            last_modified=datetime.fromtimestamp(path.stat().st_mtime),
            loader=path.read_bytes,
        )

    @classmethod
    def from_bytes(
        cls, name: str, data: bytes, last_modified: datetime | None = None
    ) -> "SourceFile":
        """Source backed by an in-memory buffer."""
        return cls(
            name=name,
            last_modified=last_modified or datetime.now(),
            loader=lambda: data,
        )


class MessageResolver:
    """Run the full resolution pipeline for one source file.

    ``resolve()`` never raises: decode failures and unexpected errors become
    a record with ``failed=True`` and the error message preserved.
    """

    def __init__(
        self,
        decoder: MessageDecoder | None = None,
        config: HarvestConfig | None = None,
    ):
        self.decoder = decoder or MsgFileDecoder()
        self.config = config or DEFAULT_CONFIG
        self.phone_extractor = SignaturePhoneExtractor(self.config)

    def resolve(self, source: SourceFile) -> NormalizedMessage:
        """Resolve one source file into a NormalizedMessage.

        Args:
            source: Input file (name, last-modified time, byte loader)

        Returns:
            Normalized record; check ``failed`` for the outcome
        """
        try:
            decoded = self.decoder.decode(source.read_bytes())
            if decoded is None:
                raise DecodeFailure("Could not parse file data.")
            return self.normalize(decoded, source)

        except Exception as e:
            logger.error("Error parsing %s: %s", source.name, e)
            return NormalizedMessage.failure(
                source_file_name=source.name,
                error_message=str(e) or "Unknown error",
                sent_date=source.last_modified,
            )

    def normalize(self, decoded: DecodedMessage, source: SourceFile) -> NormalizedMessage:
        """Build the record from an already decoded message."""
        body = first_match([lambda: decoded.body, lambda: decoded.html_body]) or ""
        sent_date = (
            first_match(
                [
                    lambda: decoded.client_submit_time,
                    lambda: decoded.delivery_time,
                ]
            )
            or source.last_modified
        )

        return NormalizedMessage(
            id=new_message_id(),
            source_file_name=source.name,
            subject=decoded.subject or NO_SUBJECT,
            sender_name=resolve_sender_name(decoded),
            sender_email=resolve_sender_email(decoded),
            sender_phone=self.phone_extractor.extract(body),
            recipients=resolve_recipients(decoded.recipients),
            body=body,
            sent_date=sent_date,
            attachments=collect_attachments(decoded.attachments),
        )


def resolve_message(
    source: SourceFile,
    decoder: MessageDecoder | None = None,
    config: HarvestConfig | None = None,
) -> NormalizedMessage:
    """Resolve a single source file with a one-off MessageResolver."""
    return MessageResolver(decoder, config).resolve(source)
