"""Normalized message records produced by the resolution pipeline."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def new_message_id() -> str:
    """Mint a fresh, globally unique record id."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class RecipientIdentity:
    """Canonical recipient: cleaned display name and a valid address (or "")."""

    name: str
    email: str = ""

    def __str__(self) -> str:
        if self.email:
            return f"{self.name} <{self.email}>"
        return self.name

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email}


@dataclass(frozen=True)
class Attachment:
    """Extracted attachment payload."""

    file_name: str
    content: bytes = field(repr=False)
    mime_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (payload omitted)."""
        return {"file_name": self.file_name, "size": self.size, "mime_type": self.mime_type}


@dataclass(frozen=True)
class NormalizedMessage:
    """Resolved, analysis-ready representation of one message file.

    Records are immutable once created. A failed record keeps its id, source
    file name and error message; every other field holds a placeholder or an
    empty value.
    """

    id: str
    source_file_name: str
    subject: str
    sender_name: str
    sender_email: str
    sent_date: datetime
    sender_phone: str = ""
    recipients: tuple[RecipientIdentity, ...] = ()
    body: str = ""
    attachments: tuple[Attachment, ...] = ()
    failed: bool = False
    error_message: str | None = None

    FAILED_SENDER_NAME = "Error"
    FAILED_SUBJECT = "Failed to parse"

    @classmethod
    def failure(
        cls, source_file_name: str, error_message: str, sent_date: datetime
    ) -> "NormalizedMessage":
        """Build an error-flagged record for a file that could not be resolved."""
        return cls(
            id=new_message_id(),
            source_file_name=source_file_name,
            subject=cls.FAILED_SUBJECT,
            sender_name=cls.FAILED_SENDER_NAME,
            sender_email="",
            sent_date=sent_date,
            failed=True,
            error_message=error_message,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "source_file_name": self.source_file_name,
            "subject": self.subject,
            "sender_name": self.sender_name,
            "sender_email": self.sender_email,
            "sender_phone": self.sender_phone,
            "recipients": [r.to_dict() for r in self.recipients],
            "body": self.body,
            "sent_date": self.sent_date.isoformat(),
            "attachments": [a.to_dict() for a in self.attachments],
            "failed": self.failed,
            "error_message": self.error_message,
        }
