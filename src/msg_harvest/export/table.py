"""Row-oriented export table."""

from collections.abc import Iterable, Sequence
from datetime import datetime

from ..config import DEFAULT_CONFIG, HarvestConfig
from ..models import NormalizedMessage, RecipientIdentity

TABLE_HEADER = (
    "Sender Name",
    "Sender Email",
    "Sender Phone",
    "To",
    "Sent Date",
    "Subject",
    "Body",
)

RECIPIENT_SEPARATOR = "; "


def format_recipients(recipients: Sequence[RecipientIdentity]) -> str:
    """Join recipients into one cell, using the address and falling back to the name."""
    return RECIPIENT_SEPARATOR.join(r.email or r.name for r in recipients)


def format_date(value: datetime) -> str:
    """Render a timestamp in the current locale's date and time format."""
    return value.strftime("%c")


def truncate_cell(text: str, config: HarvestConfig | None = None) -> str:
    """Cut text to the configured cell ceiling and append the truncation marker."""
    config = config or DEFAULT_CONFIG
    if len(text) > config.max_cell_chars:
        return text[: config.max_cell_chars] + config.truncation_marker
    return text


def table_row(record: NormalizedMessage, config: HarvestConfig | None = None) -> list[str]:
    return [
        record.sender_name,
        record.sender_email,
        record.sender_phone or "",
        format_recipients(record.recipients),
        format_date(record.sent_date),
        record.subject,
        truncate_cell(record.body, config),
    ]


def build_rows(
    records: Iterable[NormalizedMessage], config: HarvestConfig | None = None
) -> list[list[str]]:
    """Build data rows (header excluded) in record order."""
    return [table_row(record, config) for record in records]
