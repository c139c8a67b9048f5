"""Attachment collection from decoded messages."""

import logging
from collections.abc import Iterable

from ..decoder.message import RawAttachment
from ..models import Attachment

logger = logging.getLogger(__name__)


def collect_attachments(raws: Iterable[RawAttachment]) -> tuple[Attachment, ...]:
    """Extract attachment payloads, skipping any that cannot be read.

    Only descriptors with embedded data (or a payload stream) are considered;
    reference attachments and OLE links have nothing to retrieve.

    Args:
        raws: Attachment descriptors in message order

    Returns:
        Extracted attachments in message order
    """
    attachments: list[Attachment] = []

    for index, raw in enumerate(raws, 1):
        if not raw.has_payload:
            continue

        try:
            content = raw.read_content()
        except Exception as e:
            logger.warning(
                "Failed to extract attachment %s: %s",
                raw.short_name or raw.long_name or f"#{index}",
                e,
            )
            continue

        if not content:
            continue

        file_name = raw.short_name or raw.long_name or f"attachment_{len(attachments) + 1}"
        attachments.append(
            Attachment(file_name=file_name, content=bytes(content), mime_type=raw.mime_type)
        )

    return tuple(attachments)
