"""Flat attachment bundle with deterministic, collision-free names."""

import logging
import re
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..config import DEFAULT_CONFIG, HarvestConfig
from ..errors import ExportPrecondition
from ..models import NormalizedMessage

logger = logging.getLogger(__name__)

SUBJECT_PREFIX_LENGTH = 5
DEFAULT_SUBJECT_PREFIX = "NoSub"
NON_ALPHANUMERIC_PATTERN = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def subject_prefix(subject: str | None) -> str:
    """First five letters/digits of the subject, or "NoSub"."""
    cleaned = NON_ALPHANUMERIC_PATTERN.sub("", subject or "")
    return cleaned[:SUBJECT_PREFIX_LENGTH] or DEFAULT_SUBJECT_PREFIX


def insert_before_extension(name: str, marker: str) -> str:
    """Insert marker before the last dot, or append it when there is no dot.

    Example:
        >>> insert_before_extension("report.pdf", "_(1)")
        'report_(1).pdf'
    """
    dot = name.rfind(".")
    if dot == -1:
        return f"{name}{marker}"
    return f"{name[:dot]}{marker}{name[dot:]}"


class BundleNamer:
    """Hands out unique names within one flat bundle namespace."""

    def __init__(self, retry_cap: int | None = None):
        self.retry_cap = DEFAULT_CONFIG.collision_retry_cap if retry_cap is None else retry_cap
        self.used: set[str] = set()

    def claim(self, candidate: str) -> str:
        """Reserve candidate, or the first free "_(n)" variant of it."""
        name = candidate
        counter = 0
        while name in self.used:
            counter += 1
            if counter > self.retry_cap:
                name = self._random_variant(candidate)
                break
            name = insert_before_extension(candidate, f"_({counter})")

        if name != candidate:
            logger.debug("Bundle name collision: %s -> %s", candidate, name)
        self.used.add(name)
        return name

    def _random_variant(self, candidate: str) -> str:
        name = candidate
        while name in self.used:
            name = insert_before_extension(candidate, f"_{uuid.uuid4().hex[:8]}")
        return name


@dataclass(frozen=True)
class BundleEntry:
    """One file in the attachment bundle."""

    name: str
    content: bytes = field(repr=False)
    message_id: str = ""


def plan_bundle(
    records: Iterable[NormalizedMessage], config: HarvestConfig | None = None
) -> list[BundleEntry]:
    """Name every attachment across all records for a single flat bundle.

    Raises:
        ExportPrecondition: no records, or no attachments in any record
    """
    config = config or DEFAULT_CONFIG
    records = list(records)
    if not records:
        raise ExportPrecondition(ExportPrecondition.NO_RECORDS)

    namer = BundleNamer(config.collision_retry_cap)
    entries: list[BundleEntry] = []

    for record in records:
        prefix = subject_prefix(record.subject)
        for attachment in record.attachments:
            name = namer.claim(f"{prefix}-{attachment.file_name}")
            entries.append(BundleEntry(name=name, content=attachment.content, message_id=record.id))

    if not entries:
        raise ExportPrecondition(ExportPrecondition.NO_ATTACHMENTS)

    return entries
