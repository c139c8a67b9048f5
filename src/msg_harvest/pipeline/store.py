"""In-memory session collection of normalized records."""

from collections.abc import Iterable, Iterator

from ..models import NormalizedMessage


class MessageStore:
    """Append-only, insertion-ordered working set for one session."""

    def __init__(self, records: Iterable[NormalizedMessage] = ()):
        self._records: list[NormalizedMessage] = []
        self._by_id: dict[str, NormalizedMessage] = {}
        self.extend(records)

    def append(self, record: NormalizedMessage) -> None:
        if record.id in self._by_id:
            raise ValueError(f"Duplicate message id: {record.id}")
        self._records.append(record)
        self._by_id[record.id] = record

    def extend(self, records: Iterable[NormalizedMessage]) -> None:
        for record in records:
            self.append(record)

    def get(self, message_id: str) -> NormalizedMessage | None:
        return self._by_id.get(message_id)

    @property
    def failed(self) -> list[NormalizedMessage]:
        return [r for r in self._records if r.failed]

    @property
    def attachment_count(self) -> int:
        return sum(len(r.attachments) for r in self._records)

    @property
    def has_attachments(self) -> bool:
        return any(r.attachments for r in self._records)

    def clear(self) -> None:
        """Drop the working set."""
        self._records.clear()
        self._by_id.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[NormalizedMessage]:
        return iter(self._records)
