"""Message resolution pipeline and batch processing."""

from .batch import BatchController, process_batch
from .resolve import MessageResolver, SourceFile, resolve_message
from .store import MessageStore

__all__ = [
    "BatchController",
    "MessageResolver",
    "MessageStore",
    "SourceFile",
    "process_batch",
    "resolve_message",
]
