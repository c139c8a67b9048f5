"""Sequential batch processing with progress reporting."""

import logging
from collections.abc import Callable, Sequence

from ..models import NormalizedMessage
from .resolve import MessageResolver, SourceFile

logger = logging.getLogger(__name__)

# Called with (index, total) before each file, index starting at 1
ProgressCallback = Callable[[int, int], None]


class BatchController:
    """Drive the resolution pipeline over many files, one at a time.

    Files are processed strictly in order so progress is monotonic and only
    one decoded container is held in memory at once. A failing file yields a
    failed record and never stops the batch.
    """

    def __init__(
        self,
        resolver: MessageResolver | None = None,
        on_progress: ProgressCallback | None = None,
    ):
        self.resolver = resolver or MessageResolver()
        self.on_progress = on_progress

    def run(self, sources: Sequence[SourceFile]) -> list[NormalizedMessage]:
        """Process all sources and return one record per source, in input order."""
        total = len(sources)
        logger.info("Processing %d message files", total)

        records: list[NormalizedMessage] = []
        for index, source in enumerate(sources, 1):
            if self.on_progress:
                self.on_progress(index, total)
            records.append(self.resolver.resolve(source))

        failed = sum(1 for record in records if record.failed)
        logger.info("Processed %d message files (%d failed)", total, failed)
        return records


def process_batch(
    sources: Sequence[SourceFile],
    resolver: MessageResolver | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[NormalizedMessage]:
    """Convenience wrapper around BatchController.run()."""
    return BatchController(resolver, on_progress).run(sources)
