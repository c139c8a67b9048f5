"""Export assembly: records in, spreadsheet / archive bytes out."""

import logging
from collections.abc import Iterable

from ..config import HarvestConfig
from ..errors import ExportPrecondition
from ..models import NormalizedMessage
from .bundle import plan_bundle
from .sinks import ArchiveSink, TableSink, WorkbookSink, ZipArchiveSink
from .table import TABLE_HEADER, build_rows

logger = logging.getLogger(__name__)


def export_table(
    records: Iterable[NormalizedMessage],
    sink: TableSink | None = None,
    config: HarvestConfig | None = None,
) -> bytes:
    """Write all records as table rows and serialize the sink.

    Args:
        records: Normalized records, in display order
        sink: Table container (defaults to an .xlsx WorkbookSink)
        config: Truncation settings

    Returns:
        Serialized table bytes

    Raises:
        ExportPrecondition: records is empty
    """
    records = list(records)
    if not records:
        raise ExportPrecondition(ExportPrecondition.NO_RECORDS)

    sink = sink if sink is not None else WorkbookSink()
    sink.append_row(TABLE_HEADER)
    for row in build_rows(records, config):
        sink.append_row(row)

    logger.info("Exported %d messages to table", len(records))
    return sink.to_bytes()


def export_bundle(
    records: Iterable[NormalizedMessage],
    sink: ArchiveSink | None = None,
    config: HarvestConfig | None = None,
) -> bytes:
    """Write every attachment of every record into one flat archive.

    Raises:
        ExportPrecondition: no records, or no attachments at all
    """
    entries = plan_bundle(records, config)

    sink = sink if sink is not None else ZipArchiveSink()
    for entry in entries:
        sink.add(entry.name, entry.content)

    logger.info("Bundled %d attachments", len(entries))
    return sink.to_bytes()
