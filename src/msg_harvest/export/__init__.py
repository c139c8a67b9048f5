"""Spreadsheet and attachment-bundle exports."""

from .assembler import export_bundle, export_table
from .bundle import BundleEntry, BundleNamer, plan_bundle, subject_prefix
from .sinks import ArchiveSink, TableSink, WorkbookSink, ZipArchiveSink
from .table import TABLE_HEADER, build_rows

__all__ = [
    "TABLE_HEADER",
    "ArchiveSink",
    "BundleEntry",
    "BundleNamer",
    "TableSink",
    "WorkbookSink",
    "ZipArchiveSink",
    "build_rows",
    "export_bundle",
    "export_table",
    "plan_bundle",
    "subject_prefix",
]
