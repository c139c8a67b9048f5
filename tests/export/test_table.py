"""Tests for the spreadsheet export."""

import io
from dataclasses import replace
from datetime import datetime

import openpyxl
import pytest

from msg_harvest.config import DEFAULT_CONFIG
from msg_harvest.errors import ExportPrecondition
from msg_harvest.export import TABLE_HEADER, build_rows, export_table
from msg_harvest.export.table import format_date, format_recipients, truncate_cell
from msg_harvest.models import NormalizedMessage, RecipientIdentity

SENT = datetime(2024, 2, 28, 17, 45, 0)


def make_record(**overrides) -> NormalizedMessage:
    values = dict(
        id="rec-1",
        source_file_name="numbers.msg",
        subject="Quarterly numbers",
        sender_name="Jane Doe",
        sender_email="jane@example.com",
        sender_phone="0412 345 678",
        sent_date=SENT,
        recipients=(
            RecipientIdentity("Bob", "bob@example.com"),
            RecipientIdentity("Carol"),
        ),
        body="See attached.",
    )
    values.update(overrides)
    return NormalizedMessage(**values)


class ListSink:
    def __init__(self):
        self.rows = []

    def append_row(self, values):
        self.rows.append(list(values))

    def to_bytes(self):
        return b"rows:%d" % len(self.rows)


class TestTruncateCell:
    """Test suite for the cell length ceiling."""

    def test_long_body_truncated(self):
        result = truncate_cell("a" * 40000)
        assert result == "a" * 32000 + "...[TRUNCATED]"
        assert len(result) == 32014

    def test_body_at_limit_unchanged(self):
        text = "b" * 32000
        assert truncate_cell(text) == text

    def test_custom_limit(self):
        config = replace(DEFAULT_CONFIG, max_cell_chars=5, truncation_marker="~")
        assert truncate_cell("abcdefgh", config) == "abcde~"


class TestRows:
    """Test suite for row construction."""

    def test_recipients_use_address_then_name(self):
        recipients = (RecipientIdentity("Bob", "bob@example.com"), RecipientIdentity("Carol"))
        assert format_recipients(recipients) == "bob@example.com; Carol"

    def test_no_recipients(self):
        assert format_recipients(()) == ""

    def test_row_matches_header_columns(self):
        (row,) = build_rows([make_record()])

        assert len(row) == len(TABLE_HEADER)
        assert row == [
            "Jane Doe",
            "jane@example.com",
            "0412 345 678",
            "bob@example.com; Carol",
            SENT.strftime("%c"),
            "Quarterly numbers",
            "See attached.",
        ]

    def test_rows_follow_record_order(self):
        records = [make_record(id=f"r{i}", subject=f"S{i}") for i in range(3)]
        assert [row[5] for row in build_rows(records)] == ["S0", "S1", "S2"]

    def test_failed_record_included(self):
        failed = NormalizedMessage.failure("bad.msg", "boom", SENT)
        (row,) = build_rows([failed])
        assert row[0] == "Error"
        assert row[5] == "Failed to parse"


class TestExportTable:
    """Test suite for table export assembly."""

    def test_empty_collection_rejected(self):
        with pytest.raises(ExportPrecondition) as exc_info:
            export_table([])
        assert exc_info.value.reason == ExportPrecondition.NO_RECORDS

    def test_header_written_first(self):
        sink = ListSink()
        result = export_table([make_record(), make_record(id="rec-2")], sink=sink)

        assert result == b"rows:3"
        assert sink.rows[0] == list(TABLE_HEADER)
        assert len(sink.rows) == 3

    def test_workbook_contents(self):
        record = make_record(body="Line one\x07 and a bell")
        data = export_table([record])

        workbook = openpyxl.load_workbook(io.BytesIO(data))
        sheet = workbook["Emails"]
        rows = list(sheet.iter_rows(values_only=True))

        assert rows[0] == TABLE_HEADER
        assert rows[1][0] == "Jane Doe"
        assert rows[1][4] == format_date(SENT)
        assert rows[1][6] == "Line one and a bell"
        assert sheet.freeze_panes == "A2"
        assert sheet.column_dimensions["G"].width == 50
        assert sheet["A1"].font.bold
