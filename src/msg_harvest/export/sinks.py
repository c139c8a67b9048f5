"""Output containers for exports: an .xlsx workbook and a .zip archive."""

import io
import zipfile
from collections.abc import Sequence
from typing import Protocol

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter


class TableSink(Protocol):
    def append_row(self, values: Sequence[str]) -> None: ...

    def to_bytes(self) -> bytes: ...


class ArchiveSink(Protocol):
    def add(self, name: str, data: bytes) -> None: ...

    def to_bytes(self) -> bytes: ...


class WorkbookSink:
    """Single-sheet .xlsx writer; the first appended row is the header."""

    SHEET_TITLE = "Emails"
    COLUMN_WIDTHS = (20, 25, 15, 30, 20, 30, 50)

    def __init__(
        self, sheet_title: str = SHEET_TITLE, column_widths: Sequence[int] = COLUMN_WIDTHS
    ):
        self.workbook = openpyxl.Workbook()
        self.sheet = self.workbook.active
        self.sheet.title = sheet_title
        self.column_widths = tuple(column_widths)

    def append_row(self, values: Sequence[str]) -> None:
        # Control characters are not allowed in the sheet XML
        self.sheet.append([ILLEGAL_CHARACTERS_RE.sub("", str(v)) for v in values])

    def to_bytes(self) -> bytes:
        for cell in self.sheet[1]:
            cell.font = Font(bold=True)
        for col_idx, width in enumerate(self.column_widths, start=1):
            self.sheet.column_dimensions[get_column_letter(col_idx)].width = width
        self.sheet.freeze_panes = "A2"

        buf = io.BytesIO()
        self.workbook.save(buf)
        return buf.getvalue()


class ZipArchiveSink:
    """Flat .zip archive built in memory."""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w", compression=compression)

    def add(self, name: str, data: bytes) -> None:
        self._zip.writestr(name, data)

    def to_bytes(self) -> bytes:
        self._zip.close()
        return self._buffer.getvalue()
