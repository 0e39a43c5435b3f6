"""Excel export of resolved Drive listings."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from drivelisting.domain.model import Entry

log = getLogger(__name__)

SHEET_TITLE: Final[str] = "Files"

# (header, width)
COLUMNS: Final[tuple[tuple[str, int], ...]] = (
    ("Name", 30),
    ("ID", 40),
    ("MIME Type", 50),
    ("View URL", 60),
    ("Download URL", 60),
)


def entry_row(entry: Entry) -> tuple[str, str, str, str, str]:
    return (entry.name, entry.id, entry.media_type, entry.view_url, entry.download_url)


def build_workbook(entries: Sequence[Entry]) -> Workbook:
    if not entries:
        raise ValueError("At least one entry is required for an export")

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE

    header_font = Font(bold=True)
    for col_idx, (header, width) in enumerate(COLUMNS, start=1):
        cell = sheet.cell(row=1, column=col_idx, value=header)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")
        sheet.column_dimensions[get_column_letter(col_idx)].width = width

    for entry in entries:
        sheet.append(entry_row(entry))

    sheet.freeze_panes = "A2"
    return workbook


def export_entries_xlsx(entries: Sequence[Entry], output_path: Path) -> Path:
    """Write ``entries`` to ``output_path`` as an xlsx workbook and return the path."""

    workbook = build_workbook(entries)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    log.info("Exported %d entries to %s", len(entries), output_path)
    return output_path
