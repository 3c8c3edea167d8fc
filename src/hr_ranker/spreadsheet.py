"""Read and write the spreadsheet files candidates travel in.

Two formats are supported, picked by file suffix: ``.csv`` (UTF-8,
header row) and ``.xlsx`` workbooks (first worksheet, header row).
"""

from __future__ import annotations

import csv
import logging
import pathlib
from typing import Any, Iterable, Mapping, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.utils import get_column_letter

logger = logging.getLogger(__name__)

CSV = "csv"
XLSX = "xlsx"

SUPPORTED_SUFFIXES: dict[str, str] = {".csv": CSV, ".xlsx": XLSX}


class UnsupportedFormatError(ValueError):
    """The file suffix is not one of :data:`SUPPORTED_SUFFIXES`."""


def detect_format(path: str) -> str:
    """Return ``"csv"`` or ``"xlsx"`` for *path*, judged by its suffix."""
    suffix = pathlib.Path(path).suffix.lower()
    try:
        return SUPPORTED_SUFFIXES[suffix]
    except KeyError:
        raise UnsupportedFormatError(
            f"Unsupported file type {suffix or '(none)'!r}: "
            "only .csv and .xlsx files are supported"
        ) from None


def read_rows(path: str) -> list[dict[str, Any]]:
    """Read every data row of *path* as a ``{header: value}`` dict.

    Raises:
        UnsupportedFormatError: The suffix is neither .csv nor .xlsx.
        OSError: The file cannot be read.
    """
    if detect_format(path) == CSV:
        # utf-8-sig strips the BOM spreadsheet programs like to add.
        with open(path, newline="", encoding="utf-8-sig") as csvfile:
            rows = list(csv.DictReader(csvfile))
    else:
        rows = _read_xlsx_rows(path)
    logger.info("Read %d rows from %s", len(rows), path)
    return rows


def _read_xlsx_rows(path: str) -> list[dict[str, Any]]:
    """Rows of the first worksheet; blank lines are skipped."""
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        if not workbook.worksheets:
            return []
        lines = workbook.worksheets[0].iter_rows(values_only=True)
        header = next(lines, None)
        if header is None:
            return []
        keys = [str(cell).strip() if cell is not None else None for cell in header]
        rows = []
        for line in lines:
            if all(cell is None or str(cell).strip() == "" for cell in line):
                continue
            rows.append({
                key: value for key, value in zip(keys, line) if key is not None
            })
        return rows
    finally:
        workbook.close()


def write_rows(
    path: str,
    columns: Sequence[str],
    rows: Iterable[Mapping[str, Any]],
    sheet_title: str = "Sheet1",
    widths: Sequence[int] | None = None,
) -> None:
    """Write *rows* to *path* in the format its suffix names.

    Args:
        path: Destination ``.csv`` or ``.xlsx`` file.
        columns: Header names, in output order.
        rows: Dicts keyed by those headers.
        sheet_title: Worksheet name (xlsx only).
        widths: Column widths in characters (xlsx only).
    """
    if detect_format(path) == CSV:
        with open(path, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=list(columns))
            writer.writeheader()
            writer.writerows(rows)
        return

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title
    sheet.append(list(columns))
    for row in rows:
        sheet.append([row.get(column) for column in columns])
    for index, width in enumerate(widths or [], start=1):
        sheet.column_dimensions[get_column_letter(index)].width = width
    workbook.save(path)
