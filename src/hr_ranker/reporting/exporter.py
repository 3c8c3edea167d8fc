"""Export the stored ranking to a CSV file or an Excel workbook."""

import logging
import sqlite3

from hr_ranker.db.manager import get_all_candidates
from hr_ranker.reporting.stats import status_label
from hr_ranker.scoring.errors import EmptyInputError
from hr_ranker.spreadsheet import CSV, detect_format, write_rows

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Rank",
    "Name",
    "Experience (years)",
    "Education (1-5)",
    "Interview (0-100)",
    "Age",
    "Final Score",
    "Status",
]

EXPORT_WIDTHS = [8, 20, 15, 15, 15, 8, 12, 15]


def _format_number(value: float) -> str:
    """Drop a trailing ``.0`` so whole numbers read as integers."""
    return f"{value:g}"


def _as_cell(value: float) -> float | int:
    # Whole numbers stay integers in the workbook.
    return int(value) if float(value).is_integer() else value


def export_results(conn: sqlite3.Connection, path: str) -> int:
    """Write all candidates, best first, to *path*.

    The format follows the suffix: ``.csv`` gets formatted text, ``.xlsx``
    keeps numeric cells so the sheet can be sorted and summed.

    Returns:
        The number of candidate rows written.

    Raises:
        EmptyInputError: There are no candidates to export.
        UnsupportedFormatError: *path* is neither .csv nor .xlsx.
    """
    as_text = detect_format(path) == CSV
    rows = get_all_candidates(conn)
    if not rows:
        raise EmptyInputError("No candidates to export")

    number = _format_number if as_text else _as_cell
    output = []
    for index, row in enumerate(rows, start=1):
        final_score = row["final_score"]
        if final_score is None:
            shown_score = ""
        elif as_text:
            shown_score = f"{final_score:.3f}"
        else:
            shown_score = round(final_score, 3)
        output.append({
            "Rank": index,
            "Name": row["name"],
            "Experience (years)": number(row["experience"]),
            "Education (1-5)": number(row["education"]),
            "Interview (0-100)": number(row["interview"]),
            "Age": number(row["age"]),
            "Final Score": shown_score,
            "Status": status_label(final_score),
        })

    write_rows(
        path,
        EXPORT_COLUMNS,
        output,
        sheet_title="Results",
        widths=EXPORT_WIDTHS,
    )
    logger.info("Exported %d candidates to %s", len(rows), path)
    return len(rows)
