"""Load and validate candidate spreadsheets (.csv or .xlsx).

Rows arrive as loosely typed dicts (one per spreadsheet line).  This
module checks columns, numeric parsing, and value ranges, and only then
builds :class:`CandidateRecord` objects for the scoring engine.  Row
numbers in error messages are spreadsheet rows: the header is row 1, so
the first candidate is row 2.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

from hr_ranker.scoring.models import CandidateRecord
from hr_ranker.spreadsheet import UnsupportedFormatError, read_rows, write_rows

logger = logging.getLogger(__name__)

# Canonical header -> accepted aliases (the original template used
# Indonesian column names).
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "Name": ("Name", "Nama"),
    "Experience": ("Experience", "Pengalaman"),
    "Education": ("Education", "Pendidikan"),
    "Interview": ("Interview", "Wawancara"),
    "Age": ("Age", "Usia"),
}

REQUIRED_COLUMNS: tuple[str, ...] = tuple(COLUMN_ALIASES)

TEMPLATE_ROWS: list[dict[str, Any]] = [
    {"Name": "John Doe", "Experience": 5, "Education": 4, "Interview": 85, "Age": 30},
    {"Name": "Jane Smith", "Experience": 3, "Education": 5, "Interview": 92, "Age": 28},
]

TEMPLATE_WIDTHS: list[int] = [20, 12, 12, 12, 10]


class CandidateValidationError(ValueError):
    """One or more spreadsheet rows failed validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _canonicalize(row: Mapping[str, Any]) -> dict[str, Any]:
    """Map aliased/whitespace-padded headers onto canonical column names."""
    stripped = {str(k).strip(): v for k, v in row.items() if k is not None}
    result: dict[str, Any] = {}
    for canonical, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in stripped:
                result[canonical] = stripped[alias]
                break
    return result


def _to_number(value: Any) -> float | None:
    """Parse a cell into a finite float, or ``None`` if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _validate_row(row: Mapping[str, Any], prefix: str) -> tuple[CandidateRecord | None, list[str]]:
    """Validate one canonicalized row.  Returns the record and any errors."""
    missing = [col for col in REQUIRED_COLUMNS if col not in row]
    if missing:
        return None, [f"{prefix}: Missing columns: {', '.join(missing)}"]

    errors: list[str] = []
    name = str(row["Name"] if row["Name"] is not None else "").strip()
    if not name:
        errors.append(f"{prefix}: Name is required")

    experience = _to_number(row["Experience"])
    education = _to_number(row["Education"])
    interview = _to_number(row["Interview"])
    age = _to_number(row["Age"])

    if experience is None or experience < 0:
        errors.append(f"{prefix}: Experience must be 0 or more years")
    if education is None or not 1 <= education <= 5:
        errors.append(f"{prefix}: Education must be between 1-5")
    if interview is None or not 0 <= interview <= 100:
        errors.append(f"{prefix}: Interview score must be between 0-100")
    if age is None or not 18 <= age <= 65:
        errors.append(f"{prefix}: Age must be between 18-65")

    if errors:
        return None, errors

    return CandidateRecord(
        candidate_id=None,
        name=name,
        experience=experience,
        education=education,
        interview=interview,
        age=age,
    ), []


def validate_rows(rows: Iterable[Mapping[str, Any]]) -> list[CandidateRecord]:
    """Validate parsed spreadsheet rows and build candidate records.

    Every row is checked before anything is returned, so the caller gets
    the full list of problems in one go.

    Args:
        rows: Dicts keyed by column header.

    Returns:
        One :class:`CandidateRecord` per row, in input order.

    Raises:
        CandidateValidationError: The sheet is empty or any row is invalid.
    """
    records: list[CandidateRecord] = []
    errors: list[str] = []

    for index, raw in enumerate(rows):
        record, row_errors = _validate_row(_canonicalize(raw), f"Row {index + 2}")
        if row_errors:
            errors.extend(row_errors)
        else:
            records.append(record)

    if not records and not errors:
        raise CandidateValidationError(["Worksheet is empty"])
    if errors:
        logger.warning("Candidate validation failed with %d errors", len(errors))
        raise CandidateValidationError(errors)

    logger.info("Validated %d candidate rows", len(records))
    return records


def validate_candidate(values: Mapping[str, Any], candidate_id: int | None = None) -> CandidateRecord:
    """Validate a single candidate given as ``{column: value}``.

    Used for edits outside a spreadsheet upload; messages are prefixed
    with ``Candidate`` instead of a row number.
    """
    prefix = "Candidate" if candidate_id is None else f"Candidate #{candidate_id}"
    record, errors = _validate_row(_canonicalize(values), prefix)
    if errors:
        raise CandidateValidationError(errors)
    return CandidateRecord(
        candidate_id=candidate_id,
        name=record.name,
        experience=record.experience,
        education=record.education,
        interview=record.interview,
        age=record.age,
    )


def load_candidates(path: str) -> list[CandidateRecord]:
    """Read a ``.csv`` or ``.xlsx`` candidate file and validate every row.

    Raises:
        CandidateValidationError: The file type is unsupported, or the
            sheet is empty, or any row is invalid.
        OSError: The file cannot be read.
    """
    try:
        rows = read_rows(path)
    except UnsupportedFormatError as exc:
        raise CandidateValidationError([str(exc)]) from exc
    return validate_rows(rows)


def write_template(path: str) -> None:
    """Write a ``.csv`` or ``.xlsx`` candidate template with two sample rows.

    Raises:
        UnsupportedFormatError: *path* has another suffix.
    """
    write_rows(
        path,
        REQUIRED_COLUMNS,
        TEMPLATE_ROWS,
        sheet_title="Candidates",
        widths=TEMPLATE_WIDTHS,
    )
    logger.info("Wrote candidate template to %s", path)
