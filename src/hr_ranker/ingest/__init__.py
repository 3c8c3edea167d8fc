"""Ingest sub-package: turn spreadsheet rows into candidate records."""

from hr_ranker.ingest.loader import (
    CandidateValidationError,
    load_candidates,
    validate_candidate,
    validate_rows,
    write_template,
)

__all__ = [
    "CandidateValidationError",
    "load_candidates",
    "validate_candidate",
    "validate_rows",
    "write_template",
]
