"""Shared pytest fixtures for the hr-ranker test suite.

Provides:
    tmp_db            -- in-memory SQLite connection with full schema applied
    sample_candidates -- list of 5 realistic CandidateRecords
    seeded_db         -- tmp_db with sample_candidates stored and scored
"""

import pathlib
import sqlite3

import pytest

from hr_ranker.scoring.models import CandidateRecord


# ---------------------------------------------------------------------------
# tmp_db fixture
# ---------------------------------------------------------------------------

@pytest.fixture()
def tmp_db():
    """Create an in-memory SQLite connection with the full schema applied.

    Yields the connection and closes it after the test.
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row

    schema_path = (
        pathlib.Path(__file__).resolve().parent.parent
        / "src" / "hr_ranker" / "db" / "schema.sql"
    )
    schema_sql = schema_path.read_text(encoding="utf-8")
    conn.executescript(schema_sql)

    yield conn
    conn.close()


# ---------------------------------------------------------------------------
# sample_candidates fixture
# ---------------------------------------------------------------------------

def make_candidate(
    name: str,
    experience: float = 3,
    education: float = 3,
    interview: float = 75,
    age: float = 30,
    candidate_id: int | None = None,
) -> CandidateRecord:
    """Build a CandidateRecord with sensible defaults."""
    return CandidateRecord(
        candidate_id=candidate_id,
        name=name,
        experience=experience,
        education=education,
        interview=interview,
        age=age,
    )


@pytest.fixture()
def sample_candidates() -> list[CandidateRecord]:
    """Return 5 candidates with variance on every criterion."""
    return [
        make_candidate("Andi Wijaya", experience=5, education=4, interview=85, age=30, candidate_id=1),
        make_candidate("Budi Santoso", experience=3, education=5, interview=92, age=28, candidate_id=2),
        make_candidate("Citra Lestari", experience=8, education=3, interview=70, age=41, candidate_id=3),
        make_candidate("Dewi Anggraini", experience=1, education=2, interview=60, age=23, candidate_id=4),
        make_candidate("Eko Prasetyo", experience=10, education=5, interview=95, age=35, candidate_id=5),
    ]


# ---------------------------------------------------------------------------
# seeded_db fixture
# ---------------------------------------------------------------------------

@pytest.fixture()
def seeded_db(tmp_db, sample_candidates):
    """tmp_db with the sample candidates imported and scored."""
    from hr_ranker.service import import_candidates

    import_candidates(tmp_db, sample_candidates)
    return tmp_db
