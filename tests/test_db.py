"""Tests for the hr_ranker.db package.

All tests use an in-memory SQLite database (`:memory:`) so they run
quickly, require no filesystem access, and leave no artefacts behind.
"""

import sqlite3

import pytest

from hr_ranker.db.manager import (
    delete_all_candidates,
    delete_candidate,
    get_all_candidates,
    get_candidate,
    get_candidate_count,
    get_candidate_records,
    get_connection,
    get_weights,
    init_db,
    insert_candidates,
    replace_candidates,
    save_scores,
    save_weights,
    update_candidate,
)
from hr_ranker.scoring import DEFAULT_WEIGHTS, ScoreResult, WeightVector


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def conn():
    """Yield an initialised in-memory database connection."""
    connection = get_connection(":memory:")
    init_db(connection)
    yield connection
    connection.close()


def _result(candidate_id: int, score: float, rank: int) -> ScoreResult:
    return ScoreResult(
        candidate_id=candidate_id,
        name=f"#{candidate_id}",
        score=score,
        rank=rank,
        distance_positive=0.0,
        distance_negative=0.0,
    )


# ---------------------------------------------------------------------------
# Schema creation tests
# ---------------------------------------------------------------------------

class TestSchemaCreation:

    def test_tables_exist(self, conn: sqlite3.Connection):
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        ).fetchall()
        names = {row["name"] for row in rows}
        assert {"candidates", "scoring_weights"} <= names

    def test_init_db_is_idempotent(self, conn: sqlite3.Connection):
        init_db(conn)
        assert get_candidate_count(conn) == 0


# ---------------------------------------------------------------------------
# Candidate CRUD
# ---------------------------------------------------------------------------

class TestCandidates:

    def test_insert_assigns_ids(self, conn, sample_candidates):
        ids = insert_candidates(conn, sample_candidates)
        assert ids == [1, 2, 3, 4, 5]
        assert get_candidate_count(conn) == 5

    def test_records_round_trip(self, conn, sample_candidates):
        insert_candidates(conn, sample_candidates)
        records = get_candidate_records(conn)
        assert [r.name for r in records] == [c.name for c in sample_candidates]
        assert records[0].values() == sample_candidates[0].values()
        assert records[0].candidate_id == 1

    def test_replace_restarts_ids(self, conn, sample_candidates):
        insert_candidates(conn, sample_candidates)
        stored = replace_candidates(conn, sample_candidates[:2])
        assert [r.candidate_id for r in stored] == [1, 2]
        assert get_candidate_count(conn) == 2

    def test_new_candidates_are_unscored(self, conn, sample_candidates):
        insert_candidates(conn, sample_candidates[:1])
        row = get_candidate(conn, 1)
        assert row["final_score"] is None
        assert row["rank"] is None

    def test_get_missing_candidate(self, conn):
        assert get_candidate(conn, 99) is None

    def test_update_candidate(self, conn, sample_candidates):
        insert_candidates(conn, sample_candidates[:1])
        row = update_candidate(conn, 1, interview=99, name="Andi W.")
        assert row["interview"] == 99
        assert row["name"] == "Andi W."

    def test_update_missing_candidate(self, conn):
        assert update_candidate(conn, 42, interview=50) is None

    def test_update_rejects_unknown_column(self, conn, sample_candidates):
        insert_candidates(conn, sample_candidates[:1])
        with pytest.raises(ValueError, match="salary"):
            update_candidate(conn, 1, salary=1000)

    def test_delete_candidate(self, conn, sample_candidates):
        insert_candidates(conn, sample_candidates)
        assert delete_candidate(conn, 3) is True
        assert delete_candidate(conn, 3) is False
        assert get_candidate_count(conn) == 4

    def test_delete_all_candidates(self, conn, sample_candidates):
        insert_candidates(conn, sample_candidates)
        delete_all_candidates(conn)
        assert get_candidate_count(conn) == 0
        assert insert_candidates(conn, sample_candidates[:1]) == [1]


# ---------------------------------------------------------------------------
# Scores and weights
# ---------------------------------------------------------------------------

class TestScores:

    def test_save_scores_and_order(self, conn, sample_candidates):
        insert_candidates(conn, sample_candidates[:3])
        updated = save_scores(conn, [_result(2, 0.9, 1), _result(3, 0.5, 2), _result(1, 0.1, 3)])
        assert updated == 3

        rows = get_all_candidates(conn)
        assert [row["id"] for row in rows] == [2, 3, 1]
        assert [row["rank"] for row in rows] == [1, 2, 3]
        assert rows[0]["scored_at"] is not None

    def test_unscored_candidates_sort_last(self, conn, sample_candidates):
        insert_candidates(conn, sample_candidates[:3])
        save_scores(conn, [_result(3, 0.2, 1)])
        rows = get_all_candidates(conn)
        assert [row["id"] for row in rows] == [3, 1, 2]

    def test_weights_default_when_unsaved(self, conn):
        assert get_weights(conn) == WeightVector.from_mapping(DEFAULT_WEIGHTS)

    def test_weights_round_trip(self, conn):
        save_weights(conn, WeightVector(10, 20, 30, 40))
        save_weights(conn, WeightVector(40, 30, 20, 10))
        assert get_weights(conn) == WeightVector(40, 30, 20, 10)
        count = conn.execute("SELECT COUNT(*) FROM scoring_weights").fetchone()[0]
        assert count == 1
