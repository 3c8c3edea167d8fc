"""Database manager for the hr-ranker project.

Owns the authoritative candidate list and each candidate's persisted
``final_score``.  All functions take a connection object as their first
parameter and do not manage global state, so the same engine can be
driven from a file-backed or an in-memory database.
"""

import datetime
import logging
import pathlib
import sqlite3
from typing import Iterable, Sequence

from hr_ranker.scoring.criteria import DEFAULT_WEIGHTS
from hr_ranker.scoring.models import CandidateRecord, ScoreResult, WeightVector

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = frozenset(
    {"name", "experience", "education", "interview", "age", "final_score", "rank"}
)


def get_connection(db_path: str) -> sqlite3.Connection:
    """Open a SQLite connection with Row factory enabled.

    Args:
        db_path: Filesystem path to the SQLite database file, or ":memory:"
                 for an in-memory database.

    Returns:
        A ``sqlite3.Connection`` configured with ``sqlite3.Row`` as
        ``row_factory``.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Create all tables and indexes by executing ``schema.sql``.

    The SQL file is located relative to this module using ``__file__``
    so it works regardless of the current working directory.
    """
    schema_path = pathlib.Path(__file__).with_name("schema.sql")
    schema_sql = schema_path.read_text(encoding="utf-8")
    conn.executescript(schema_sql)
    logger.info("Database schema initialized from %s", schema_path)


def row_to_record(row: sqlite3.Row) -> CandidateRecord:
    """Convert a ``candidates`` row into a :class:`CandidateRecord`."""
    return CandidateRecord(
        candidate_id=row["id"],
        name=row["name"],
        experience=row["experience"],
        education=row["education"],
        interview=row["interview"],
        age=row["age"],
    )


def insert_candidates(
    conn: sqlite3.Connection,
    candidates: Iterable[CandidateRecord],
) -> list[int]:
    """Insert candidates and return their new ids in input order.

    Any ``candidate_id`` on the incoming records is ignored; the
    database assigns ids.
    """
    sql = """
        INSERT INTO candidates (name, experience, education, interview, age)
        VALUES (:name, :experience, :education, :interview, :age)
    """
    ids: list[int] = []
    for candidate in candidates:
        cursor = conn.execute(sql, {
            "name": candidate.name,
            "experience": candidate.experience,
            "education": candidate.education,
            "interview": candidate.interview,
            "age": candidate.age,
        })
        ids.append(cursor.lastrowid)
    conn.commit()
    logger.info("Inserted %d candidates", len(ids))
    return ids


def replace_candidates(
    conn: sqlite3.Connection,
    candidates: Iterable[CandidateRecord],
) -> list[CandidateRecord]:
    """Replace the whole candidate set (upload flow).

    Ids restart at 1.  Returns the stored records with their new ids.
    """
    delete_all_candidates(conn)
    insert_candidates(conn, candidates)
    return [
        row_to_record(row)
        for row in conn.execute("SELECT * FROM candidates ORDER BY id").fetchall()
    ]


def get_all_candidates(conn: sqlite3.Connection) -> list[sqlite3.Row]:
    """Return every candidate, best score first.

    Unscored candidates come last; ties fall back to insertion order.
    """
    sql = """
        SELECT *
        FROM candidates
        ORDER BY final_score IS NULL, final_score DESC, id
    """
    return conn.execute(sql).fetchall()


def get_candidate_records(conn: sqlite3.Connection) -> list[CandidateRecord]:
    """Return a snapshot of all candidates as records, in id order."""
    rows = conn.execute("SELECT * FROM candidates ORDER BY id").fetchall()
    return [row_to_record(row) for row in rows]


def get_candidate(conn: sqlite3.Connection, candidate_id: int) -> sqlite3.Row | None:
    """Return a single candidate row, or ``None`` if it does not exist."""
    return conn.execute(
        "SELECT * FROM candidates WHERE id = ?", (candidate_id,)
    ).fetchone()


def update_candidate(
    conn: sqlite3.Connection,
    candidate_id: int,
    **fields,
) -> sqlite3.Row | None:
    """Update columns on a candidate and return the updated row.

    Args:
        conn: An open SQLite connection.
        candidate_id: The ``candidates.id`` to update.
        **fields: Column values, e.g. ``name``, ``interview``.

    Returns:
        The updated row, or ``None`` if no such candidate exists.

    Raises:
        ValueError: An unknown column name was passed.
    """
    unknown = set(fields) - _UPDATABLE_COLUMNS
    if unknown:
        raise ValueError(f"Unknown candidate columns: {', '.join(sorted(unknown))}")

    if get_candidate(conn, candidate_id) is None:
        return None

    if fields:
        set_clause = ", ".join(f"{k} = :{k}" for k in fields)
        conn.execute(
            f"UPDATE candidates SET {set_clause} WHERE id = :candidate_id",
            {**fields, "candidate_id": candidate_id},
        )
        conn.commit()
    return get_candidate(conn, candidate_id)


def delete_candidate(conn: sqlite3.Connection, candidate_id: int) -> bool:
    """Delete one candidate.  Returns ``True`` if a row was removed."""
    cursor = conn.execute("DELETE FROM candidates WHERE id = ?", (candidate_id,))
    conn.commit()
    return cursor.rowcount > 0


def delete_all_candidates(conn: sqlite3.Connection) -> None:
    """Remove every candidate and reset the id sequence."""
    conn.execute("DELETE FROM candidates")
    conn.execute("DELETE FROM sqlite_sequence WHERE name = 'candidates'")
    conn.commit()
    logger.info("Deleted all candidates")


def save_scores(conn: sqlite3.Connection, results: Sequence[ScoreResult]) -> int:
    """Persist ``final_score`` and ``rank`` for a full result set.

    All rows are written in one transaction so readers never see a
    half-updated ranking.

    Returns:
        The number of candidate rows updated.
    """
    scored_at = datetime.datetime.now().isoformat(timespec="seconds")
    sql = """
        UPDATE candidates
        SET final_score = :score, rank = :rank, scored_at = :scored_at
        WHERE id = :candidate_id
    """
    updated = 0
    with conn:
        for result in results:
            cursor = conn.execute(sql, {
                "score": result.score,
                "rank": result.rank,
                "scored_at": scored_at,
                "candidate_id": result.candidate_id,
            })
            updated += cursor.rowcount
    logger.info("Saved scores for %d candidates", updated)
    return updated


def save_weights(conn: sqlite3.Connection, weights: WeightVector) -> None:
    """Store *weights* as the ones behind the current scores."""
    conn.execute(
        """
        INSERT OR REPLACE INTO scoring_weights
            (id, experience, education, interview, age, updated_at)
        VALUES
            (1, :experience, :education, :interview, :age, datetime('now'))
        """,
        weights.as_dict(),
    )
    conn.commit()


def get_weights(conn: sqlite3.Connection) -> WeightVector:
    """Return the stored weights, or the defaults if none were saved."""
    row = conn.execute(
        "SELECT experience, education, interview, age FROM scoring_weights WHERE id = 1"
    ).fetchone()
    if row is None:
        return WeightVector.from_mapping(DEFAULT_WEIGHTS)
    return WeightVector.from_mapping(dict(row))


def get_candidate_count(conn: sqlite3.Connection) -> int:
    """Return the total number of rows in the ``candidates`` table."""
    row = conn.execute("SELECT COUNT(*) AS cnt FROM candidates").fetchone()
    return row["cnt"]
