"""pypyr step: open the candidate database for the rest of the pipeline.

The path comes from ``db_path`` in the context, then the
``HR_RANKER_DB`` environment variable, then the same per-user default
the CLI uses, so a pipeline run without an explicit path works on the
candidates the CLI imported.

Context keys consumed:
    db_path (str, optional): SQLite file, or ``:memory:``.

Context keys produced:
    conn (sqlite3.Connection): Connection with the schema applied.
    db_path (str): The path actually opened.
"""

import logging
import pathlib

from hr_ranker import resolve_db_path
from hr_ranker.db.manager import get_connection, init_db

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: connect and apply the schema."""
    db_path = resolve_db_path(context.get("db_path"))

    if db_path != ":memory:":
        pathlib.Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    init_db(conn)

    context["conn"] = conn
    context["db_path"] = db_path
    logger.info("Candidate database open at %s", db_path)
