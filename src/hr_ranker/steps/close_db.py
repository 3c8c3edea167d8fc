"""pypyr step: close the database connection opened by ``db_init``."""

import logging

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: close ``context['conn']`` if present."""
    conn = context.get("conn")
    if conn is None:
        logger.warning("close_db: no database connection in context")
        return
    conn.close()
    logger.info("Database connection closed.")
