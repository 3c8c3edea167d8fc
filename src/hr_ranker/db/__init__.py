"""Database sub-package for the hr-ranker project.

Exports the core database functions so that other modules can import
them directly from ``hr_ranker.db``:

    from hr_ranker.db import get_connection, init_db, get_all_candidates
"""

from hr_ranker.db.manager import get_all_candidates, get_connection, init_db

__all__ = ["get_all_candidates", "get_connection", "init_db"]
