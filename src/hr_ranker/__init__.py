"""hr-ranker: Rank job candidates with a TOPSIS-style closeness score."""

__version__ = "0.1.0"

import os
import pathlib

DB_ENV_VAR = "HR_RANKER_DB"

DEFAULT_DB_PATH = os.path.join(
    os.path.expanduser("~"), ".hr-ranker", "hr_ranker.db"
)

PACKAGE_DIR = pathlib.Path(__file__).parent


def resolve_db_path(explicit: str | None = None) -> str:
    """Return *explicit* if given, else ``$HR_RANKER_DB``, else the default."""
    if explicit:
        return explicit
    return os.environ.get(DB_ENV_VAR) or DEFAULT_DB_PATH
