"""Database initialization and connection management."""
import os
import sqlite3
from pathlib import Path

DATA_DIR = Path.home() / ".linux_trainer"
DEFAULT_DB_PATH = os.environ.get("LINUX_TRAINER_DB", str(DATA_DIR / "trainer.db"))
DEFAULT_LOG_PATH = str(DATA_DIR / "trainer.log")

SCHEMA = """
CREATE TABLE IF NOT EXISTS progress_state (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating the state table if it doesn't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()
