import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


class DatabaseConfig:
    """Where the SQLite file lives; its parent directory is created on demand."""

    def __init__(self, db_path: Path | str = "data/finance.db"):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)


class DatabaseManager:
    """
    Owns the single SQLite connection used by the repository.

    Rows come back as sqlite3.Row so columns can be read by name.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._connection: Optional[sqlite3.Connection] = None

    def get_connection(self) -> sqlite3.Connection:
        """Open the connection on first use"""
        if self._connection is None:
            conn = sqlite3.connect(self.config.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            self._connection = conn
        return self._connection

    def initialize(self, schema_path: Path = SCHEMA_PATH) -> None:
        """Create the tables if they don't exist yet"""
        conn = self.get_connection()
        conn.executescript(schema_path.read_text())
        conn.commit()

    def schema_version(self) -> Optional[sqlite3.Row]:
        """Latest applied schema_version row"""
        return self.get_connection().execute(
            "SELECT version, description FROM schema_version ORDER BY version DESC LIMIT 1"
        ).fetchone()

    def close(self) -> None:
        if self._connection:
            self._connection.close()
            self._connection = None

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Run writes atomically: commit when the block succeeds, roll back
        and re-raise when it fails.

        Usage:
            with db_manager.transaction() as conn:
                conn.execute("INSERT INTO transactions ...")
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
