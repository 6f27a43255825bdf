"""SQLite storage for saved sentences, review cards and results."""
import sqlite3
from pathlib import Path

from sentence_tutor.config import DEFAULT_DB_PATH

SCHEMA = """
CREATE TABLE IF NOT EXISTS saved_sentences (
    sentence_id INTEGER NOT NULL,
    language TEXT NOT NULL,
    saved_at TEXT NOT NULL,
    PRIMARY KEY (sentence_id, language)
);
CREATE INDEX IF NOT EXISTS idx_saved_language_date ON saved_sentences (language, saved_at);

CREATE TABLE IF NOT EXISTS review_cards (
    sentence_id INTEGER PRIMARY KEY,
    interval_rank INTEGER NOT NULL DEFAULT 0,
    next_review_at TEXT NOT NULL,
    difficulty INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS review_results (
    result_id INTEGER PRIMARY KEY AUTOINCREMENT,
    sentence_id INTEGER NOT NULL,
    known INTEGER NOT NULL,
    reviewed_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS quiz_results (
    result_id INTEGER PRIMARY KEY AUTOINCREMENT,
    sentence_id INTEGER NOT NULL,
    question_type TEXT NOT NULL,
    is_correct INTEGER NOT NULL,
    answered_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS daily_activity (
    day TEXT PRIMARY KEY,
    saves INTEGER NOT NULL DEFAULT 0,
    quizzes INTEGER NOT NULL DEFAULT 0,
    flashcards INTEGER NOT NULL DEFAULT 0,
    goal INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS user_settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Open the tutor database with rows addressable by column name."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Create the database file and any missing tables."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    with get_connection(db_path) as conn:
        conn.executescript(SCHEMA)
    conn.close()


def get_setting(db_path: str, key: str, default: str | None = None) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return default if row is None else row["value"]


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO user_settings (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
        (key, value),
    )
    conn.commit()
    conn.close()
