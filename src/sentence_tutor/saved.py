"""Saved sentences per learning language."""
from datetime import datetime, timedelta, timezone

from sentence_tutor.db import get_connection


def save_sentence(db_path: str, sentence_id: int, language: str, saved_at: datetime | None = None) -> None:
    saved_at = saved_at or datetime.now(timezone.utc)
    conn = get_connection(db_path)
    conn.execute(
        "INSERT OR IGNORE INTO saved_sentences (sentence_id, language, saved_at) VALUES (?, ?, ?)",
        (sentence_id, language, saved_at.isoformat()),
    )
    conn.commit()
    conn.close()


def unsave_sentence(db_path: str, sentence_id: int, language: str) -> None:
    """Remove a saved sentence; its review card goes once no language keeps it."""
    conn = get_connection(db_path)
    conn.execute(
        "DELETE FROM saved_sentences WHERE sentence_id = ? AND language = ?",
        (sentence_id, language),
    )
    remaining = conn.execute(
        "SELECT COUNT(*) FROM saved_sentences WHERE sentence_id = ?", (sentence_id,)
    ).fetchone()[0]
    if remaining == 0:
        conn.execute("DELETE FROM review_cards WHERE sentence_id = ?", (sentence_id,))
    conn.commit()
    conn.close()


def is_saved(db_path: str, sentence_id: int, language: str) -> bool:
    conn = get_connection(db_path)
    row = conn.execute(
        "SELECT 1 FROM saved_sentences WHERE sentence_id = ? AND language = ?",
        (sentence_id, language),
    ).fetchone()
    conn.close()
    return row is not None


def get_saved_ids(db_path: str, language: str) -> set[int]:
    conn = get_connection(db_path)
    rows = conn.execute(
        "SELECT sentence_id FROM saved_sentences WHERE language = ?", (language,)
    ).fetchall()
    conn.close()
    return {r["sentence_id"] for r in rows}


def get_recent_ids(db_path: str, language: str, days: int = 7, now: datetime | None = None) -> set[int]:
    """Sentences saved within the last ``days`` days."""
    now = now or datetime.now(timezone.utc)
    cutoff = (now - timedelta(days=days)).isoformat()
    conn = get_connection(db_path)
    rows = conn.execute(
        "SELECT sentence_id FROM saved_sentences WHERE language = ? AND saved_at >= ?",
        (language, cutoff),
    ).fetchall()
    conn.close()
    return {r["sentence_id"] for r in rows}
