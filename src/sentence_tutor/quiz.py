"""Quiz result recording and scoring."""
from datetime import datetime, timezone

from sentence_tutor.db import get_connection
from sentence_tutor.models import QuestionType, QuizQuestion


def record_quiz_answer(db_path: str, question: QuizQuestion, is_correct: bool) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO quiz_results (sentence_id, question_type, is_correct, answered_at) VALUES (?, ?, ?, ?)",
        (question.sentence_id, question.question_type.value, int(is_correct),
         datetime.now(timezone.utc).isoformat()),
    )
    conn.commit()
    conn.close()


def get_quiz_score(db_path: str) -> float:
    """Overall quiz score as percentage."""
    conn = get_connection(db_path)
    row = conn.execute(
        "SELECT COUNT(*) as total, SUM(is_correct) as correct FROM quiz_results"
    ).fetchone()
    conn.close()
    if row["total"] == 0:
        return 0.0
    return round((row["correct"] / row["total"]) * 100, 1)


def get_type_quiz_scores(db_path: str) -> dict[QuestionType, float]:
    """Quiz scores broken down by question type."""
    conn = get_connection(db_path)
    rows = conn.execute(
        """SELECT question_type, COUNT(*) as total, SUM(is_correct) as correct
        FROM quiz_results
        GROUP BY question_type"""
    ).fetchall()
    conn.close()
    return {
        QuestionType(row["question_type"]): round((row["correct"] / row["total"]) * 100, 1)
        for row in rows
    }
