"""Sequential quiz session: answer, feedback, advance, complete."""
import logging
from enum import Enum
from typing import Optional, Sequence

from sentence_tutor.answers import is_correct, is_correct_choice
from sentence_tutor.models import PuzzleQuestion, QuizQuestion

logger = logging.getLogger(__name__)


class QuizSessionError(RuntimeError):
    """Raised on an event the session cannot accept in its current state."""


class SessionState(Enum):
    AWAITING_ANSWER = "awaiting_answer"
    FEEDBACK = "feedback"
    COMPLETE = "complete"


class QuizSession:
    """A fixed, ordered batch of questions with a running score.

    Every question must be answered before advancing; the score only
    ever goes up by one per correct answer.
    """

    def __init__(self, questions: Sequence[QuizQuestion]):
        self.questions = list(questions)
        self.index = 0
        self.score = 0
        self.last_correct: Optional[bool] = None
        self.state = SessionState.AWAITING_ANSWER if self.questions else SessionState.COMPLETE

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def is_complete(self) -> bool:
        return self.state is SessionState.COMPLETE

    @property
    def current_question(self) -> QuizQuestion:
        if self.is_complete:
            raise QuizSessionError("Quiz is complete")
        return self.questions[self.index]

    def _require(self, state: SessionState) -> None:
        if self.state is not state:
            raise QuizSessionError(f"Expected {state.value}, session is {self.state.value}")

    def _record(self, correct: bool) -> bool:
        self.last_correct = correct
        if correct:
            self.score += 1
        self.state = SessionState.FEEDBACK
        return correct

    def submit_pieces(self, pieces: Sequence[str]) -> bool:
        """Answer a puzzle question with the learner's ordered pieces."""
        self._require(SessionState.AWAITING_ANSWER)
        question = self.current_question
        if not isinstance(question, PuzzleQuestion):
            raise QuizSessionError("Current question expects a choice, not pieces")
        return self._record(is_correct(pieces, question.correct_answer))

    def submit_choice(self, choice_index: int) -> bool:
        """Answer a fill-in-the-blank or audio question by choice index."""
        self._require(SessionState.AWAITING_ANSWER)
        question = self.current_question
        if isinstance(question, PuzzleQuestion):
            raise QuizSessionError("Current question expects pieces, not a choice")
        if not 0 <= choice_index < len(question.choices):
            raise QuizSessionError(f"Choice {choice_index} out of range")
        return self._record(is_correct_choice(question.choices[choice_index], question.correct_answer))

    def advance(self) -> SessionState:
        self._require(SessionState.FEEDBACK)
        self.last_correct = None
        if self.index + 1 == self.total:
            self.state = SessionState.COMPLETE
            logger.info("Quiz complete: %d/%d", self.score, self.total)
        else:
            self.index += 1
            self.state = SessionState.AWAITING_ANSWER
        return self.state
