"""Data classes for sentences, quiz questions and review cards."""
import unicodedata
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).lower()


@dataclass(frozen=True)
class Sentence:
    id: int
    texts: dict = field(default_factory=dict)  # language code -> text
    topics: tuple = ()
    level: Optional[str] = None

    def text(self, language: str) -> Optional[str]:
        """Trimmed text for a language, None when missing or blank. No fallback."""
        value = self.texts.get(language)
        if value is None:
            return None
        value = value.strip()
        return value or None

    def has_texts(self, *languages: str) -> bool:
        return all(self.text(lang) is not None for lang in languages)

    def matches(self, query: str) -> bool:
        """Case and diacritic insensitive search over texts and topics."""
        q = _fold(query.strip())
        if not q:
            return True
        fields = [t for t in self.texts.values() if t] + list(self.topics)
        return any(q in _fold(f) for f in fields)

    def topic_matches(self, topic: str) -> bool:
        t = _fold(topic.strip())
        return any(t == _fold(x) or t in _fold(x) for x in self.topics)


class QuestionType(Enum):
    SENTENCE_TO_TRANSLATION = "sentence_to_translation"
    TRANSLATION_TO_SENTENCE = "translation_to_sentence"
    FILL_BLANK = "fill_blank"
    AUDIO_TO_SENTENCE = "audio_to_sentence"

    @property
    def display_name(self) -> str:
        return {
            QuestionType.SENTENCE_TO_TRANSLATION: "Sentence → Translation",
            QuestionType.TRANSLATION_TO_SENTENCE: "Translation → Sentence",
            QuestionType.FILL_BLANK: "Fill in the Blank",
            QuestionType.AUDIO_TO_SENTENCE: "Audio Recognition",
        }[self]


@dataclass(frozen=True)
class PuzzleQuestion:
    """Assemble the correct answer from shuffled pieces (decoys included)."""
    sentence_id: int
    question_type: QuestionType
    prompt: str
    source_text: str
    correct_answer: str
    pieces: tuple
    decoys: tuple = ()


@dataclass(frozen=True)
class FillBlankQuestion:
    sentence_id: int
    prompt: str
    correct_answer: str
    choices: tuple
    correct_index: int
    question_type: QuestionType = QuestionType.FILL_BLANK


@dataclass(frozen=True)
class AudioQuestion:
    sentence_id: int
    prompt: str
    audio: str
    correct_answer: str
    choices: tuple
    correct_index: int
    question_type: QuestionType = QuestionType.AUDIO_TO_SENTENCE


QuizQuestion = Union[PuzzleQuestion, FillBlankQuestion, AudioQuestion]
ChoiceQuestion = Union[FillBlankQuestion, AudioQuestion]


@dataclass
class ReviewCard:
    sentence_id: int
    interval_rank: int
    next_review_at: datetime
    difficulty: int = 0  # 0 = easy, 1 = medium, 2 = hard
