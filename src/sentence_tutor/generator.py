"""Quiz question generation from saved sentences."""
import logging
import random
from typing import Callable, Collection, Optional, Sequence

from sentence_tutor.answers import is_correct
from sentence_tutor.config import QuizConfig
from sentence_tutor.distractors import (
    sample_puzzle_decoy_pieces,
    sample_sentence_distractors,
    sample_token_distractors,
)
from sentence_tutor.models import (
    AudioQuestion,
    FillBlankQuestion,
    PuzzleQuestion,
    QuestionType,
    QuizQuestion,
    Sentence,
)
from sentence_tutor.tokenizer import ASCII_WHITESPACE, tokenize

logger = logging.getLogger(__name__)

BLANK = "_____"
CONTENT_WORD_MIN_LENGTH = 4

AudioResolverFn = Callable[[int, str], Optional[str]]


def generate_question(
    sentence: Sentence,
    corpus: Sequence[Sentence],
    learning_language: str,
    known_language: str,
    rng=None,
    audio_resolver: Optional[AudioResolverFn] = None,
    config: Optional[QuizConfig] = None,
    question_types: Optional[Sequence[QuestionType]] = None,
) -> Optional[QuizQuestion]:
    """Build one question for a sentence, or None if it has no viable question.

    A question type is picked at random; when it cannot be built for this
    sentence (too few pieces, no decoys, no audio) the remaining types are
    tried in random order.
    """
    rng = rng or random
    config = config or QuizConfig()
    if not sentence.has_texts(learning_language, known_language):
        logger.debug("Sentence %s lacks %s/%s text", sentence.id, learning_language, known_language)
        return None

    order = list(question_types or QuestionType)
    rng.shuffle(order)
    for question_type in order:
        if question_type is QuestionType.FILL_BLANK:
            question = build_fill_blank(sentence, corpus, learning_language, rng, config)
        elif question_type is QuestionType.AUDIO_TO_SENTENCE:
            question = build_audio_question(sentence, corpus, learning_language, rng, audio_resolver, config)
        else:
            question = build_puzzle(sentence, corpus, question_type, learning_language, known_language, rng, config)
        if question is not None:
            return question
        logger.debug("%s not viable for sentence %s", question_type.value, sentence.id)
    return None


def build_puzzle(
    sentence: Sentence,
    corpus: Sequence[Sentence],
    question_type: QuestionType,
    learning_language: str,
    known_language: str,
    rng,
    config: QuizConfig,
) -> Optional[PuzzleQuestion]:
    if question_type is QuestionType.SENTENCE_TO_TRANSLATION:
        from_language, to_language = learning_language, known_language
        prompt = "Arrange the pieces to form the correct translation:"
    else:
        from_language, to_language = known_language, learning_language
        prompt = "Arrange the pieces to form the correct sentence:"
    source = sentence.text(from_language)
    answer = sentence.text(to_language)
    pieces = tokenize(answer)
    if len(pieces) < 2 or not is_correct(pieces, answer):
        return None
    decoys = sample_puzzle_decoy_pieces(
        pieces, corpus, to_language, len(answer),
        exclude_id=sentence.id,
        rng=rng,
        min_count=config.min_puzzle_decoys,
        max_count=config.max_puzzle_decoys,
        similarity=config.length_similarity,
        pool_cap=config.puzzle_pool_cap,
    )
    shuffled = pieces + decoys
    rng.shuffle(shuffled)
    return PuzzleQuestion(
        sentence_id=sentence.id,
        question_type=question_type,
        prompt=prompt,
        source_text=source,
        correct_answer=answer,
        pieces=tuple(shuffled),
        decoys=tuple(decoys),
    )


def choose_blank_word(words: Sequence[str], rng) -> str:
    """Pick a content word (4+ characters), weighted towards longer ones.

    Falls back to any word when no content word exists.
    """
    content = [w for w in words if len(w) >= CONTENT_WORD_MIN_LENGTH]
    if content:
        return rng.choices(content, weights=[len(w) for w in content])[0]
    return rng.choice(list(words))


def _shuffle_choices(correct: str, decoys, rng) -> tuple[tuple, int]:
    choices = sorted(decoys) + [correct]
    rng.shuffle(choices)
    return tuple(choices), choices.index(correct)


def build_fill_blank(
    sentence: Sentence,
    corpus: Sequence[Sentence],
    learning_language: str,
    rng,
    config: QuizConfig,
) -> Optional[FillBlankQuestion]:
    text = sentence.text(learning_language)
    words = [w for w in ASCII_WHITESPACE.split(text) if w]
    if len(words) <= 2:
        return None
    word = choose_blank_word(words, rng)
    corpus_texts = [t for t in (s.text(learning_language) for s in corpus) if t]
    decoys = sample_token_distractors(
        word, corpus_texts, config.token_distractors, rng, config.token_candidate_target,
    )
    if not decoys:
        return None
    choices, index = _shuffle_choices(word, decoys, rng)
    return FillBlankQuestion(
        sentence_id=sentence.id,
        prompt=text.replace(word, BLANK),
        correct_answer=word,
        choices=choices,
        correct_index=index,
    )


def build_audio_question(
    sentence: Sentence,
    corpus: Sequence[Sentence],
    learning_language: str,
    rng,
    audio_resolver: Optional[AudioResolverFn],
    config: QuizConfig,
) -> Optional[AudioQuestion]:
    if audio_resolver is None:
        return None
    audio = audio_resolver(sentence.id, learning_language)
    if audio is None:
        return None
    decoys = sample_sentence_distractors(
        sentence, corpus, learning_language, config.sentence_distractors, rng, config.length_similarity,
    )
    if not decoys:
        return None
    text = sentence.text(learning_language)
    choices, index = _shuffle_choices(text, decoys, rng)
    return AudioQuestion(
        sentence_id=sentence.id,
        prompt="Listen to the audio and select the correct sentence:",
        audio=audio,
        correct_answer=text,
        choices=choices,
        correct_index=index,
    )


def generate_quiz(
    corpus: Sequence[Sentence],
    saved_ids: Collection[int],
    recent_ids: Collection[int],
    learning_language: str,
    known_language: str,
    rng=None,
    audio_resolver: Optional[AudioResolverFn] = None,
    config: Optional[QuizConfig] = None,
) -> list[QuizQuestion]:
    """Build a shuffled batch of questions from the learner's saved sentences.

    Roughly ``recent_share`` of the batch comes from recently saved
    sentences, the rest from older ones, topped up from anything eligible.
    Returns fewer questions (possibly none) when there is not enough content.
    """
    rng = rng or random
    config = config or QuizConfig()
    eligible = [
        s for s in corpus
        if s.id in saved_ids and s.has_texts(learning_language, known_language)
    ]
    if not eligible:
        logger.info("No saved sentences with %s and %s text", learning_language, known_language)
        return []

    batch_size = config.batch_size
    recent = [s for s in eligible if s.id in recent_ids]
    older = [s for s in eligible if s.id not in recent_ids]
    recent_count = min(int(batch_size * config.recent_share), len(recent))

    rng.shuffle(recent)
    rng.shuffle(older)
    selected = recent[:recent_count]
    selected += older[:batch_size - len(selected)]
    if len(selected) < batch_size:
        chosen = {s.id for s in selected}
        remaining = [s for s in eligible if s.id not in chosen]
        rng.shuffle(remaining)
        selected += remaining[:batch_size - len(selected)]

    questions = []
    for sentence in selected:
        question = generate_question(
            sentence, corpus, learning_language, known_language,
            rng=rng, audio_resolver=audio_resolver, config=config,
        )
        if question is not None:
            questions.append(question)
    rng.shuffle(questions)
    logger.info("Generated %d questions from %d eligible sentences", len(questions), len(eligible))
    return questions
