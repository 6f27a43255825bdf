"""Tests for question and quiz generation."""
import random
from collections import Counter

from sentence_tutor import generator
from sentence_tutor.answers import is_correct
from sentence_tutor.config import QuizConfig
from sentence_tutor.generator import BLANK, choose_blank_word, generate_question, generate_quiz
from sentence_tutor.models import (
    AudioQuestion, FillBlankQuestion, PuzzleQuestion, QuestionType, Sentence,
)
from sentence_tutor.tokenizer import tokenize


def _resolver(sentence_id, language):
    return f"audio://{language}/{sentence_id}"


def _by_id(corpus, sentence_id):
    return next(s for s in corpus if s.id == sentence_id)


def test_generate_question_requires_both_languages(corpus, rng):
    sentence = Sentence(id=99, texts={"fr": "Bonjour tout le monde"})
    assert generate_question(sentence, corpus, "fr", "en", rng=rng) is None


def test_sentence_to_translation_puzzle(corpus, rng):
    sentence = _by_id(corpus, 8)
    q = generate_question(
        sentence, corpus, "fr", "en", rng=rng,
        question_types=[QuestionType.SENTENCE_TO_TRANSLATION],
    )
    assert isinstance(q, PuzzleQuestion)
    assert q.sentence_id == 8
    assert q.source_text == "Le chat dort sur le canapé."
    assert q.correct_answer == "The cat is sleeping on the sofa."
    assert len(q.decoys) >= 4
    assert q.correct_answer not in q.decoys
    assert Counter(q.pieces) - Counter(q.decoys) == Counter(tokenize(q.correct_answer))


def test_translation_to_sentence_puzzle_in_japanese(corpus, rng):
    sentence = _by_id(corpus, 8)
    q = generate_question(
        sentence, corpus, "ja", "en", rng=rng,
        question_types=[QuestionType.TRANSLATION_TO_SENTENCE],
    )
    assert isinstance(q, PuzzleQuestion)
    assert q.correct_answer == "猫はソファで寝ています。"
    assert q.source_text == "The cat is sleeping on the sofa."
    answer_pieces = Counter(q.pieces) - Counter(q.decoys)
    assert answer_pieces == Counter(tokenize(q.correct_answer))
    assert is_correct(tokenize(q.correct_answer), q.correct_answer)


def test_puzzle_answerability_for_every_sentence(corpus):
    for seed, sentence in enumerate(corpus):
        q = generate_question(
            sentence, corpus, "fr", "en", rng=random.Random(seed),
            question_types=[QuestionType.SENTENCE_TO_TRANSLATION, QuestionType.TRANSLATION_TO_SENTENCE],
        )
        assert isinstance(q, PuzzleQuestion)
        remaining = Counter(q.pieces) - Counter(q.decoys)
        assert is_correct(tokenize(q.correct_answer), q.correct_answer)
        assert remaining == Counter(tokenize(q.correct_answer))


def test_fill_blank_question(corpus, rng):
    sentence = _by_id(corpus, 8)
    q = generate_question(sentence, corpus, "fr", "en", rng=rng, question_types=[QuestionType.FILL_BLANK])
    assert isinstance(q, FillBlankQuestion)
    assert BLANK in q.prompt
    assert q.choices.count(q.correct_answer) == 1
    assert q.choices[q.correct_index] == q.correct_answer
    assert 2 <= len(q.choices) <= 3
    assert q.correct_answer in "Le chat dort sur le canapé.".split()


def test_fill_blank_needs_more_than_two_words(corpus, rng):
    sentence = Sentence(id=99, texts={"fr": "Bonjour Marie", "en": "Hello Marie"})
    assert generate_question(
        sentence, corpus, "fr", "en", rng=rng, question_types=[QuestionType.FILL_BLANK],
    ) is None


def test_choose_blank_word_prefers_content_words():
    words = ["Le", "chat", "dort", "sur", "le", "canapé."]
    for seed in range(20):
        assert len(choose_blank_word(words, random.Random(seed))) > 3


def test_choose_blank_word_falls_back_to_any_word():
    words = ["a", "la", "vie"]
    assert choose_blank_word(words, random.Random(0)) in words


def test_audio_question(corpus, rng):
    sentence = _by_id(corpus, 8)
    q = generate_question(
        sentence, corpus, "fr", "en", rng=rng,
        audio_resolver=_resolver, question_types=[QuestionType.AUDIO_TO_SENTENCE],
    )
    assert isinstance(q, AudioQuestion)
    assert q.audio == "audio://fr/8"
    assert q.correct_answer == "Le chat dort sur le canapé."
    assert len(q.choices) == 4
    assert q.choices.count(q.correct_answer) == 1
    assert q.choices[q.correct_index] == q.correct_answer


def test_audio_question_skipped_without_audio(corpus, rng):
    sentence = _by_id(corpus, 8)
    assert generate_question(
        sentence, corpus, "fr", "en", rng=rng, question_types=[QuestionType.AUDIO_TO_SENTENCE],
    ) is None
    assert generate_question(
        sentence, corpus, "fr", "en", rng=rng, audio_resolver=lambda sid, lang: None,
        question_types=[QuestionType.AUDIO_TO_SENTENCE],
    ) is None


def test_falls_back_to_a_viable_type(corpus, rng):
    # One word each side: no puzzle, no blank, only audio is possible
    sentence = Sentence(id=99, texts={"fr": "Bonjour", "en": "Hello"})
    q = generate_question(sentence, corpus + [sentence], "fr", "en", rng=rng, audio_resolver=_resolver)
    assert isinstance(q, AudioQuestion)
    assert generate_question(sentence, corpus + [sentence], "fr", "en", rng=rng) is None


def test_all_question_types_get_picked(corpus):
    sentence = _by_id(corpus, 8)
    seen = set()
    for seed in range(60):
        q = generate_question(sentence, corpus, "fr", "en", rng=random.Random(seed), audio_resolver=_resolver)
        seen.add(q.question_type)
    assert seen == set(QuestionType)


def test_generate_quiz_full_batch(corpus, rng):
    saved = {s.id for s in corpus}
    questions = generate_quiz(corpus, saved, {1, 2, 3}, "fr", "en", rng=rng, audio_resolver=_resolver)
    assert len(questions) == 15
    ids = [q.sentence_id for q in questions]
    assert len(set(ids)) == 15
    assert {1, 2, 3} <= set(ids)


def test_generate_quiz_balances_recent_and_older(corpus, rng):
    saved = {s.id for s in corpus}
    recent = set(range(1, 13))
    questions = generate_quiz(corpus, saved, recent, "fr", "en", rng=rng)
    ids = {q.sentence_id for q in questions}
    # 7 recent slots, then all 8 older sentences fill the rest
    assert set(range(13, 21)) <= ids
    assert len(ids & recent) == 7


def test_generate_quiz_short_batch(corpus, rng):
    questions = generate_quiz(corpus, {1, 2, 3, 4}, set(), "fr", "en", rng=rng)
    assert sorted(q.sentence_id for q in questions) == [1, 2, 3, 4]


def test_generate_quiz_respects_configured_batch_size(corpus, rng):
    saved = {s.id for s in corpus}
    questions = generate_quiz(corpus, saved, set(), "fr", "en", rng=rng, config=QuizConfig(batch_size=5))
    assert len(questions) == 5


def test_generate_quiz_empty_without_saved_content(corpus, rng):
    assert generate_quiz(corpus, set(), set(), "fr", "en", rng=rng) == []
    assert generate_quiz(corpus, {999}, set(), "fr", "en", rng=rng) == []


def test_generate_quiz_skips_sentences_missing_a_language(corpus, rng):
    partial = Sentence(id=100, texts={"fr": "Une phrase sans traduction."})
    assert generate_quiz(corpus + [partial], {100}, set(), "fr", "en", rng=rng) == []


def test_generate_quiz_is_deterministic_for_a_seed(corpus):
    saved = {s.id for s in corpus}
    first = generate_quiz(corpus, saved, {1, 2}, "ja", "en", rng=random.Random(7), audio_resolver=_resolver)
    second = generate_quiz(corpus, saved, {1, 2}, "ja", "en", rng=random.Random(7), audio_resolver=_resolver)
    assert first == second


def test_puzzle_with_guillemets_is_answerable(corpus, rng):
    sentence = Sentence(id=50, texts={"fr": "Il a dit « oui » hier.", "en": "He said yes yesterday."})
    q = generate_question(
        sentence, corpus + [sentence], "fr", "en", rng=rng,
        question_types=[QuestionType.TRANSLATION_TO_SENTENCE],
    )
    assert isinstance(q, PuzzleQuestion)
    answer_pieces = list((Counter(q.pieces) - Counter(q.decoys)).elements())
    assert Counter(answer_pieces) == Counter(tokenize(q.correct_answer))
    assert is_correct(tokenize(q.correct_answer), q.correct_answer)


def test_puzzle_with_short_ascii_and_kana_is_answerable(corpus, rng):
    sentence = Sentence(id=51, texts={"ja": "OKです", "en": "It is OK."})
    q = generate_question(
        sentence, corpus + [sentence], "ja", "en", rng=rng,
        question_types=[QuestionType.TRANSLATION_TO_SENTENCE],
    )
    assert isinstance(q, PuzzleQuestion)
    assert Counter(q.pieces) - Counter(q.decoys) == Counter(["OK", "で", "す"])
    assert is_correct(["OK", "で", "す"], q.correct_answer)


def test_unanswerable_puzzle_falls_back_to_another_type(corpus, rng, monkeypatch):
    # Pieces that cannot be reassembled into the answer never make a puzzle.
    monkeypatch.setattr(generator, "tokenize", lambda text: text.split()[:-1])
    sentence = _by_id(corpus, 8)
    assert generate_question(
        sentence, corpus, "fr", "en", rng=rng,
        question_types=[QuestionType.SENTENCE_TO_TRANSLATION, QuestionType.TRANSLATION_TO_SENTENCE],
    ) is None
    q = generate_question(
        sentence, corpus, "fr", "en", rng=rng,
        question_types=[QuestionType.SENTENCE_TO_TRANSLATION, QuestionType.FILL_BLANK],
    )
    assert isinstance(q, FillBlankQuestion)
