"""Decoy sampling for choice and puzzle questions.

All sampling goes through an injectable random source (``rng``), defaulting
to the ``random`` module. Candidate sets are sorted before shuffling so a
seeded ``random.Random`` gives repeatable results.
"""
import random
from typing import Iterable, Optional, Sequence

from sentence_tutor.answers import reconstruct
from sentence_tutor.models import Sentence
from sentence_tutor.script import is_punctuation
from sentence_tutor.tokenizer import ASCII_WHITESPACE, tokenize


def is_similar_length(length: int, target_length: int, similarity: float = 0.30) -> bool:
    return target_length * (1 - similarity) <= length <= target_length * (1 + similarity)


def _shuffled(items: Iterable, rng) -> list:
    items = list(items)
    rng.shuffle(items)
    return items


def sample_token_distractors(
    target_word: str,
    corpus_texts: Sequence[str],
    max_count: int = 2,
    rng=None,
    candidate_target: int = 10,
) -> set[str]:
    """Pick up to ``max_count`` words of similar length to ``target_word``.

    Scans corpus texts in random order and stops once ``candidate_target``
    unique candidates are collected. Kept words are between one character
    shorter and two characters longer than the target. The target itself is
    never returned.
    """
    rng = rng or random
    low, high = len(target_word) - 1, len(target_word) + 2
    candidates: set[str] = set()
    for text in _shuffled(corpus_texts, rng):
        if not text:
            continue
        candidates.update(w for w in ASCII_WHITESPACE.split(text) if w and low <= len(w) <= high)
        if len(candidates) >= candidate_target:
            break
    candidates.discard(target_word)
    return set(_shuffled(sorted(candidates), rng)[:max_count])


def sample_sentence_distractors(
    target: Sentence,
    corpus: Sequence[Sentence],
    language: str,
    max_count: int = 3,
    rng=None,
    similarity: float = 0.30,
) -> list[str]:
    """Pick up to ``max_count`` other sentences' texts, similar length first.

    When too few sentences fall within the length band, any other distinct
    text is used to top up until ``max_count`` is reached or the corpus runs out.
    """
    rng = rng or random
    target_text = target.text(language)
    if target_text is None:
        return []
    others = []
    for sentence in corpus:
        if sentence.id == target.id:
            continue
        text = sentence.text(language)
        if text is not None and text != target_text:
            others.append(text)
    others = _shuffled(others, rng)

    chosen: list[str] = []
    for text in others:
        if len(chosen) >= max_count:
            break
        if text not in chosen and is_similar_length(len(text), len(target_text), similarity):
            chosen.append(text)
    for text in others:
        if len(chosen) >= max_count:
            break
        if text not in chosen:
            chosen.append(text)
    return chosen


def sample_puzzle_decoy_pieces(
    answer_pieces: Sequence[str],
    corpus: Sequence[Sentence],
    language: str,
    target_length: int,
    exclude_id: Optional[int] = None,
    rng=None,
    min_count: int = 4,
    max_count: int = 10,
    similarity: float = 0.30,
    pool_cap: int = 200,
) -> list[str]:
    """Sample extra pieces from similar-length sentences in the answer's language.

    The number wanted is half the answer's piece count, clamped to
    [min_count, max_count]. Pieces absent from the answer are preferred;
    if there are not enough, the raw pool tops up the rest. The full answer
    text is never used as a decoy.
    """
    rng = rng or random
    pool: list[str] = []
    for sentence in _shuffled(corpus, rng):
        if sentence.id == exclude_id:
            continue
        text = sentence.text(language)
        if text is None or not is_similar_length(len(text), target_length, similarity):
            continue
        pool.extend(p for p in tokenize(text) if not (len(p) == 1 and is_punctuation(p)))
        if len(pool) >= pool_cap:
            break
    if not pool:
        return []

    wanted = min(max(len(answer_pieces) // 2, min_count), max_count)
    answer_text = reconstruct(answer_pieces)
    unique = sorted(set(pool) - set(answer_pieces) - {answer_text})
    decoys = _shuffled(unique, rng)[:wanted]
    if len(decoys) < wanted:
        raw = [p for p in pool if p != answer_text]
        decoys.extend(_shuffled(raw, rng)[:wanted - len(decoys)])
    return decoys
