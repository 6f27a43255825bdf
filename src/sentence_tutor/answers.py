"""Answer reconstruction and comparison."""
import re
from typing import Sequence

from sentence_tutor.script import TRAILING_MARKS, contains_cjk, is_ascii_only, is_punctuation_only

_SPACE_BEFORE_PUNCTUATION = re.compile(" ([" + re.escape(TRAILING_MARKS) + "])")


def reconstruct(pieces: Sequence[str]) -> str:
    """Join ordered pieces back into a sentence using the script-aware join rule."""
    if any(contains_cjk(p) for p in pieces):
        return _reconstruct_cjk(pieces)
    result = ""
    for index, piece in enumerate(pieces):
        if index == 0 or is_punctuation_only(piece):
            result += piece
        else:
            result += " " + piece
    return result


def _reconstruct_cjk(pieces: Sequence[str]) -> str:
    result = ""
    for index, piece in enumerate(pieces):
        if index == 0:
            result += piece
            continue
        previous = pieces[index - 1]
        prev_ascii = is_ascii_only(previous)
        cur_ascii = is_ascii_only(piece)
        if (
            (prev_ascii and cur_ascii)
            or (prev_ascii and not contains_cjk(piece))
            or (cur_ascii and not contains_cjk(previous))
        ):
            result += " " + piece
        else:
            result += piece
    return result


def normalize(text: str) -> str:
    """Collapse whitespace, lowercase and drop the space before . , ; : ? !"""
    collapsed = " ".join(text.split()).lower()
    return _SPACE_BEFORE_PUNCTUATION.sub(r"\1", collapsed)


def is_correct(user_pieces: Sequence[str], correct_answer: str) -> bool:
    return normalize(reconstruct(user_pieces)) == normalize(correct_answer)


def is_correct_choice(choice: str, correct_answer: str) -> bool:
    """Choices are verbatim source text, so no normalization is applied."""
    return choice == correct_answer
