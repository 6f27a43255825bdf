"""Script-aware splitting of sentences into puzzle pieces."""
import re

from sentence_tutor.script import (
    TRAILING_MARKS,
    ScriptClass,
    classify,
    contains_cjk,
    is_opening_punctuation,
    is_punctuation,
    is_punctuation_only,
)

ASCII_WHITESPACE = re.compile(r"[ \t\n\r\x0b\x0c]+")

# Pieces this short get merged into their neighbour when the result stays small.
MAX_MERGED_LENGTH = 3
MIN_CJK_PIECES = 3


def tokenize(text: str) -> list[str]:
    """Split text into ordered, non-empty pieces.

    Space-delimited text is split on whitespace with trailing punctuation
    detached; free-standing marks other than . , ; : ? ! join a neighbouring
    word so their spacing survives reassembly. Text containing any Hiragana,
    Katakana or Han character is split wherever the script class changes.
    An empty text yields no pieces.
    """
    if not text:
        return []
    if contains_cjk(text):
        return _tokenize_cjk(text)
    return _tokenize_spaced(text)


def _tokenize_spaced(text: str) -> list[str]:
    pieces = []
    opening = ""
    for word in ASCII_WHITESPACE.split(text):
        if not word:
            continue
        if is_punctuation_only(word) and word[0] not in TRAILING_MARKS:
            # A free-standing « or - keeps its spaces by riding on a word.
            if is_opening_punctuation(word[-1]) or not pieces:
                opening += word + " "
            else:
                pieces[-1] += " " + word
            continue
        if len(word) > 1 and is_punctuation(word[-1]):
            pieces.append(opening + word[:-1])
            pieces.append(word[-1])
        else:
            pieces.append(opening + word)
        opening = ""
    if opening:
        if pieces:
            pieces[-1] += " " + opening.rstrip()
        else:
            pieces.append(opening.rstrip())
    return pieces


def _starts_new_piece(previous: ScriptClass, current: ScriptClass) -> bool:
    if current is ScriptClass.CJK_PUNCTUATION or previous is ScriptClass.CJK_PUNCTUATION:
        return True
    if previous is current:
        return False
    if ScriptClass.ASCII in (previous, current):
        return True
    return {previous, current} <= {ScriptClass.HIRAGANA, ScriptClass.KATAKANA, ScriptClass.KANJI}


def _split_on_script(text: str) -> list[str]:
    pieces = []
    current = ""
    for char in text:
        if current and _starts_new_piece(classify(current[-1]), classify(char)):
            pieces.append(current)
            current = char
        else:
            current += char
    if current:
        pieces.append(current)
    return pieces


def _smooth(pieces: list[str]) -> list[str]:
    smoothed = []
    i = 0
    while i < len(pieces):
        chunk = pieces[i]
        if len(chunk) == 1 and i + 1 < len(pieces) and len(chunk) + len(pieces[i + 1]) <= MAX_MERGED_LENGTH:
            chunk += pieces[i + 1]
            i += 1
        smoothed.append(chunk)
        i += 1
    return smoothed


def _split_characters(text: str) -> list[str]:
    """One piece per character, except that ASCII runs stay whole."""
    pieces = []
    for char in text:
        if pieces and classify(char) is ScriptClass.ASCII and classify(pieces[-1][-1]) is ScriptClass.ASCII:
            pieces[-1] += char
        else:
            pieces.append(char)
    return pieces


def _tokenize_cjk(text: str) -> list[str]:
    pieces = _smooth(_split_on_script(text))
    if len(pieces) < MIN_CJK_PIECES and len(text) >= MIN_CJK_PIECES:
        # Too few pieces for a puzzle: split down to characters.
        return _split_characters(text)
    return pieces
