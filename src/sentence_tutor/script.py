"""Script classification of single characters by code-point range."""
import unicodedata
from enum import Enum


class ScriptClass(Enum):
    HIRAGANA = "hiragana"
    KATAKANA = "katakana"
    KANJI = "kanji"
    CJK_PUNCTUATION = "cjk_punctuation"
    ASCII = "ascii"
    OTHER = "other"


CJK_CLASSES = frozenset({ScriptClass.HIRAGANA, ScriptClass.KATAKANA, ScriptClass.KANJI})

# Marks that follow a word, with or without a space before them.
TRAILING_MARKS = ".,;:?!"

# (first, last, class), inclusive ranges
_RANGES = (
    (0x3040, 0x309F, ScriptClass.HIRAGANA),
    (0x30A0, 0x30FF, ScriptClass.KATAKANA),
    (0x4E00, 0x9FAF, ScriptClass.KANJI),
    (0x3000, 0x303F, ScriptClass.CJK_PUNCTUATION),
    (0x0020, 0x007F, ScriptClass.ASCII),
)


def classify(char: str) -> ScriptClass:
    """Classify a character. Only the first code point is considered."""
    if not char:
        return ScriptClass.OTHER
    code = ord(char[0])
    for first, last, script in _RANGES:
        if first <= code <= last:
            return script
    return ScriptClass.OTHER


def is_cjk(char: str) -> bool:
    return classify(char) in CJK_CLASSES


def contains_cjk(text: str) -> bool:
    """True if any character is Hiragana, Katakana or Han."""
    return any(is_cjk(c) for c in text)


def is_ascii_only(text: str) -> bool:
    return all(ord(c) < 0x80 for c in text)


def is_punctuation(char: str) -> bool:
    return unicodedata.category(char).startswith("P")


def is_punctuation_only(text: str) -> bool:
    return bool(text) and all(is_punctuation(c) for c in text)


def is_opening_punctuation(char: str) -> bool:
    """Opening brackets and quotes, e.g. ( [ « “."""
    return unicodedata.category(char) in ("Ps", "Pi")
