"""Tests for script classification."""
import pytest

from sentence_tutor.script import (
    ScriptClass, classify, contains_cjk, is_ascii_only, is_punctuation_only,
)


@pytest.mark.parametrize("char,expected", [
    ("あ", ScriptClass.HIRAGANA),
    ("ア", ScriptClass.KATAKANA),
    ("ー", ScriptClass.KATAKANA),
    ("日", ScriptClass.KANJI),
    ("。", ScriptClass.CJK_PUNCTUATION),
    ("、", ScriptClass.CJK_PUNCTUATION),
    ("A", ScriptClass.ASCII),
    (" ", ScriptClass.ASCII),
    ("!", ScriptClass.ASCII),
    ("é", ScriptClass.OTHER),
    ("Ж", ScriptClass.OTHER),
])
def test_classify(char, expected):
    assert classify(char) is expected


def test_classify_range_boundaries():
    assert classify(chr(0x3040)) is ScriptClass.HIRAGANA
    assert classify(chr(0x309F)) is ScriptClass.HIRAGANA
    assert classify(chr(0x30A0)) is ScriptClass.KATAKANA
    assert classify(chr(0x4E00)) is ScriptClass.KANJI
    assert classify(chr(0x9FAF)) is ScriptClass.KANJI
    assert classify(chr(0x9FB0)) is ScriptClass.OTHER
    assert classify(chr(0x3000)) is ScriptClass.CJK_PUNCTUATION
    assert classify(chr(0x7F)) is ScriptClass.ASCII
    assert classify(chr(0x1F)) is ScriptClass.OTHER


def test_classify_empty_string_is_other():
    assert classify("") is ScriptClass.OTHER


def test_contains_cjk():
    assert contains_cjk("Hello 日本")
    assert contains_cjk("カタカナ")
    assert not contains_cjk("Hello")
    # CJK punctuation alone does not make text CJK
    assert not contains_cjk("。")


def test_is_ascii_only():
    assert is_ascii_only("AI")
    assert not is_ascii_only("café")


def test_is_punctuation_only():
    assert is_punctuation_only("...")
    assert is_punctuation_only("。")
    assert not is_punctuation_only("a.")
    assert not is_punctuation_only("")
