"""Supported languages and their corpus and audio naming."""
from dataclasses import dataclass


class UnknownLanguageError(ValueError):
    pass


@dataclass(frozen=True)
class Language:
    code: str
    name: str
    audio_folder: str

    @property
    def audio_prefix(self) -> str:
        return self.name


LANGUAGES = {
    lang.code: lang
    for lang in (
        Language("en", "English", "audio_en"),
        Language("fr", "French", "audio_fr"),
        Language("de", "German", "audio_de"),
        Language("tr", "Turkish", "audio_tr"),
        Language("uk", "Ukrainian", "audio_uk"),
        Language("ja", "Japanese", "audio_jp"),
        Language("it", "Italian", "audio_it"),
        Language("ru", "Russian", "audio_ru"),
        Language("es", "Spanish", "audio_es"),
    )
}

_BY_NAME = {lang.name.lower(): lang for lang in LANGUAGES.values()}


def get_language(code_or_name: str) -> Language:
    """Resolve a language by code ("ja") or corpus key ("Japanese")."""
    key = code_or_name.strip().lower()
    if key in LANGUAGES:
        return LANGUAGES[key]
    if key in _BY_NAME:
        return _BY_NAME[key]
    raise UnknownLanguageError(f"Unknown language: {code_or_name!r}")
