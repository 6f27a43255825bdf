"""Default audio resolver: sentence id and language to an audio URL."""
from typing import Optional, Sequence

from sentence_tutor.languages import UnknownLanguageError, get_language
from sentence_tutor.models import Sentence


class AudioResolver:
    """Builds ``<base_url>/<folder>/<Prefix>-<id>.mp3`` URLs.

    Resolves nothing without a base URL. When a corpus is given, sentences
    without text in the requested language have no audio either.
    """

    def __init__(self, base_url: str = "", corpus: Sequence[Sentence] = ()):
        self.base_url = base_url.rstrip("/")
        self._corpus = {s.id: s for s in corpus}

    def __call__(self, sentence_id: int, language: str) -> Optional[str]:
        if not self.base_url:
            return None
        try:
            lang = get_language(language)
        except UnknownLanguageError:
            return None
        sentence = self._corpus.get(sentence_id)
        if sentence is not None and sentence.text(lang.code) is None:
            return None
        return f"{self.base_url}/{lang.audio_folder}/{lang.audio_prefix}-{sentence_id}.mp3"
