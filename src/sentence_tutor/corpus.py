"""Sentence corpus loading from JSON or YAML files."""
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

import yaml

from sentence_tutor.languages import UnknownLanguageError, get_language
from sentence_tutor.models import Sentence

logger = logging.getLogger(__name__)

SAMPLE_CORPUS = Path(__file__).parent / "content" / "sentences.json"

_META_KEYS = {"id", "theme", "level", "audiourl", "audio_url"}


class CorpusFormatError(ValueError):
    pass


def read_corpus_data(path: str | Path):
    path = Path(path)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    try:
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CorpusFormatError(f"Cannot parse {path.name}: {e}") from e


def parse_sentence(record: dict) -> Optional[Sentence]:
    """Build a Sentence from one corpus record, None if it has no usable id."""
    sentence_id = record.get("id")
    if isinstance(sentence_id, bool) or not isinstance(sentence_id, int):
        return None
    texts = {}
    for key, value in record.items():
        if key.lower() in _META_KEYS or not isinstance(value, str):
            continue
        try:
            lang = get_language(key)
        except UnknownLanguageError:
            continue
        texts[lang.code] = value
    theme = record.get("theme")
    topics = (theme.strip().title(),) if isinstance(theme, str) and theme.strip() else ()
    return Sentence(id=sentence_id, texts=texts, topics=topics, level=record.get("level"))


def parse_corpus(data) -> list[Sentence]:
    if isinstance(data, dict):
        data = data.get("sentences")
    if not isinstance(data, list):
        raise CorpusFormatError("Corpus must be a list of sentences or {'sentences': [...]}")
    sentences = []
    seen = set()
    for record in data:
        sentence = parse_sentence(record) if isinstance(record, dict) else None
        if sentence is None:
            logger.warning("Skipping corpus record without an integer id: %r", record)
            continue
        if sentence.id in seen:
            logger.warning("Skipping duplicate sentence id %s", sentence.id)
            continue
        seen.add(sentence.id)
        sentences.append(sentence)
    return sentences


def load_corpus(path: str | Path | None = None) -> list[Sentence]:
    """Load a corpus file; the bundled sample corpus when no path is given."""
    sentences = parse_corpus(read_corpus_data(path or SAMPLE_CORPUS))
    logger.info("Loaded %d sentences from %s", len(sentences), Path(path or SAMPLE_CORPUS).name)
    return sentences


def filter_sentences(
    corpus: Sequence[Sentence], topic: str | None = None, query: str | None = None,
) -> list[Sentence]:
    """Narrow a corpus to a theme and/or a search query."""
    result = list(corpus)
    if topic:
        result = [s for s in result if s.topic_matches(topic)]
    if query:
        result = [s for s in result if s.matches(query)]
    return result


def find_sentence(corpus: Sequence[Sentence], sentence_id: int) -> Optional[Sentence]:
    return next((s for s in corpus if s.id == sentence_id), None)
