import random
from datetime import datetime, timezone

import pytest

from sentence_tutor.corpus import load_corpus


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tutor.db")
    return db_path


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def corpus():
    """The bundled 20-sentence sample corpus (en/fr/es/de/ja)."""
    return load_corpus()


@pytest.fixture
def now():
    return datetime(2026, 3, 14, 9, 0, tzinfo=timezone.utc)
