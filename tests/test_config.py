# tests/test_config.py
from sentence_tutor.config import QuizConfig, Settings


def test_quiz_config_defaults():
    config = QuizConfig()
    assert config.batch_size == 15
    assert config.recent_share == 0.5
    assert config.length_similarity == 0.30
    assert (config.min_puzzle_decoys, config.max_puzzle_decoys) == (4, 10)
    assert config.token_distractors == 2
    assert config.sentence_distractors == 3


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SENTENCE_TUTOR_BATCH_SIZE", "5")
    monkeypatch.setenv("SENTENCE_TUTOR_LEARNING_LANGUAGE", "ja")
    monkeypatch.setenv("SENTENCE_TUTOR_AUDIO_BASE_URL", "https://cdn.example")
    settings = Settings()
    assert settings.learning_language == "ja"
    assert settings.audio_base_url == "https://cdn.example"
    config = settings.quiz_config()
    assert config.batch_size == 5
    assert config.recent_share == 0.5


def test_settings_from_env_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SENTENCE_TUTOR_KNOWN_LANGUAGE", raising=False)
    (tmp_path / ".env").write_text("SENTENCE_TUTOR_KNOWN_LANGUAGE=de\n")
    assert Settings().known_language == "de"


def test_every_quiz_setting_reaches_quiz_config(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    overrides = {
        "RECENT_SHARE": "0.25",
        "PUZZLE_POOL_CAP": "50",
        "TOKEN_DISTRACTORS": "3",
        "TOKEN_CANDIDATE_TARGET": "20",
        "SENTENCE_DISTRACTORS": "2",
        "MIN_PUZZLE_DECOYS": "2",
        "MAX_PUZZLE_DECOYS": "6",
        "LENGTH_SIMILARITY": "0.5",
    }
    for name, value in overrides.items():
        monkeypatch.setenv(f"SENTENCE_TUTOR_{name}", value)
    config = Settings().quiz_config()
    assert config == QuizConfig(
        batch_size=15,
        recent_share=0.25,
        length_similarity=0.5,
        min_puzzle_decoys=2,
        max_puzzle_decoys=6,
        puzzle_pool_cap=50,
        token_distractors=3,
        token_candidate_target=20,
        sentence_distractors=2,
    )
