"""Tunable quiz constants and application settings."""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DB_PATH = str(Path.home() / ".sentence_tutor" / "tutor.db")


@dataclass(frozen=True)
class QuizConfig:
    batch_size: int = 15
    recent_share: float = 0.5
    length_similarity: float = 0.30
    min_puzzle_decoys: int = 4
    max_puzzle_decoys: int = 10
    puzzle_pool_cap: int = 200
    token_distractors: int = 2
    token_candidate_target: int = 10
    sentence_distractors: int = 3


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SENTENCE_TUTOR_", env_file=".env", extra="ignore")

    db_path: str = DEFAULT_DB_PATH
    corpus_path: Optional[str] = None
    audio_base_url: str = ""
    learning_language: str = "fr"
    known_language: str = "en"
    recent_days: int = 7
    log_level: str = "WARNING"

    batch_size: int = 15
    recent_share: float = 0.5
    length_similarity: float = 0.30
    min_puzzle_decoys: int = 4
    max_puzzle_decoys: int = 10
    puzzle_pool_cap: int = 200
    token_distractors: int = 2
    token_candidate_target: int = 10
    sentence_distractors: int = 3
    daily_goal: int = 5

    def quiz_config(self) -> QuizConfig:
        return QuizConfig(
            batch_size=self.batch_size,
            recent_share=self.recent_share,
            length_similarity=self.length_similarity,
            min_puzzle_decoys=self.min_puzzle_decoys,
            max_puzzle_decoys=self.max_puzzle_decoys,
            puzzle_pool_cap=self.puzzle_pool_cap,
            token_distractors=self.token_distractors,
            token_candidate_target=self.token_candidate_target,
            sentence_distractors=self.sentence_distractors,
        )
