"""
Configuration settings for binrecord.

Uses Pydantic Settings to load environment variables for the codec layout,
file locations, logging and benchmark defaults.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Codec
    codec_layout: str = Field("portable", alias="CODEC_LAYOUT")

    # Files
    data_dir: Path = Field(Path("data"), alias="DATA_DIR")
    record_filename: str = Field("students.bin", alias="RECORD_FILENAME")
    demo_dir: Path = Field(Path("my_demo_directory"), alias="DEMO_DIR")
    results_dir: Path = Field(Path("results"), alias="RESULTS_DIR")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Benchmark defaults
    bench_records: int = Field(10_000, alias="BENCH_RECORDS", ge=1)
    bench_runs: int = Field(1, alias="BENCH_RUNS", ge=1)
    bench_seed: int = Field(42, alias="BENCH_SEED")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def record_path(self) -> Path:
        return self.data_dir / self.record_filename


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
