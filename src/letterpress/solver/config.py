"""Letterpress solver configuration."""

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for the Letterpress move finder."""

    word_list_path: str = "letterpress-dict.txt"
    """Path to the dictionary file (`word frequency` per line)."""

    cache_size: int = 1024
    """Maximum number of entries held by each memoization cache. Default: 1024."""

    max_workers: int | None = None
    """Maximum number of worker processes to use. If None (default), uses os.cpu_count() - 1."""

    parallel_chunk_size: int = 64
    """Number of playable words sent to a worker process per task. Default: 64."""

    verbose: bool = False
    """Whether to print timing and progress messages to stderr. Default: False."""

    model_config = SettingsConfigDict(
        env_prefix="LETTERPRESS_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )


config = SolverConfig()
