"""Service configuration for the dictionary lookup.

A kamus.config.json file can specify:
- dictionary_dir: folder holding one <word>.json artifact per resolved word
- words_file: JSON array of known words (the validity gate's vocabulary)
- base_url: upstream dictionary host (KAMUS_BASE_URL overrides it)
- timeout: seconds per upstream request
- max_redirect_depth: how deep cross-references are followed
- workers: threads used to resolve cross-references within one page
- single_flight: share one resolution between concurrent misses for a word
- background_persist: write artifacts on a detached worker
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from kamus.common.logging import DEFAULT_PARALLEL_WORKERS
from kamus.common.utils import _load_env_file


CONFIG_FILENAME = "kamus.config.json"
DEFAULT_BASE_URL = "https://kbbi.kemdikbud.go.id"


@dataclass
class ServiceConfig:
    """Configuration for a lookup service instance."""
    dictionary_dir: str = "data/dictionary"  # Relative to the config folder
    words_file: str = "data/words.json"  # Relative to the config folder
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 20.0
    max_redirect_depth: int = 3
    workers: int = DEFAULT_PARALLEL_WORKERS
    single_flight: bool = True
    background_persist: bool = False

    def __post_init__(self):
        self.base_url = self.base_url.rstrip("/")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got '{self.base_url}'")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_redirect_depth < 0:
            raise ValueError(f"max_redirect_depth must be >= 0, got {self.max_redirect_depth}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")


def load_service_config(config_path: Optional[Path] = None, verbose: bool = False) -> ServiceConfig:
    """Load configuration from a kamus.config.json file.

    Missing file or missing keys fall back to defaults. KAMUS_BASE_URL (from
    the environment or a .env file) wins over the file's base_url.
    """
    _load_env_file(verbose)

    data = {}
    if config_path is not None and config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = json.load(f)
        if isinstance(loaded, dict):
            data = loaded

    base_url = os.environ.get("KAMUS_BASE_URL") or data.get("base_url", DEFAULT_BASE_URL)

    return ServiceConfig(
        dictionary_dir=data.get("dictionary_dir", "data/dictionary"),
        words_file=data.get("words_file", "data/words.json"),
        base_url=base_url,
        timeout=float(data.get("timeout", 20.0)),
        max_redirect_depth=int(data.get("max_redirect_depth", 3)),
        workers=int(data.get("workers", DEFAULT_PARALLEL_WORKERS)),
        single_flight=bool(data.get("single_flight", True)),
        background_persist=bool(data.get("background_persist", False)),
    )


def resolve_path(config_folder: Path, value: str) -> Path:
    """Resolve a config path relative to the folder holding the config file."""
    return (config_folder / value).resolve()


def get_dictionary_dir(config_folder: Path, config: ServiceConfig) -> Path:
    """Get the resolved artifact directory from config."""
    return resolve_path(config_folder, config.dictionary_dir)


def get_words_file(config_folder: Path, config: ServiceConfig) -> Path:
    """Get the resolved bootstrap word list path from config."""
    return resolve_path(config_folder, config.words_file)
