"""Artifact file helpers for the dictionary directory."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from kamus.common.utils import ensure_dir, filename_to_word, word_to_filename


def get_cache_path(cache_dir: Path, word: str) -> Path:
    """Get the artifact file path for a word.

    Args:
        cache_dir: Dictionary directory
        word: Word as requested; canonicalized to lowercase with underscores
    """
    return cache_dir / word_to_filename(word)


def scan_cache_dir(cache_dir: Path) -> Dict[str, Path]:
    """Map every artifact in the directory to its word. Missing dir maps to nothing."""
    if not cache_dir.is_dir():
        return {}
    return {
        filename_to_word(path.name): path
        for path in sorted(cache_dir.glob("*.json"))
        if path.is_file()
    }


def read_cache_bytes(path: Path) -> Optional[bytes]:
    """Raw artifact bytes, or None if the file is gone."""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def write_cache(
    cache_dir: Path,
    word: str,
    data: List[Dict[str, Any]],
    verbose: bool = False,
    log_prefix: str = "kamus",
) -> Path:
    """Write an artifact as pretty-printed JSON and return its path.

    Args:
        cache_dir: Dictionary directory
        word: Word the artifact belongs to
        data: JSON-ready list of definitions
        verbose: Enable verbose logging
        log_prefix: Prefix for log messages
    """
    ensure_dir(cache_dir)
    cache_path = get_cache_path(cache_dir, word)
    cache_path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    if verbose:
        print(f"[{log_prefix}] [file] Saved: {cache_path.name}")
    return cache_path


__all__ = [
    "get_cache_path",
    "scan_cache_dir",
    "read_cache_bytes",
    "write_cache",
]
