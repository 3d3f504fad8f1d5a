"""Common utility functions shared across the library."""

import os
import re
from pathlib import Path


_DEF_ENV_LOADED = False


def _load_env_file(verbose: bool = False) -> None:
    """Load environment variables from .env file if present."""
    global _DEF_ENV_LOADED
    if _DEF_ENV_LOADED:
        return
    _DEF_ENV_LOADED = True
    # Look for .env in kamus/common/../.. (project root) or kamus/common/..
    here = Path(__file__).parent
    candidates = [
        here.parent.parent / ".env",  # project root
        here.parent / ".env",
        Path.cwd() / ".env",
    ]
    for p in candidates:
        if not p.exists():
            continue
        try:
            lines = p.read_text(encoding="utf-8", errors="ignore").splitlines()
        except OSError as e:
            if verbose:
                print(f"[kamus] [warn] Skipping unreadable {p}: {e}")
            continue
        for raw in lines:
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export "):].strip()
            if "=" not in line:
                continue
            k, v = line.split("=", 1)
            key = k.strip()
            val = v.strip().strip('"').strip("'")
            if key and os.environ.get(key) is None:
                os.environ[key] = val


def clean_text(text: str) -> str:
    """Trim and drop homograph digits and slash markers (e.g. ``/apêl/``, ``ru.mah2``)."""
    return re.sub(r"[\d/]", "", text.strip()).strip()


def canonical_word(word: str) -> str:
    """Lowercase a word and collapse whitespace runs to single spaces."""
    return " ".join(word.lower().split())


def word_to_filename(word: str) -> str:
    """Artifact file name for a word: ``anak emas`` -> ``anak_emas.json``."""
    return canonical_word(word).replace(" ", "_") + ".json"


def filename_to_word(name: str) -> str:
    """Inverse of ``word_to_filename``."""
    stem = name[: -len(".json")] if name.endswith(".json") else name
    return canonical_word(stem.replace("_", " "))


def ensure_dir(path: Path) -> None:
    """Create directory if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
