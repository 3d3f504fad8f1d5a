"""Common utilities shared across the lookup pipeline."""

from kamus.common.utils import (
    _load_env_file,
    clean_text,
    canonical_word,
    word_to_filename,
    filename_to_word,
    ensure_dir,
)
from kamus.common.logging import (
    log_debug,
    log_error,
    set_thread_log_context,
    clear_thread_log_context,
    setup_thread_prefixed_stdout,
    DEFAULT_PARALLEL_WORKERS,
)
from kamus.common.errors import (
    KamusError,
    UpstreamError,
    CacheWriteError,
)

__all__ = [
    # utils
    "_load_env_file",
    "clean_text",
    "canonical_word",
    "word_to_filename",
    "filename_to_word",
    "ensure_dir",
    # logging
    "log_debug",
    "log_error",
    "set_thread_log_context",
    "clear_thread_log_context",
    "setup_thread_prefixed_stdout",
    "DEFAULT_PARALLEL_WORKERS",
    # errors
    "KamusError",
    "UpstreamError",
    "CacheWriteError",
]
