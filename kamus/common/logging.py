"""Logging utilities for the lookup pipeline.

Log lines are plain prints tagged like ``[kamus] [cache-hit] rumah``. When the
thread-prefixed writer is installed, every line additionally carries a short
thread index and the word that thread is currently looking up.
"""

import sys
import threading
from typing import Dict


# Default number of threads used to resolve cross-references within one page
DEFAULT_PARALLEL_WORKERS = 1

# Module-level state
_THREAD_IDX_LOCK = threading.Lock()
_THREAD_IDX_MAP: Dict[int, int] = {}
_THREAD_IDX_NEXT = 0

# Thread-local log context (the word being looked up)
_LOG_CTX = threading.local()

_TAG_EMOJI = {
    "cache-hit": "🎯",
    "cache-miss": "💥",
    "fetch": "🌐",
    "file": "💾",
    "redirect": "↪️",
}


def set_thread_log_context(word: str) -> None:
    """Set the logging context for the current thread."""
    _LOG_CTX.word = word


def clear_thread_log_context() -> None:
    _LOG_CTX.word = ""


def get_thread_log_context() -> str:
    return getattr(_LOG_CTX, "word", "")


def log_debug(enabled: bool, message: str) -> None:
    """Print a debug message if debugging is enabled."""
    if enabled:
        print(f"[debug] {message}")


def log_error(message: str) -> None:
    """Print an error line to stderr regardless of verbosity."""
    print(f"[kamus] [error] {message}", file=sys.stderr)


def _emoji_for(line: str) -> str:
    """Emoji for the status tag following the leading ``[kamus]`` tag, if any."""
    tags = []
    rest = line
    while rest.startswith("[") and len(tags) < 2:
        end = rest.find("]")
        if end == -1:
            break
        tags.append(rest[1:end])
        rest = rest[end + 1:].lstrip()
    for tag in tags:
        if tag in _TAG_EMOJI:
            return _TAG_EMOJI[tag]
    return ""


class _ThreadPrefixedWriter:
    """Wrapper for stdout that adds thread IDs and the current word to output."""

    def __init__(self, wrapped):
        self._wrapped = wrapped
        self._lock = threading.Lock()

    def _prefix(self) -> str:
        global _THREAD_IDX_NEXT
        tid = threading.get_ident()
        # Map OS thread id to small stable index t00..t99
        with _THREAD_IDX_LOCK:
            idx = _THREAD_IDX_MAP.get(tid)
            if idx is None:
                idx = _THREAD_IDX_NEXT
                _THREAD_IDX_MAP[tid] = idx
                _THREAD_IDX_NEXT = (_THREAD_IDX_NEXT + 1) % 100
        word = get_thread_log_context()
        return f"[t{idx:02d}] [{word or 'main'}] "

    def write(self, s: str) -> int:
        if not isinstance(s, str):
            return 0
        # Bare newline from print's second write
        if s == "\n":
            with self._lock:
                self._wrapped.write("\n")
                self._wrapped.flush()
            return 1

        prefix = self._prefix()
        with self._lock:
            parts = s.split("\n")
            has_trailing_newline = len(parts) > 1 and parts[-1] == ""

            for i, part in enumerate(parts):
                if part == "" and i == len(parts) - 1:
                    continue
                emoji = _emoji_for(part)
                self._wrapped.write(prefix + (emoji + " " if emoji else "") + part)
                if i < len(parts) - 1:
                    self._wrapped.write("\n")

            if has_trailing_newline:
                self._wrapped.write("\n")
            self._wrapped.flush()
        return len(s)

    def flush(self) -> None:
        self._wrapped.flush()

    def isatty(self) -> bool:
        try:
            return bool(self._wrapped.isatty())
        except (AttributeError, ValueError):
            return False


def setup_thread_prefixed_stdout() -> None:
    """Set up thread-prefixed stdout writer (idempotent)."""
    if isinstance(sys.stdout, _ThreadPrefixedWriter):
        return
    try:
        sys.stdout.reconfigure(line_buffering=True)  # type: ignore
    except AttributeError:
        pass
    sys.stdout = _ThreadPrefixedWriter(sys.stdout)  # type: ignore
