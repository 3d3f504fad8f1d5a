#!/usr/bin/env python3
"""Look up KBBI definitions from the command line.

Each word goes through the same cache-aside pipeline an HTTP front end
would call, and its outcome is reported the way that front end answers
GET /{word}:
    200  JSON array of definitions
    404  {"message": "Not Found"}
    500  {"message": "Internal Server Error"}

Usage:
    python define.py rumah jaman --config kamus.config.json --verbose
"""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, List, Optional, Tuple

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from kamus.common.config import CONFIG_FILENAME, load_service_config
from kamus.common.errors import UpstreamError
from kamus.common.logging import log_error, setup_thread_prefixed_stdout
from kamus.lookup.service import LookupService, build_service
from kamus.schema.artifact import definitions_to_data


NOT_FOUND = {"message": "Not Found"}
INTERNAL_ERROR = {"message": "Internal Server Error"}


def lookup_with_retry(service: LookupService, word: str, retries: int = 0, wait=None):
    """Run a lookup, retrying upstream failures with exponential backoff."""
    for attempt in Retrying(
        reraise=True,
        stop=stop_after_attempt(retries + 1),
        wait=wait or wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type(UpstreamError),
    ):
        with attempt:
            return service.lookup(word)


def respond(service: LookupService, word: str, retries: int = 0) -> Tuple[int, Any, str]:
    """Map one lookup onto (status, body, X-Response-Time value)."""
    start = time.monotonic()
    try:
        definitions = lookup_with_retry(service, word, retries)
        if definitions is None:
            status, body = 404, NOT_FOUND
        else:
            status, body = 200, definitions_to_data(definitions)
    except Exception as e:
        log_error(f"{word}: {e}")
        status, body = 500, INTERNAL_ERROR
    elapsed_ms = int((time.monotonic() - start) * 1000)
    return status, body, f"{elapsed_ms}ms"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command-line lookups."""
    parser = argparse.ArgumentParser(
        description="Resolve words to KBBI definitions, caching every artifact"
    )
    parser.add_argument(
        "words",
        nargs="+",
        help="Words to look up",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=CONFIG_FILENAME,
        help=f"Path to {CONFIG_FILENAME} (default: ./{CONFIG_FILENAME}, optional)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=0,
        help="Extra attempts after an upstream failure (default: 0)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Delay between words in seconds (default: 0)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    config_path = Path(args.config)
    try:
        config = load_service_config(config_path, verbose=args.verbose)
    except ValueError as e:
        print(f"[error] Invalid config {config_path}: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        setup_thread_prefixed_stdout()

    try:
        service = build_service(
            config,
            config_path.resolve().parent,
            verbose=args.verbose,
            debug=args.debug,
        )
    except (OSError, ValueError) as e:
        print(f"[error] Could not start lookup service: {e}", file=sys.stderr)
        return 2

    exit_code = 0
    with service:
        for i, word in enumerate(args.words):
            if i and args.delay > 0:
                time.sleep(args.delay)
            status, body, elapsed = respond(service, word, args.retries)
            if args.verbose:
                print(f"[kamus] [{status}] {word} - {elapsed}")
            print(json.dumps(body, ensure_ascii=False, indent=2))
            if status == 500:
                exit_code = 1
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
