import io

from kamus.common.logging import (
    _ThreadPrefixedWriter,
    clear_thread_log_context,
    log_debug,
    set_thread_log_context,
)


def test_writer_prefixes_thread_word_and_tag_emoji():
    buffer = io.StringIO()
    writer = _ThreadPrefixedWriter(buffer)

    set_thread_log_context("rumah")
    try:
        writer.write("[kamus] [cache-hit] rumah")
        writer.write("\n")
    finally:
        clear_thread_log_context()
    writer.write("plain line\n")

    first, second = buffer.getvalue().splitlines()
    assert first.startswith("[t")
    assert "[rumah] 🎯 [kamus] [cache-hit] rumah" in first
    assert second.endswith("[main] plain line")


def test_log_debug_respects_flag(capsys):
    log_debug(False, "hidden")
    log_debug(True, "shown")

    assert capsys.readouterr().out == "[debug] shown\n"
