from __future__ import annotations

from pathlib import Path

DEFAULT_CHUNK_SIZE = 64 * 1024


def first_line(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    line_ending: str = "\n",
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """
    Return the first line of `path`, without loading the whole file.

    Chunks are read until `line_ending` shows up or EOF is hit, whichever comes first.
    Everything before the terminator is decoded and returned, with a leading byte-order-mark
    stripped. A file with no terminator returns its whole content. Bytes that are not valid
    in `encoding` decode to U+FFFD, so binary or differently-encoded files never raise here.

    Raises `OSError` when `path` cannot be opened.
    """
    terminator = line_ending.encode(encoding)
    acc = bytearray()
    searched = 0    # bytes of `acc` already known not to start a terminator

    with open(path, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            acc += chunk
            index = acc.find(terminator, searched)
            if index != -1:
                del acc[index:]
                break
            # a terminator may straddle two chunks
            searched = max(0, len(acc) - len(terminator) + 1)

    text = bytes(acc).decode(encoding, errors="replace")
    return text[1:] if text.startswith("\ufeff") else text
