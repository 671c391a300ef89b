from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator


def init_store(data_dir: Path) -> None:
    # The backing files themselves are created lazily on first save.
    data_dir.mkdir(parents=True, exist_ok=True)


def read_lines(path: Path) -> Iterator[bytes]:
    """
    Yield the raw lines of a backing file without their terminators.
    Decoding is left to the caller so one bad line cannot spoil the rest.
    A missing file reads as empty; any other I/O error propagates.
    """
    if not path.exists():
        return
    # binary mode: only LF terminates a line, so stray CRs inside fields survive
    with open(path, "rb") as f:
        for line in f:
            yield line[:-1] if line.endswith(b"\n") else line


def write_lines(path: Path, lines: Iterable[str]) -> None:
    # Full overwrite; an interrupted write can leave a truncated file.
    with open(path, "w", encoding="utf-8", newline="") as f:
        for line in lines:
            f.write(line + "\n")
