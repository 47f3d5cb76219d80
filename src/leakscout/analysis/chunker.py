"""Line-based chunking of large texts for a bounded-context model."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from leakscout.scanner.matcher import split_lines

DEFAULT_CHUNK_LINES = 2000


@dataclass(frozen=True)
class Chunk:
    """One ordered segment of the input. ``index`` starts at 1."""

    index: int
    lines: tuple[str, ...]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)


def iter_chunks(lines: Iterable[str], max_lines: int) -> Iterator[Chunk]:
    """Group *lines* into chunks of exactly *max_lines*, last one shorter.

    No empty chunk is ever produced, so empty input yields nothing.
    """
    if max_lines < 1:
        raise ValueError(f"max_lines must be a positive integer, got {max_lines}")

    buffer: list[str] = []
    index = 0
    for line in lines:
        buffer.append(line)
        if len(buffer) == max_lines:
            index += 1
            yield Chunk(index=index, lines=tuple(buffer))
            buffer = []

    if buffer:
        yield Chunk(index=index + 1, lines=tuple(buffer))


def chunk_text(text: str, max_lines: int = DEFAULT_CHUNK_LINES) -> list[Chunk]:
    return list(iter_chunks(split_lines(text), max_lines))
