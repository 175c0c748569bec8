from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .instruction import INSTRUCTION_CHARS


@dataclass(frozen=True)
class Command:
    char: str
    line: int
    column: int


def is_command_char(ch: str) -> bool:
    return ch in INSTRUCTION_CHARS


def iter_commands(source: str) -> Iterator[Command]:
    """Yield every recognized command with its 1-based line and column."""
    line = 1
    column = 0
    for ch in source:
        if ch == '\n':
            line += 1
            column = 0
            continue
        column += 1
        if is_command_char(ch):
            yield Command(ch, line, column)


def filter_commands(source: str) -> str:
    # Comments, whitespace and anything else outside the alphabet are dropped.
    return ''.join(ch for ch in source if is_command_char(ch))
