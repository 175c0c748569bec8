from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

TAPE_LENGTH = 30_000


class ErrorKind(Enum):
    PTR_BELOW_ZERO = 'PtrBelowZero'
    PTR_ABOVE_LIMIT = 'PtrAboveLimit'
    NON_CLOSED_BRACKETS = 'NonClosedBrackets'
    NON_CLOSED_ENVS = 'NonClosedEnvs'
    NESTED_ENV = 'NestedEnv'
    INFINITE_LOOP = 'InfiniteLoop'

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorKind.PTR_BELOW_ZERO: 'mem pointer went below zero',
    ErrorKind.PTR_ABOVE_LIMIT: f'mem pointer went above limit {TAPE_LENGTH}',
    ErrorKind.NON_CLOSED_BRACKETS: 'some brackets are unclosed on source code',
    ErrorKind.NON_CLOSED_ENVS: 'some environments (parentheses) are unclosed in your source code',
    ErrorKind.NESTED_ENV: 'environment nesting is not allowed',
    ErrorKind.INFINITE_LOOP: 'potential infinite loop in source code',
}


def _build_context(lines: List[str], line_no_1: int, *, context: int = 2) -> str:
    if not lines or line_no_1 < 1:
        return ''
    idx = min(line_no_1, len(lines))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
    return "\n".join(out)


def _hint_for(kind: ErrorKind, message: str) -> Optional[str]:
    msg = message.lower()
    if kind is ErrorKind.NON_CLOSED_BRACKETS:
        if 'unexpected' in msg:
            return 'This "]" has no matching "[" before it.'
        if 'never closed' in msg:
            return 'Add the missing "]" or remove the extra "[".'
        return None
    if kind is ErrorKind.INFINITE_LOOP:
        return 'Empty loops ("[]") are rejected; put at least one instruction in the loop body.'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFParseError(BFError):
    kind: ErrorKind
    line: int
    column: int
    context: str


def make_parse_error(*, kind: ErrorKind, source: str, line: int, column: int, detail: str = '') -> BFParseError:
    text = kind.message if not detail else f"{kind.message}: {detail}"
    where = f" (line {line}, column {column})" if line > 0 else ""
    ctx = _build_context([ln.rstrip('\r') for ln in source.split('\n')], line) if source else ''
    ctx_block = f"\n{ctx}" if ctx else ""
    hint = _hint_for(kind, text)
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFParseError(
        message=f"{kind.value}: {text}{where}{ctx_block}{hint_block}",
        kind=kind,
        line=line,
        column=column,
        context=ctx,
    )
