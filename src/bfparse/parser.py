from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from .errors import ErrorKind, make_parse_error
from .instruction import LOOP_END, LOOP_START, Instruction, InstructionKind
from .lexer import iter_commands

logger = logging.getLogger(__name__)


# ---------------- Pass 1: run-length encoding ----------------
def encode(source: str) -> List[Instruction]:
    """
    Turn source text into run-length encoded instructions.

    Only the immediately preceding instruction is considered for merging, so
    `+>+` stays three instructions. Loop jumps are left at 0; see
    resolve_jumps().

    Raises BFParseError(NON_CLOSED_BRACKETS) on the first "]" with no open
    loop, or at the end of input if a "[" was never closed.
    """
    insts: List[Instruction] = []
    # (line, column) of every "[" still open, innermost last
    open_loops: List[Tuple[int, int]] = []

    for cmd in iter_commands(source):
        if cmd.char == LOOP_END:
            if not open_loops:
                raise make_parse_error(
                    kind=ErrorKind.NON_CLOSED_BRACKETS,
                    source=source,
                    line=cmd.line,
                    column=cmd.column,
                    detail='unexpected "]"',
                )
            open_loops.pop()
        elif cmd.char == LOOP_START:
            open_loops.append((cmd.line, cmd.column))

        cur = Instruction.from_char(len(insts), cmd.char, line=cmd.line, column=cmd.column)
        if insts and insts[-1].kind is cur.kind:
            insts[-1].add_repeat()
        else:
            insts.append(cur)

    if open_loops:
        line, column = open_loops[-1]
        raise make_parse_error(
            kind=ErrorKind.NON_CLOSED_BRACKETS,
            source=source,
            line=line,
            column=column,
            detail=f'{len(open_loops)} "[" never closed',
        )

    logger.debug("encoded %d instructions", len(insts))
    return insts


# ---------------- Pass 2: jump resolution ----------------
def _find_loop_end(insts: List[Instruction], i: int) -> int:
    # Stacked opens folded into one instruction all count towards the balance.
    balance = insts[i].times
    for j in range(i + 1, len(insts)):
        kind = insts[j].kind
        if kind is InstructionKind.LOOP_START:
            balance += insts[j].times
        elif kind is InstructionKind.LOOP_END:
            balance = max(balance - insts[j].times, 0)
            if balance == 0:
                return j
    raise RuntimeError(f'no matching loop end for instruction {i}; brackets were not validated')


def _find_loop_start(insts: List[Instruction], i: int) -> int:
    balance = 1
    for j in range(i - 1, -1, -1):
        kind = insts[j].kind
        if kind is InstructionKind.LOOP_END:
            balance += insts[j].times
        elif kind is InstructionKind.LOOP_START:
            balance = max(balance - insts[j].times, 0)
            if balance == 0:
                return j
    raise RuntimeError(f'no matching loop start for instruction {i}; brackets were not validated')


def resolve_jumps(insts: List[Instruction], *, source: str = '', strict_empty_loops: bool = True) -> List[Instruction]:
    """
    Fill in the jump index of every loop instruction, in place.

    A LoopStart points at the instruction just before its balancing LoopEnd
    (the end of the body); a LoopEnd points at the instruction just after its
    balancing LoopStart (the start of the body). Balances are weighted by
    `times`, since `[[` is a single instruction standing for two opens.

    A LoopEnd that directly follows its balancing LoopStart has an empty body
    and raises BFParseError(INFINITE_LOOP) unless strict_empty_loops is off.
    With strict_empty_loops off, such a LoopStart's jump is its own index
    and the LoopEnd's jump is its own index too, so callers must not assume
    a LoopStart never points at itself in lenient output.

    Must only be called on the output of encode(); running it again on an
    already resolved list yields the same indices.
    """
    loops = 0
    for i, inst in enumerate(insts):
        if inst.kind is InstructionKind.LOOP_START:
            j = _find_loop_end(insts, i)
            inst.set_jump(j - 1)
            loops += 1
        elif inst.kind is InstructionKind.LOOP_END:
            j = _find_loop_start(insts, i)
            if i == j + 1 and strict_empty_loops:
                opener = insts[j]
                raise make_parse_error(
                    kind=ErrorKind.INFINITE_LOOP,
                    source=source,
                    line=opener.line,
                    column=opener.column,
                    detail='loop body is empty',
                )
            inst.set_jump(j + 1)
            loops += 1

    logger.debug("resolved %d loop instructions", loops)
    return insts


def parse_source(source: str, *, strict_empty_loops: bool = True) -> List[Instruction]:
    """Encode and resolve `source`. Either every jump is set or an error is raised."""
    insts = encode(source)
    return resolve_jumps(insts, source=source, strict_empty_loops=strict_empty_loops)


# ---------------- Emit + counts ----------------
def emit(insts: List[Instruction]) -> str:
    return ''.join(inst.kind.symbol * inst.times for inst in insts)


def count_kinds(insts: List[Instruction]) -> Dict[InstructionKind, int]:
    counts: Dict[InstructionKind, int] = {}
    for inst in insts:
        counts[inst.kind] = counts.get(inst.kind, 0) + inst.times
    return counts
