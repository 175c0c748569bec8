from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .instruction import Instruction, InstructionKind
from .lexer import filter_commands
from .parser import parse_source


@dataclass(frozen=True)
class ParseOptions:
    strict_empty_loops: bool = True
    encoding: str = "utf-8"


@dataclass(frozen=True)
class ParseResult:
    instructions: Tuple[Instruction, ...]
    filtered_length: int
    # (LoopStart index, index of the LoopEnd that balances it)
    loop_pairs: Tuple[Tuple[int, int], ...]


def parse_string(source: str, *, options: Optional[ParseOptions] = None) -> ParseResult:
    opts = options or ParseOptions()
    insts = parse_source(source, strict_empty_loops=opts.strict_empty_loops)
    pairs = tuple(
        (inst.index, inst.end_index + 1)
        for inst in insts
        if inst.kind is InstructionKind.LOOP_START
    )
    return ParseResult(
        instructions=tuple(insts),
        filtered_length=len(filter_commands(source)),
        loop_pairs=pairs,
    )


def parse_file(path: str | Path, *, options: Optional[ParseOptions] = None) -> ParseResult:
    opts = options or ParseOptions()
    p = Path(path)
    return parse_string(p.read_text(encoding=opts.encoding), options=opts)
