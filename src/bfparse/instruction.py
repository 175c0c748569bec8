from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

# ---------------- Command symbols ----------------
INC_PTR = '>'
DEC_PTR = '<'
INC_BYTE = '+'
DEC_BYTE = '-'
WRITE_BYTE = '.'
READ_BYTE = ','
LOOP_START = '['
LOOP_END = ']'
REG_UP = '^'
REG_DOWN = 'v'
ENV_OPEN = '('
ENV_CLOSE = ')'
COPY_FN = '&'
IF_STATEM = '?'


class InstructionKind(Enum):
    INC_PTR = 'IncPtr'
    DEC_PTR = 'DecPtr'
    INC_BYTE = 'IncByte'
    DEC_BYTE = 'DecByte'
    WRITE_BYTE = 'WriteByte'
    READ_BYTE = 'ReadByte'
    LOOP_START = 'LoopStart'
    LOOP_END = 'LoopEnd'
    REG_UP = 'RegUp'
    REG_DOWN = 'RegDown'
    ENV_OPEN = 'EnvOpen'
    ENV_CLOSE = 'EnvClose'
    COPY_FN = 'CopyFn'
    IF_STATEM = 'IfStatem'

    @property
    def is_loop(self) -> bool:
        return self is InstructionKind.LOOP_START or self is InstructionKind.LOOP_END

    @property
    def symbol(self) -> str:
        return KIND_SYMBOLS[self]


SYMBOL_KINDS: Mapping[str, InstructionKind] = MappingProxyType({
    INC_PTR: InstructionKind.INC_PTR,
    DEC_PTR: InstructionKind.DEC_PTR,
    INC_BYTE: InstructionKind.INC_BYTE,
    DEC_BYTE: InstructionKind.DEC_BYTE,
    WRITE_BYTE: InstructionKind.WRITE_BYTE,
    READ_BYTE: InstructionKind.READ_BYTE,
    LOOP_START: InstructionKind.LOOP_START,
    LOOP_END: InstructionKind.LOOP_END,
    REG_UP: InstructionKind.REG_UP,
    REG_DOWN: InstructionKind.REG_DOWN,
    ENV_OPEN: InstructionKind.ENV_OPEN,
    ENV_CLOSE: InstructionKind.ENV_CLOSE,
    COPY_FN: InstructionKind.COPY_FN,
    IF_STATEM: InstructionKind.IF_STATEM,
})

KIND_SYMBOLS: Mapping[InstructionKind, str] = MappingProxyType({k: s for s, k in SYMBOL_KINDS.items()})

INSTRUCTION_CHARS = frozenset(SYMBOL_KINDS)


@dataclass
class Instruction:
    """
    One run-length encoded command.

    `times` counts how many identical source characters were folded into
    this instruction. Loop instructions also carry `jump`, which starts at
    0 and is filled in by the resolver:
      - LoopStart: index of the last instruction of the loop body
      - LoopEnd: index of the first instruction of the loop body

    `line` and `column` point at the first absorbed character and are only
    used for diagnostics.
    """

    index: int
    kind: InstructionKind
    times: int = 1
    jump: int = 0
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    @classmethod
    def from_char(cls, index: int, char: str, *, line: int = 0, column: int = 0) -> 'Instruction':
        kind = SYMBOL_KINDS.get(char)
        if kind is None:
            raise ValueError(f'Unrecognized command: {char!r}')
        return cls(index=index, kind=kind, line=line, column=column)

    def add_repeat(self) -> None:
        self.times += 1

    def set_jump(self, jump_index: int) -> None:
        if not self.kind.is_loop:
            raise TypeError(f'trying to set jump index {jump_index} on {self.kind.value}')
        self.jump = jump_index

    @property
    def end_index(self) -> int:
        if self.kind is not InstructionKind.LOOP_START:
            raise TypeError(f'{self.kind.value} has no end_index')
        return self.jump

    @property
    def start_index(self) -> int:
        if self.kind is not InstructionKind.LOOP_END:
            raise TypeError(f'{self.kind.value} has no start_index')
        return self.jump

    def __str__(self) -> str:
        text = f"{self.index:5d}  {self.kind.value:<10} x{self.times}"
        if self.kind.is_loop:
            text += f"  -> {self.jump}"
        return text
