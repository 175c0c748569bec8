from .api import ParseOptions, ParseResult, parse_file, parse_string
from .errors import BFError, BFParseError, ErrorKind
from .instruction import SYMBOL_KINDS, Instruction, InstructionKind
from .lexer import filter_commands
from .parser import count_kinds, emit, encode, parse_source, resolve_jumps

__all__ = [
    'Instruction',
    'InstructionKind',
    'SYMBOL_KINDS',
    'filter_commands',
    'encode',
    'resolve_jumps',
    'parse_source',
    'emit',
    'count_kinds',
    'BFError',
    'BFParseError',
    'ErrorKind',
    'ParseOptions',
    'ParseResult',
    'parse_string',
    'parse_file',
]
