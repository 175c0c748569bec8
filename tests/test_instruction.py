#!/usr/bin/env python3
"""
Alphabet table, instruction records and error formatting.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfparse import SYMBOL_KINDS, BFParseError, ErrorKind, Instruction, InstructionKind
from bfparse.errors import TAPE_LENGTH, make_parse_error
from bfparse.lexer import filter_commands, is_command_char, iter_commands


def test_alphabet_has_fourteen_symbols():
    assert len(SYMBOL_KINDS) == 14
    assert set(SYMBOL_KINDS) == set("><+-.,[]^v()&?")
    assert len(set(SYMBOL_KINDS.values())) == 14


def test_alphabet_is_read_only():
    with pytest.raises(TypeError):
        SYMBOL_KINDS['x'] = InstructionKind.INC_BYTE  # type: ignore[index]


def test_kind_symbol_round_trips():
    for sym, kind in SYMBOL_KINDS.items():
        assert kind.symbol == sym
    assert InstructionKind.LOOP_START.is_loop
    assert InstructionKind.LOOP_END.is_loop
    assert not InstructionKind.ENV_OPEN.is_loop


def test_from_char():
    inst = Instruction.from_char(3, '[', line=2, column=5)
    assert inst.index == 3
    assert inst.kind is InstructionKind.LOOP_START
    assert inst.times == 1
    assert inst.jump == 0
    assert (inst.line, inst.column) == (2, 5)


def test_from_char_rejects_unknown():
    with pytest.raises(ValueError):
        Instruction.from_char(0, 'x')


def test_add_repeat():
    inst = Instruction.from_char(0, '+')
    inst.add_repeat()
    inst.add_repeat()
    assert inst.times == 3


def test_jump_accessors_check_kind():
    start = Instruction.from_char(0, '[')
    end = Instruction.from_char(1, ']')
    start.set_jump(4)
    end.set_jump(1)
    assert start.end_index == 4
    assert end.start_index == 1
    with pytest.raises(TypeError):
        start.start_index
    with pytest.raises(TypeError):
        end.end_index


def test_set_jump_on_plain_instruction_fails():
    with pytest.raises(TypeError):
        Instruction.from_char(0, '.').set_jump(1)


def test_instruction_listing_format():
    inst = Instruction.from_char(2, ']')
    inst.set_jump(1)
    assert str(inst) == "    2  LoopEnd    x1  -> 1"
    assert str(Instruction.from_char(0, '+')) == "    0  IncByte    x1"


def test_filter_keeps_order():
    assert filter_commands("a+b-c[d]e v ^") == "+-[]v^"
    assert is_command_char('?')
    assert not is_command_char('x')


def test_iter_commands_positions():
    cmds = list(iter_commands("+ x\n  ]"))
    assert [(c.char, c.line, c.column) for c in cmds] == [('+', 1, 1), (']', 2, 3)]


def test_error_kinds_are_closed_set():
    assert {k.value for k in ErrorKind} == {
        'PtrBelowZero', 'PtrAboveLimit', 'NonClosedBrackets',
        'NonClosedEnvs', 'NestedEnv', 'InfiniteLoop',
    }
    assert str(TAPE_LENGTH) in ErrorKind.PTR_ABOVE_LIMIT.message


def test_parse_error_message_has_context():
    source = "+++\n+[\n---"
    err = make_parse_error(kind=ErrorKind.NON_CLOSED_BRACKETS, source=source, line=2, column=2)
    assert isinstance(err, BFParseError)
    text = str(err)
    assert text.startswith("NonClosedBrackets: some brackets are unclosed on source code (line 2, column 2)")
    assert ">    2 | +[" in text
    assert err.context.splitlines()[0] == "     1 | +++"


def test_parse_error_without_source():
    err = make_parse_error(kind=ErrorKind.INFINITE_LOOP, source='', line=0, column=0)
    assert err.context == ''
    assert str(err).startswith("InfiniteLoop: potential infinite loop in source code")
    assert "Hint:" in str(err)


def test_crlf_source_context_has_no_carriage_returns():
    source = "+++\r\n+]\r\n---\r\n"
    err = make_parse_error(kind=ErrorKind.NON_CLOSED_BRACKETS, source=source, line=2, column=2)
    assert '\r' not in err.context
    assert ">    2 | +]" in err.context.splitlines()


def test_crlf_does_not_shift_columns():
    cmds = list(iter_commands("+\r\n-"))
    assert [(c.char, c.line, c.column) for c in cmds] == [('+', 1, 1), ('-', 2, 1)]


def test_equality_ignores_source_position():
    a = Instruction.from_char(0, '+', line=1, column=1)
    b = Instruction.from_char(0, '+', line=7, column=3)
    assert a == b
    b.add_repeat()
    assert a != b
