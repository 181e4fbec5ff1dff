import logging
from enum import Enum

from bf_errors import NonAsciiSource, UnmatchedClosingBracket, UnmatchedOpeningBracket

logger = logging.getLogger(__name__)


class Op(Enum):
    NOOP = ''
    INC_PTR = '>'
    DEC_PTR = '<'
    INC_CELL = '+'
    DEC_CELL = '-'
    OUTPUT = '.'
    INPUT = ','
    LOOP_START = '['
    LOOP_END = ']'


CHAR_TO_OP = {op.value: op for op in Op if op is not Op.NOOP}


class Instruction:
    __slots__ = ('op', 'jump_target')

    def __init__(self, op, jump_target=None):
        self.op = op
        self.jump_target = jump_target

    def __eq__(self, other):
        if not isinstance(other, Instruction):
            return NotImplemented
        return self.op is other.op and self.jump_target == other.jump_target

    def __repr__(self):
        char = self.op.value or 'nop'
        if self.jump_target is not None:
            return f"{char} (target: {self.jump_target})"
        return char


def compile_bf(source):
    """
    Translate source text into a flat list of Instructions.

    Every '[' and ']' comes out with its jump_target pointing at the index
    of its partner, so the VM never has to search for brackets. Characters
    outside the instruction set are comments and produce nothing.
    """
    if not source.isascii():
        raise NonAsciiSource()

    ops = []
    loop_stack = []  # (op index, source offset) of each open '['

    for offset, c in enumerate(source):
        op = CHAR_TO_OP.get(c)
        if op is None:
            continue

        if op is Op.LOOP_START:
            loop_stack.append((len(ops), offset))
            ops.append(Instruction(op))
        elif op is Op.LOOP_END:
            if not loop_stack:
                raise UnmatchedClosingBracket(offset)
            start_pc, _ = loop_stack.pop()
            end_pc = len(ops)
            ops[start_pc].jump_target = end_pc
            ops.append(Instruction(op, jump_target=start_pc))
        else:
            ops.append(Instruction(op))

    if loop_stack:
        _, offset = loop_stack[-1]
        raise UnmatchedOpeningBracket(offset)

    logger.debug("Compiled %d ops (%d loops)", len(ops),
                 sum(1 for ins in ops if ins.op is Op.LOOP_START))
    return ops
