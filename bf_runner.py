#!/usr/bin/env python3
import argparse
import logging
import sys

from bf_compiler import Op, compile_bf
from bf_errors import BFError, InputExhausted, NonAsciiInput, NonAsciiSource

logger = logging.getLogger(__name__)

TAPE_SIZE = 32000


class Program:
    """
    A compiled program together with the machine state it runs against.

    The pointer starts in the middle of the tape so programs can move left
    of their starting cell. Output goes to `out`, or to whatever sys.stdout
    is at the time of writing when `out` is None.
    """

    def __init__(self, source, input_text='', out=None):
        # compile_bf checks the source too; checking here keeps it ahead of the input check
        if not source.isascii():
            raise NonAsciiSource()
        if not input_text.isascii():
            raise NonAsciiInput()

        self.ops = compile_bf(source)
        self.tape = bytearray(TAPE_SIZE)
        self.ptr = TAPE_SIZE // 2
        self.ip = 0
        self.input = iter(input_text.encode('ascii'))
        self.out = out
        self.step_count = 0

    @property
    def finished(self):
        return self.ip >= len(self.ops)

    def _write(self, char):
        out = self.out if self.out is not None else sys.stdout
        out.write(char)
        if hasattr(out, 'flush'):
            out.flush()

    def run_step(self):
        if self.ip >= len(self.ops):
            return False

        ins = self.ops[self.ip]
        op = ins.op
        self.step_count += 1

        if op is Op.INC_PTR:
            self.ptr = (self.ptr + 1) % TAPE_SIZE
        elif op is Op.DEC_PTR:
            self.ptr = (self.ptr - 1) % TAPE_SIZE
        elif op is Op.INC_CELL:
            self.tape[self.ptr] = (self.tape[self.ptr] + 1) % 256
        elif op is Op.DEC_CELL:
            self.tape[self.ptr] = (self.tape[self.ptr] - 1) % 256
        elif op is Op.OUTPUT:
            self._write(chr(self.tape[self.ptr]))
        elif op is Op.INPUT:
            byte = next(self.input, None)
            if byte is None:
                raise InputExhausted(self.ip)
            self.tape[self.ptr] = byte
        elif op is Op.LOOP_START:
            if self.tape[self.ptr] == 0:
                self.ip = ins.jump_target
        elif op is Op.LOOP_END:
            if self.tape[self.ptr] != 0:
                self.ip = ins.jump_target
        # Op.NOOP: nothing to do

        # A taken jump lands on the partner bracket; this moves one past it.
        self.ip += 1
        return True

    def run(self):
        while self.run_step():
            pass
        logger.debug("Halted after %d steps", self.step_count)
        self._write('\n')


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compile and run a tape-language program.")
    parser.add_argument('source', help="path to the program source file")
    parser.add_argument('input', nargs='?', default='', help="program input (ASCII)")
    parser.add_argument('--debug', action='store_true', help="open the interactive debugger")
    parser.add_argument('-v', '--verbose', action='store_true', help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(name)s: %(message)s')

    # Imported here: debugger imports this module.
    from debugger import Colors, Debugger

    # latin-1 decodes any byte, so a non-ASCII file surfaces as NonAsciiSource
    try:
        with open(args.source, 'r', encoding='latin-1') as f:
            code = f.read()
    except OSError as e:
        print(f"{Colors.FAIL}Error: cannot read {args.source}: {e.strerror}{Colors.ENDC}", file=sys.stderr)
        return 1

    try:
        if args.debug:
            dbg = Debugger(code, args.input)
            dbg.run()
            return 1 if dbg.error else 0
        Program(code, args.input).run()
    except BFError as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
