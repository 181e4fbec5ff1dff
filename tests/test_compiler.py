#!/usr/bin/env python3
'''
Unit tests for the source-to-opcode compiler
'''

from pathlib import Path
import sys
import unittest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bf_compiler import Instruction, Op, compile_bf
from bf_errors import BFError, NonAsciiSource, UnmatchedClosingBracket, UnmatchedOpeningBracket


class TestCompileMapping(unittest.TestCase):
    '''Character to opcode mapping'''

    def test_each_character(self):
        ops = compile_bf('><+-.,')
        self.assertEqual([ins.op for ins in ops],
                         [Op.INC_PTR, Op.DEC_PTR, Op.INC_CELL, Op.DEC_CELL, Op.OUTPUT, Op.INPUT])
        for ins in ops:
            self.assertIsNone(ins.jump_target)

    def test_comments_emit_nothing(self):
        source = 'add two: ++ then print it .\nthe end'
        ops = compile_bf(source)
        self.assertEqual(len(ops), 3)
        self.assertEqual(ops, [Instruction(Op.INC_CELL), Instruction(Op.INC_CELL), Instruction(Op.OUTPUT)])

    def test_op_count_matches_recognized_characters(self):
        for source in ['', '+', '[-]', '>>[<+>-]<.', '+[>,.<-]xyz ']:
            expected = sum(1 for c in source if c in '><+-.,[]')
            self.assertEqual(len(compile_bf(source)), expected, source)

    def test_empty_source(self):
        self.assertEqual(compile_bf(''), [])
        self.assertEqual(compile_bf('no instructions here'), [])

    def test_noop_is_never_emitted(self):
        ops = compile_bf('+[->+<]x y z')
        self.assertNotIn(Op.NOOP, [ins.op for ins in ops])


class TestLoopTargets(unittest.TestCase):
    '''Bracket matching and jump targets'''

    def assert_targets_paired(self, ops):
        for i, ins in enumerate(ops):
            if ins.op is Op.LOOP_START:
                end = ins.jump_target
                self.assertIs(ops[end].op, Op.LOOP_END)
                self.assertEqual(ops[end].jump_target, i)
            elif ins.op is Op.LOOP_END:
                self.assertIs(ops[ins.jump_target].op, Op.LOOP_START)
                self.assertEqual(ops[ins.jump_target].jump_target, i)

    def test_simple_loop(self):
        ops = compile_bf('+[-]')
        self.assertEqual(ops[1], Instruction(Op.LOOP_START, 3))
        self.assertEqual(ops[3], Instruction(Op.LOOP_END, 1))

    def test_nested_loops(self):
        ops = compile_bf('[[][[]]]')
        self.assertEqual([ins.jump_target for ins in ops], [7, 2, 1, 6, 5, 4, 3, 0])
        self.assert_targets_paired(ops)

    def test_deep_nesting(self):
        depth = 200
        ops = compile_bf('[' * depth + '+' + ']' * depth)
        self.assertEqual(len(ops), 2 * depth + 1)
        self.assertEqual(ops[0].jump_target, 2 * depth)
        self.assertEqual(ops[depth - 1].jump_target, depth + 1)
        self.assert_targets_paired(ops)

    def test_targets_skip_comments(self):
        ops = compile_bf('[ loop body: - ]')
        self.assertEqual(ops, [Instruction(Op.LOOP_START, 2), Instruction(Op.DEC_CELL), Instruction(Op.LOOP_END, 0)])


class TestCompileErrors(unittest.TestCase):
    '''Compile-time failures'''

    def test_unmatched_closing_bracket(self):
        with self.assertRaises(UnmatchedClosingBracket) as ctx:
            compile_bf('+-]')
        self.assertEqual(ctx.exception.position, 2)

    def test_unmatched_closing_after_balanced(self):
        with self.assertRaises(UnmatchedClosingBracket) as ctx:
            compile_bf('[-] ]')
        self.assertEqual(ctx.exception.position, 4)

    def test_unmatched_opening_bracket(self):
        with self.assertRaises(UnmatchedOpeningBracket) as ctx:
            compile_bf('[+[-]')
        self.assertEqual(ctx.exception.position, 0)

    def test_unmatched_opening_reports_innermost(self):
        with self.assertRaises(UnmatchedOpeningBracket) as ctx:
            compile_bf('[ [ +')
        self.assertEqual(ctx.exception.position, 2)

    def test_non_ascii_source(self):
        with self.assertRaises(NonAsciiSource):
            compile_bf('+ café .')

    def test_errors_share_base_class(self):
        for source in [']', '[', 'é']:
            with self.assertRaises(BFError):
                compile_bf(source)


class TestInstructionRepr(unittest.TestCase):

    def test_repr(self):
        self.assertEqual(repr(Instruction(Op.INC_CELL)), '+')
        self.assertEqual(repr(Instruction(Op.LOOP_START, 5)), '[ (target: 5)')
        self.assertEqual(repr(Instruction(Op.NOOP)), 'nop')


if __name__ == '__main__':
    unittest.main()
