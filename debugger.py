#!/usr/bin/env python3
import argparse
import io
import sys

from bf_errors import BFError
from bf_runner import TAPE_SIZE, Program

TAPE_WINDOW = 8
CODE_WINDOW = 2


class Colors:
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    REVERSE = '\033[7m'


class Debugger:
    def __init__(self, code, input_text=''):
        self.output = io.StringIO()
        self.program = Program(code, input_text, out=self.output)
        self.breakpoints = set()
        self.error = None

    @property
    def finished(self):
        return self.error is not None or self.program.finished

    def run_step(self):
        if self.finished:
            return False
        try:
            return self.program.run_step()
        except BFError as e:
            self.error = e
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            return False

    def continue_run(self):
        """Step until the program ends or ip reaches a breakpoint."""
        while self.run_step():
            if self.program.ip in self.breakpoints:
                print(f"Breakpoint hit at {self.program.ip}")
                return True
        return False

    def toggle_breakpoint(self, ip):
        if ip in self.breakpoints:
            self.breakpoints.remove(ip)
            return False
        self.breakpoints.add(ip)
        return True

    def memory_dump(self, addr, count):
        return [((addr + i) % TAPE_SIZE, self.program.tape[(addr + i) % TAPE_SIZE])
                for i in range(count)]

    def print_state(self):
        prog = self.program
        print(f"\n{Colors.BOLD}--- Step {prog.step_count} ---{Colors.ENDC}")
        print(f"IP: {prog.ip} / {len(prog.ops)}")
        print(f"Ptr: {prog.ptr}")

        # Tape window around ptr, wrapping at the tape ends
        tape_str = ""
        for addr, val in self.memory_dump(prog.ptr - TAPE_WINDOW, 2 * TAPE_WINDOW + 1):
            if addr == prog.ptr:
                tape_str += f"{Colors.REVERSE}[{val:03}]{Colors.ENDC} "
            else:
                tape_str += f" {val:03}  "
        print(f"Loc: {tape_str}")

        start_op = max(0, prog.ip - CODE_WINDOW)
        end_op = min(len(prog.ops), prog.ip + CODE_WINDOW + 1)
        for i in range(start_op, end_op):
            marker = "*" if i in self.breakpoints else " "
            if i == prog.ip:
                print(f"{Colors.GREEN}->{marker}{i:04}: {prog.ops[i]}{Colors.ENDC}")
            else:
                print(f"  {marker}{i:04}: {prog.ops[i]}")

        out = self.output.getvalue()
        if out:
            print(f"{Colors.CYAN}Output:{Colors.ENDC} {out!r}")

    def run(self):
        print("BF Debugger started. Commands: (s)tep, (c)ontinue, (b)reak <ip>, (m)em dump [addr] [count], (q)uit, enter to repeat last")
        last_cmd = 's'
        while not self.finished:
            self.print_state()
            try:
                cmd = input(f"{Colors.BLUE}(bf-dbg){Colors.ENDC} ").strip()
            except EOFError:
                break

            if cmd == '':
                cmd = last_cmd
            last_cmd = cmd

            if cmd.startswith('s'):
                self.run_step()
            elif cmd.startswith('c'):
                self.continue_run()
            elif cmd.startswith('q'):
                break
            elif cmd.startswith('m'):
                parts = cmd.split()
                try:
                    addr = int(parts[1]) if len(parts) > 1 else self.program.ptr
                    count = int(parts[2]) if len(parts) > 2 else 20
                except ValueError:
                    print("Usage: m [addr] [count]")
                    continue
                print("Memory Dump:")
                for a, val in self.memory_dump(addr, count):
                    print(f"[{a:05}]: {val}")
            elif cmd.startswith('b'):
                parts = cmd.split()
                try:
                    bp = int(parts[1])
                except (IndexError, ValueError):
                    print("Usage: b <ip>")
                    continue
                if self.toggle_breakpoint(bp):
                    print(f"Breakpoint set at {bp}")
                else:
                    print(f"Breakpoint removed at {bp}")
            else:
                print(f"Unknown command: {cmd}")

        if self.program.finished:
            self.output.write('\n')
        print(f"Execution finished. Output: {self.output.getvalue()!r}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Step through a tape-language program.")
    parser.add_argument('source', help="path to the program source file")
    parser.add_argument('input', nargs='?', default='', help="program input (ASCII)")
    args = parser.parse_args(argv)

    # latin-1 decodes any byte, so a non-ASCII file surfaces as NonAsciiSource
    try:
        with open(args.source, 'r', encoding='latin-1') as f:
            code = f.read()
        dbg = Debugger(code, args.input)
    except (OSError, BFError) as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 1

    dbg.run()
    return 1 if dbg.error else 0


if __name__ == '__main__':
    sys.exit(main())
