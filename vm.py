import sys

import colorama
from colorama import Fore, Style

from errors import AllocationFailure, BfError, BfRuntimeError, MemoryUnderflow


INC = ord("+")
DEC = ord("-")
RIGHT = ord(">")
LEFT = ord("<")
READ = ord(",")
WRITE = ord(".")
LOOP_OPEN = ord("[")
LOOP_CLOSE = ord("]")
COMMENT = ord(";")
DEBUG = ord("#")

MIN_TAPE_SIZE = 8     # added to the program length before rounding up
CELL_MASK = 0xFF      # cells are unsigned bytes
DEBUG_WINDOW = 8      # cells shown on each side of the pointer by '#'

RUNNING = "running"
HALTED = "halted"
FAILED = "failed"


def next_pow2(n: int) -> int:
    size = 1
    while size < n:
        size <<= 1
    return size


class VM:
    def __init__(
        self,
        program,
        comment_enabled: bool = False,
        debug_enabled: bool = False,
        stdin=None,
        stdout=None,
        stderr=None,
        color: bool = False,
    ):
        self.program = program
        self.code = program.code

        self.comment_enabled = comment_enabled
        self.debug_enabled = debug_enabled

        # program I/O is bytes; diagnostics ('#' snapshots) are text
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.stderr = stderr if stderr is not None else sys.stderr

        self.color = color
        self._colorama_inited = False

        self.ip = 0       # instruction cursor
        self.ptr = 0      # memory cursor
        self.state = RUNNING

        size = next_pow2(len(self.code) + MIN_TAPE_SIZE)
        try:
            self.tape = bytearray(size)
        except MemoryError:
            self.state = FAILED
            raise AllocationFailure(size, ip=0, ptr=0)

    def _ensure_colorama(self):
        if self._colorama_inited:
            return
        self._colorama_inited = True
        colorama.just_fix_windows_console()

    def grow(self):
        """Double the tape. Existing cells keep their values, new ones are zero."""
        old_size = len(self.tape)
        new_size = next_pow2(old_size + 1)
        try:
            # build the zero block first so a failure leaves the tape untouched
            extra = bytes(new_size - old_size)
        except MemoryError:
            raise AllocationFailure(new_size, ip=self.ip, ptr=self.ptr)
        self.tape.extend(extra)

    def read_byte(self):
        # flush pending output so prompts show up before we block
        self.stdout.flush()
        data = self.stdin.read(1)
        if not data:
            return None  # end of input
        return data[0]

    def skip_comment(self):
        # ip is on ';'; leave it on the terminating newline (or the last byte)
        end = self.code.find(b"\n", self.ip + 1)
        if end == -1:
            end = len(self.code) - 1
        self.ip = end

    def snapshot(self) -> str:
        color = self.color
        if color:
            self._ensure_colorama()

        cells = []
        for i in range(self.ptr - DEBUG_WINDOW, self.ptr + DEBUG_WINDOW + 1):
            if i < 0:
                text = "--"
            elif i < len(self.tape):
                text = f"{self.tape[i]:02X}"
            else:
                text = "00"  # not allocated yet, reads as zero
            if color and i == self.ptr:
                text = f"{Style.BRIGHT}{Fore.YELLOW}{text}{Style.RESET_ALL}"
            cells.append(text)

        caret = " " * (DEBUG_WINDOW * 3) + "^^"
        info = f"ip={self.ip:04d} ptr={self.ptr} value={self.tape[self.ptr]}"
        return "\n".join([" ".join(cells), caret, info])

    def dump(self):
        self.stdout.flush()
        self.stderr.write("\n" + self.snapshot() + "\n")
        self.stderr.flush()

    def step(self) -> bool:
        if self.ip >= len(self.code):
            self.state = HALTED
            return True

        op = self.code[self.ip]

        if op == INC:
            self.tape[self.ptr] = (self.tape[self.ptr] + 1) & CELL_MASK

        elif op == DEC:
            self.tape[self.ptr] = (self.tape[self.ptr] - 1) & CELL_MASK

        elif op == RIGHT:
            self.ptr += 1
            if self.ptr > len(self.tape) // 2:
                self.grow()

        elif op == LEFT:
            if self.ptr == 0:
                raise MemoryUnderflow(ip=self.ip, ptr=self.ptr)
            self.ptr -= 1

        elif op == READ:
            value = self.read_byte()
            if value is not None:
                self.tape[self.ptr] = value

        elif op == WRITE:
            self.stdout.write(bytes((self.tape[self.ptr],)))

        elif op == LOOP_OPEN:
            if self.tape[self.ptr] == 0:
                self.ip = self.program.target(self.ip)

        elif op == LOOP_CLOSE:
            if self.tape[self.ptr] != 0:
                self.ip = self.program.target(self.ip)

        elif op == COMMENT:
            if self.comment_enabled:
                self.skip_comment()

        elif op == DEBUG:
            if self.debug_enabled:
                self.dump()

        self.ip += 1
        if self.ip >= len(self.code):
            self.state = HALTED
            return True
        return False

    def run(self):
        try:
            while True:
                halted = self.step()
                if halted:
                    break
        except BfError:
            self.state = FAILED
            raise
        except MemoryError:
            self.state = FAILED
            raise AllocationFailure(len(self.tape) * 2, ip=self.ip, ptr=self.ptr)
        except Exception as e:
            self.state = FAILED
            raise BfRuntimeError(str(e), ip=self.ip, ptr=self.ptr)
        finally:
            self.stdout.flush()
