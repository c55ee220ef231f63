import builtins
import sys
from typing import Optional, TextIO
from bisaya.errors import BisayaError, ErrorVal


class BasicIO:
    """Console streams used by IPAKITA and DAWAT.

    When no streams are given the current `sys.stdout` and
    `builtins.input` are used, looked up at call time so that test
    fixtures which replace them are honoured.
    """
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin
        self.stdout = stdout

    def write(self, text: str) -> None:
        out = self.stdout if self.stdout is not None else sys.stdout
        out.write(text)
        out.flush()

    def read_line(self) -> str:
        if self.stdin is not None:
            line = self.stdin.readline()
            if line == '':
                raise BisayaError(ErrorVal('InputError', 'no input available'))
            return line.rstrip('\r\n')
        try:
            return builtins.input()
        except EOFError:
            raise BisayaError(ErrorVal('InputError', 'no input available'))
