# Bisaya++ language package
# This package provides a parser and interpreter for the Bisaya++ language.
from .interpreter import run_program, compile_module, Interpreter
from .errors import BisayaError
from .parser import parse_program

__all__ = [
    'run_program',
    'compile_module',
    'parse_program',
    'Interpreter',
    'BisayaError',
]
