"""Interpreter for the Bisaya++ language.

This module walks the AST produced by `bisaya.parser` and executes it
against a single namespace. Values follow the model in `bisaya.types`:
numbers are floats, booleans are the text literals OO and DILI, and every
runtime failure aborts the run with a `BisayaError`.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional, TextIO

from .std.io import BasicIO, read_typed_values
from .types import (
    CharVal, TRUE_LITERAL, FALSE_LITERAL,
    from_bool, is_truthy, values_equal, to_string, type_name,
)
from .ast import (
    Program, ExprStmt, PrintStmt, VarDecl, Block, IfStmt, WhileStmt,
    InputStmt, Literal, Grouping, UnaryOp, BinaryOp, Ident, Assign, Node,
)
from .errors import BisayaError, ErrorVal
from .environment import Environment
from .parser import parse_program

COMPLETION_NOTICE = '\n\nInterpretation complete\n'


class Interpreter:
    """Core interpreter that executes a Bisaya++ AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 scoped_blocks: bool = False, announce_completion: bool = True,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.global_env = Environment()
        self.scoped_blocks = scoped_blocks
        self.announce_completion = announce_completion
        self.io = BasicIO(stdin, stdout)
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Environment:
        if env is None:
            env = self.global_env
        env.types.update(program.variable_types)
        try:
            self.debug(f"starting interpretation of {len(program.body)} statements")
            self.execute_block(program.body, env)
            if self.announce_completion:
                self.io.write(COMPLETION_NOTICE)
            return env
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def execute_block(self, statements: List[Node], env: Environment) -> None:
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Node, env: Environment) -> None:
        if self.debug_level >= 1:
            self.debug(f"execute {type(node).__name__}")
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return
        if isinstance(node, PrintStmt):
            output = ''.join(to_string(self.evaluate(expr, env)) for expr in node.exprs)
            self.io.write(output)
            return
        if isinstance(node, VarDecl):
            if node.type_spec is not None:
                env.types[node.name] = node.type_spec
            value = self.evaluate(node.expr, env) if node.expr is not None else None
            value = env.declare(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"declare {node.name}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(node, Block):
            block_env = Environment(parent=env) if self.scoped_blocks else env
            if self.debug_level >= 2:
                self.debug(f"block with {len(node.statements)} statements")
            self.execute_block(node.statements, block_env)
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                self.execute(node.then_branch, env)
            elif node.else_branch is not None:
                self.execute(node.else_branch, env)
            return
        if isinstance(node, WhileStmt):
            while True:
                cond = self.evaluate(node.condition, env)
                if self.debug_level >= 3:
                    self.debug(f"while condition {to_string(cond)}")
                if not is_truthy(cond):
                    break
                self.execute(node.body, env)
            return
        if isinstance(node, InputStmt):
            for name, value in read_typed_values(self.io, node.names, env.declared_type):
                env.set(name, value)
                if self.debug_level >= 2:
                    self.debug(f"input {name}: {type_name(value)} = {to_string(value)}")
            return
        # catch any other nodes
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expr, env)
        if isinstance(node, Ident):
            return env.get(node.name)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand, env)
            return self.apply_unary_op(node.op, operand)
        if isinstance(node, BinaryOp):
            # UG and O evaluate both sides; there is no short-circuit
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            if self.debug_level >= 3:
                self.debug(f"binary {node.op} with left={to_string(left)} ({type_name(left)}) "
                           f"right={to_string(right)} ({type_name(right)})")
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} = {to_string(value)}")
            return value
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def apply_unary_op(self, op: str, operand: Any) -> Any:
        if op == '-':
            check_number_operand(operand)
            return -operand
        if op == '+':
            check_number_operand(operand)
            return operand
        if op == 'DILI':
            return FALSE_LITERAL if is_truthy(operand) else TRUE_LITERAL
        raise BisayaError(ErrorVal('TypeError', f'unsupported unary operator {op}'))

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op == '+':
            if isinstance(a, float) and isinstance(b, float):
                return a + b
            if isinstance(a, str) or isinstance(b, str):
                return to_string(a) + to_string(b)
            if isinstance(a, CharVal) and isinstance(b, CharVal):
                return a.value + b.value
            raise BisayaError(ErrorVal('TypeError', 'operands must be numbers, strings, or characters'))
        if op == '&':
            return to_string(a) + to_string(b)
        if op == '-':
            check_number_operands(a, b)
            return a - b
        if op == '*':
            check_number_operands(a, b)
            return a * b
        if op == '/':
            check_number_operands(a, b)
            if b == 0.0:
                raise BisayaError(ErrorVal('ArithmeticError', 'division by zero'))
            return a / b
        if op == '%':
            check_number_operands(a, b)
            if b == 0.0:
                raise BisayaError(ErrorVal('ArithmeticError', 'modulo by zero'))
            # remainder takes the sign of the dividend
            return math.fmod(a, b)
        if op in ('>', '>=', '<', '<='):
            check_number_operands(a, b)
            if op == '>': return from_bool(a > b)
            if op == '>=': return from_bool(a >= b)
            if op == '<': return from_bool(a < b)
            return from_bool(a <= b)
        if op == '==':
            if isinstance(a, CharVal) and isinstance(b, CharVal):
                return from_bool(a.value == b.value)
            return from_bool(values_equal(a, b))
        if op == '<>':
            if isinstance(a, CharVal) and isinstance(b, CharVal):
                return from_bool(a.value != b.value)
            if (isinstance(a, float) and isinstance(b, CharVal)) or (isinstance(a, CharVal) and isinstance(b, float)):
                raise BisayaError(ErrorVal('TypeError', 'cannot compare number with character'))
            return from_bool(not values_equal(a, b))
        if op == 'UG':
            return from_bool(is_truthy(a) and is_truthy(b))
        if op == 'O':
            return from_bool(is_truthy(a) or is_truthy(b))
        raise BisayaError(ErrorVal('TypeError', f'unknown operator {op}'))


def check_number_operand(operand: Any) -> None:
    if not isinstance(operand, float):
        raise BisayaError(ErrorVal('TypeError', f'operand must be a number, got {type_name(operand)}'))


def check_number_operands(a: Any, b: Any) -> None:
    if not (isinstance(a, float) and isinstance(b, float)):
        raise BisayaError(ErrorVal('TypeError', f'operands must be numbers, got {type_name(a)} and {type_name(b)}'))


def run_program(source: str, debug_level: int = 0, **options: Any) -> Environment:
    """Convenience function to parse and run a Bisaya++ program from a source string."""
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, **options)
    return interpreter.run(ast_program)


def compile_module(file_path: str, debug_level: int = 0, **options: Any) -> Interpreter:
    """Parse and execute a Bisaya++ file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, **options)
    interpreter.run(ast_program)
    return interpreter
