"""Abstract Syntax Tree (AST) definitions for Bisaya++.

The parser produces these nodes and the interpreter walks them. A parsed
program also carries the table of declared variable types, which the
interpreter consults for declaration defaults and typed input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .types import TypeSpec


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]
    variable_types: Dict[str, TypeSpec] = field(default_factory=dict)


# Statements

@dataclass
class ExprStmt(Node):
    expr: Node


@dataclass
class PrintStmt(Node):
    exprs: List[Node]


@dataclass
class VarDecl(Node):
    name: str
    expr: Optional[Node]  # initial value
    type_spec: Optional[TypeSpec] = None


@dataclass
class Block(Node):
    statements: List[Node]


@dataclass
class IfStmt(Node):
    condition: Node
    then_branch: Node
    else_branch: Optional[Node]  # Block, or IfStmt for KUNG DILI chains


@dataclass
class WhileStmt(Node):
    condition: Node
    body: Node


@dataclass
class InputStmt(Node):
    names: List[str]


# Expressions

@dataclass
class Literal(Node):
    value: Any
    literal_type: str  # 'Number', 'Text', 'Character', 'Empty'


@dataclass
class Grouping(Node):
    expr: Node


@dataclass
class UnaryOp(Node):
    op: str
    operand: Node


@dataclass
class BinaryOp(Node):
    op: str
    left: Node
    right: Node


@dataclass
class Ident(Node):
    name: str


@dataclass
class Assign(Node):
    name: str
    value: Node
