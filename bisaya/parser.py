"""Parser for the Bisaya++ language.

This module implements a two-stage parsing pipeline:

1. **Preprocessing**: comments (`-- ...`) are stripped, blank lines are
   dropped and the lines that continue a statement (`PUNDOK{`,
   `KUNG WALA`, `KUNG DILI`) are joined onto the line before them. After
   this step every statement sits on exactly one newline-terminated
   line, which keeps the grammar LALR friendly.

2. **Parsing**: the preprocessed source is fed into a Lark parser
   configured with the Bisaya++ grammar. The resulting parse tree is
   transformed into the AST defined in `bisaya.ast`. While transforming,
   every `MUGNA` declaration records the declared type of its variables.

The `parse_program` function is the public entry point and returns a
`Program` holding the statement list and the declared-type table.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Tuple

from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput

from .ast import (
    Program, ExprStmt, PrintStmt, VarDecl, Block, IfStmt, WhileStmt,
    InputStmt, Literal, Grouping, UnaryOp, BinaryOp, Ident, Assign, Node,
)
from .errors import BisayaError, ErrorVal
from .types import CharVal, TypeSpec


KEYWORD_TYPES: Dict[str, TypeSpec] = {
    'NUMERO': TypeSpec.number(),
    'TIPIK': TypeSpec.floating(),
    'TINUOD': TypeSpec.boolean(),
    'LETRA': TypeSpec.character(),
}

# Lines that belong to the statement on the previous line
CONTINUATION = re.compile(r'(?:PUNDOK\b|\{|KUNG[ \t]+(?:WALA|DILI)\b)')


def strip_comment(line: str) -> str:
    """Remove a trailing `--` comment, leaving literals untouched."""
    result: List[str] = []
    i = 0
    length = len(line)
    while i < length:
        c = line[i]
        # String and character literals are copied verbatim
        if c in ('"', "'"):
            end = line.find(c, i + 1)
            if end == -1:
                result.append(line[i:])
                break
            result.append(line[i:end + 1])
            i = end + 1
            continue
        # Escape codes such as [-] or [#]
        if c == '[' and i + 2 < length and line[i + 2] == ']':
            result.append(line[i:i + 3])
            i += 3
            continue
        if line.startswith('--', i):
            break
        result.append(c)
        i += 1
    return ''.join(result)


def preprocess(source: str) -> str:
    """Normalize the source so that one line holds one statement."""
    lines: List[str] = []
    for raw in source.splitlines():
        line = strip_comment(raw).strip()
        if not line:
            continue
        if lines and CONTINUATION.match(line):
            lines[-1] = lines[-1] + ' ' + line
        else:
            lines.append(line)
    return '\n'.join(lines) + '\n'


BISAYA_GRAMMAR = r"""
    start: "SUGOD" _NL statement* "KATAPUSAN" _NL?

    // Statements
    ?statement: declaration
              | print_stmt
              | input_stmt
              | if_stmt
              | while_stmt
              | for_stmt
              | expr_stmt

    declaration: "MUGNA" TYPE_NAME decl_item ("," decl_item)* _NL
    decl_item: IDENT ("=" expression)?
    print_stmt: "IPAKITA" ":" expression _NL
    input_stmt: "DAWAT" ":" IDENT ("," IDENT)* _NL
    if_stmt: "KUNG" "(" expression ")" block else_if* else_clause? _NL
    else_if: ELSE_IF "(" expression ")" block
    else_clause: ELSE block
    while_stmt: "SAMTANG" "(" expression ")" block _NL
    for_stmt: FOR "(" expression "," expression "," expression ")" block _NL
    expr_stmt: expression _NL

    block: "PUNDOK" "{" _NL statement* "}"

    // Expressions, lowest precedence first
    ?expression: assign
    ?assign: IDENT "=" assign
           | concat
    ?concat: logic_or (CONCAT logic_or)*
    ?logic_or: logic_and (OR logic_and)*
    ?logic_and: equality (AND equality)*
    ?equality: comparison ((EQ | NE) comparison)*
    ?comparison: term ((GE | LE | GT | LT) term)*
    ?term: factor (ADD_OP factor)*
    ?factor: unary (MUL_OP unary)*
    ?unary: (ADD_OP | NOT) unary
          | primary
    ?primary: NUMBER -> number
            | STRING -> string
            | CHAR -> char
            | ESCAPE -> escape
            | NEWLINE -> newline
            | IDENT -> variable
            | "(" expression ")" -> grouping

    // Tokens
    TYPE_NAME.2: /(?:NUMERO|LETRA|TINUOD|TIPIK)\b/
    ELSE_IF.2: /KUNG[ \t]+DILI\b/
    ELSE.2: /KUNG[ \t]+WALA\b/
    FOR.2: /ALANG[ \t]+SA\b/
    NOT: "DILI"
    AND: "UG"
    OR: "O"
    CONCAT: "&"
    EQ: "=="
    NE: "<>"
    GE: ">="
    LE: "<="
    GT: ">"
    LT: "<"
    ADD_OP: "+" | "-"
    MUL_OP: "*" | "/" | "%"
    NUMBER: /\d+(?:\.\d+)?/
    STRING: /"[^"\n]*"/
    CHAR: /'[^'\n]'/
    ESCAPE: /\[[^\n]\]/
    NEWLINE: "$"
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/
    _NL: /(?:\r?\n)+/

    %import common.WS_INLINE
    %ignore WS_INLINE
"""


BISAYA_PARSER = Lark(
    BISAYA_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
    lexer='basic',
)


def flatten(items: List[Any]) -> List[Node]:
    """Splice the statement lists produced by multi-variable declarations."""
    statements: List[Node] = []
    for item in items:
        if isinstance(item, list):
            statements.extend(item)
        else:
            statements.append(item)
    return statements


def split_concat(node: Node) -> List[Node]:
    """Turn a top-level `a & b & c` chain into separate print items."""
    if isinstance(node, BinaryOp) and node.op == '&':
        return split_concat(node.left) + split_concat(node.right)
    return [node]


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def __init__(self):
        super().__init__()
        self.variable_types: Dict[str, TypeSpec] = {}

    def start(self, items):
        return Program(body=flatten(items), variable_types=dict(self.variable_types))

    def declaration(self, items):
        type_spec = KEYWORD_TYPES[str(items[0])]
        decls = []
        for name, expr in items[1:]:
            self.variable_types[name] = type_spec
            decls.append(VarDecl(name=name, expr=expr, type_spec=type_spec))
        return decls

    def decl_item(self, items) -> Tuple[str, Any]:
        name = str(items[0])
        expr = items[1] if len(items) > 1 else None
        return (name, expr)

    def print_stmt(self, items):
        return PrintStmt(exprs=split_concat(items[0]))

    def input_stmt(self, items):
        return InputStmt(names=[str(item) for item in items])

    def if_stmt(self, items):
        condition = items[0]
        then_branch = items[1]
        else_branch = None
        # KUNG DILI chains become nested if statements, innermost last
        for clause in reversed(items[2:]):
            if isinstance(clause, Block):
                else_branch = clause
            else:
                elif_condition, elif_block = clause
                else_branch = IfStmt(elif_condition, elif_block, else_branch)
        return IfStmt(condition, then_branch, else_branch)

    def else_if(self, items):
        return (items[1], items[2])

    def else_clause(self, items):
        return items[1]

    def while_stmt(self, items):
        condition = items[0]
        body = items[1]
        return WhileStmt(condition, body)

    def for_stmt(self, items):
        # ALANG SA (init, condition, update) runs as init followed by a while loop
        _, init, condition, update, body = items
        loop_body = Block(statements=body.statements + [ExprStmt(update)])
        return Block(statements=[ExprStmt(init), WhileStmt(condition, loop_body)])

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    def block(self, items):
        return Block(statements=flatten(items))

    # Expressions
    def assign(self, items):
        return Assign(name=str(items[0]), value=items[1])

    def binary_expr(self, items):
        # items pattern: expr ( op expr )*
        left = items[0]
        i = 1
        while i < len(items):
            op = items[i]
            right = items[i + 1]
            left = BinaryOp(op=str(op), left=left, right=right)
            i += 2
        return left

    def concat(self, items):
        return self.binary_expr(items)

    def logic_or(self, items):
        return self.binary_expr(items)

    def logic_and(self, items):
        return self.binary_expr(items)

    def equality(self, items):
        return self.binary_expr(items)

    def comparison(self, items):
        return self.binary_expr(items)

    def term(self, items):
        return self.binary_expr(items)

    def factor(self, items):
        return self.binary_expr(items)

    def unary(self, items):
        return UnaryOp(op=str(items[0]), operand=items[1])

    def number(self, items):
        return Literal(float(items[0]), 'Number')

    def string(self, items):
        return Literal(str(items[0])[1:-1], 'Text')

    def char(self, items):
        return Literal(CharVal(str(items[0])[1]), 'Character')

    def escape(self, items):
        return Literal(str(items[0])[1], 'Text')

    def newline(self, items):
        return Literal('\n', 'Text')

    def variable(self, items):
        return Ident(str(items[0]))

    def grouping(self, items):
        return Grouping(items[0])


def parse_program(source: str) -> Program:
    """Parse Bisaya++ source code into an AST Program.

    Syntax errors are raised as `BisayaError` with the `SyntaxError` kind.
    """
    pre = preprocess(source)
    try:
        tree = BISAYA_PARSER.parse(pre)
    except UnexpectedInput as e:
        raise BisayaError(ErrorVal('SyntaxError', f'unexpected input at line {e.line}, column {e.column}'))
    return ASTTransformer().transform(tree)
