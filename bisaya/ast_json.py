"""JSON serialization/deserialization for the Bisaya++ AST.

This module converts between the AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Character and nil
literals are tagged so that they survive the trip, and the program's
declared variable types are stored next to its body.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .ast import (
    Program,
    ExprStmt,
    PrintStmt,
    VarDecl,
    Block,
    IfStmt,
    WhileStmt,
    InputStmt,
    Literal,
    Grouping,
    UnaryOp,
    BinaryOp,
    Ident,
    Assign,
)
from .types import CharVal, NoneVal, TypeSpec


def typespec_to_obj(t: Optional[TypeSpec]) -> Optional[str]:
    return t.kind if t is not None else None


def typespec_from_obj(o: Optional[str]) -> Optional[TypeSpec]:
    return TypeSpec(o) if o is not None else None


def value_to_obj(value: Any) -> Any:
    if isinstance(value, CharVal):
        return {"__type__": "Char", "value": value.value}
    if isinstance(value, NoneVal):
        return {"__type__": "Nil"}
    return value


def value_from_obj(obj: Any) -> Any:
    if isinstance(obj, dict):
        if obj.get("__type__") == "Char":
            return CharVal(obj["value"])
        if obj.get("__type__") == "Nil":
            return NoneVal()
        raise TypeError("Invalid literal value")
    if isinstance(obj, int) and not isinstance(obj, bool):
        # numbers are always doubles at run time
        return float(obj)
    return obj


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        types: Dict[str, Any] = {name: typespec_to_obj(t) for name, t in node.variable_types.items()}
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body], "variable_types": types}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "exprs": [ast_to_obj(e) for e in node.exprs]}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": node.name,
            "expr": ast_to_obj(node.expr),
            "type_spec": typespec_to_obj(node.type_spec),
        }
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, InputStmt):
        return {"type": "InputStmt", "names": list(node.names)}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": value_to_obj(node.value), "literal_type": node.literal_type}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expr": ast_to_obj(node.expr)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand)}
    if isinstance(node, BinaryOp):
        return {"type": "BinaryOp", "op": node.op, "left": ast_to_obj(node.left), "right": ast_to_obj(node.right)}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "value": ast_to_obj(node.value)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        types = {name: typespec_from_obj(k) for name, k in obj.get("variable_types", {}).items()}
        return Program(body=[ast_from_obj(n) for n in obj["body"]], variable_types=types)
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "PrintStmt":
        return PrintStmt(exprs=[ast_from_obj(e) for e in obj["exprs"]])
    if t == "VarDecl":
        return VarDecl(
            name=obj["name"],
            expr=ast_from_obj(obj.get("expr")),
            type_spec=typespec_from_obj(obj.get("type_spec")),
        )
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_branch=ast_from_obj(obj["then_branch"]),
            else_branch=ast_from_obj(obj.get("else_branch")),
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t == "InputStmt":
        return InputStmt(names=list(obj["names"]))
    if t == "Literal":
        return Literal(value=value_from_obj(obj["value"]), literal_type=obj["literal_type"])
    if t == "Grouping":
        return Grouping(expr=ast_from_obj(obj["expr"]))
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]))
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]))
    if t == "Ident":
        return Ident(name=obj["name"])
    if t == "Assign":
        return Assign(name=obj["name"], value=ast_from_obj(obj["value"]))

    raise ValueError(f"Unknown AST node type: {t}")
