"""Evaluator and executor tests built directly on AST nodes."""

import math

import pytest

from bisaya.ast import (
    Assign, BinaryOp, Block, ExprStmt, Grouping, Ident, IfStmt, Literal,
    PrintStmt, Program, UnaryOp, VarDecl, WhileStmt,
)
from bisaya.environment import Environment
from bisaya.errors import BisayaError
from bisaya.interpreter import COMPLETION_NOTICE, Interpreter
from bisaya.types import CharVal, NoneVal, TypeSpec


def num(x):
    return Literal(float(x), 'Number')


def text(s):
    return Literal(s, 'Text')


def char(c):
    return Literal(CharVal(c), 'Character')


def binary(op, left, right):
    return Interpreter().evaluate(BinaryOp(op, left, right), Environment())


def error_kind(op, left, right):
    with pytest.raises(BisayaError) as exc:
        binary(op, left, right)
    return exc.value.kind


def test_plus_semantics():
    assert binary('+', num(2), num(3)) == 5.0
    assert binary('+', text('abc'), num(5)) == 'abc5'
    assert binary('+', num(5), text('abc')) == '5abc'
    assert binary('+', char('a'), char('b')) == 'ab'
    assert binary('+', char('a'), text('!')) == 'a!'
    assert error_kind('+', num(1), char('a')) == 'TypeError'


def test_concat_always_stringifies():
    assert binary('&', num(1), char('z')) == '1z'
    assert binary('&', Literal(NoneVal(), 'Empty'), text('x')) == 'nilx'


def test_arithmetic_requires_numbers():
    assert binary('-', num(7), num(2)) == 5.0
    assert binary('*', num(7), num(2)) == 14.0
    assert error_kind('-', text('7'), num(2)) == 'TypeError'
    assert error_kind('*', num(7), char('a')) == 'TypeError'


@pytest.mark.parametrize('a,b', [(7, 2), (-7, 2), (7, -2), (5.5, 1.5)])
def test_division_and_modulo_match_floating_point(a, b):
    assert binary('/', num(a), num(b)) == a / b
    assert binary('%', num(a), num(b)) == math.fmod(a, b)


def test_division_and_modulo_by_zero():
    with pytest.raises(BisayaError) as exc:
        binary('/', num(1), num(0))
    assert exc.value.kind == 'ArithmeticError'
    assert 'division by zero' in str(exc.value)
    with pytest.raises(BisayaError) as exc:
        binary('%', num(1), num(0))
    assert 'modulo by zero' in str(exc.value)


def test_comparisons_yield_boolean_literals():
    assert binary('>', num(2), num(1)) == 'OO'
    assert binary('>=', num(1), num(1)) == 'OO'
    assert binary('<', num(2), num(1)) == 'DILI'
    assert binary('<=', num(3), num(1)) == 'DILI'
    assert error_kind('<', text('a'), text('b')) == 'TypeError'


def test_equality_asymmetry_between_number_and_character():
    assert binary('==', char('a'), char('a')) == 'OO'
    assert binary('==', num(1), char('a')) == 'DILI'
    assert error_kind('<>', num(1), char('a')) == 'TypeError'
    assert error_kind('<>', char('a'), num(1)) == 'TypeError'
    assert binary('<>', char('a'), char('b')) == 'OO'
    assert binary('<>', text('OO'), text('OO')) == 'DILI'


def test_logical_operators_evaluate_both_sides():
    interp = Interpreter()
    env = Environment()
    env.declare('x', 0.0)
    expr = BinaryOp('UG', text('DILI'), Grouping(Assign('x', num(9))))
    assert interp.evaluate(expr, env) == 'DILI'
    assert env.get('x') == 9.0
    assert binary('O', text('DILI'), num(1)) == 'OO'
    assert binary('O', text('DILI'), num(0)) == 'DILI'


def test_unary_operators():
    interp = Interpreter()
    env = Environment()
    assert interp.evaluate(UnaryOp('-', num(4)), env) == -4.0
    assert interp.evaluate(UnaryOp('DILI', text('OO')), env) == 'DILI'
    assert interp.evaluate(UnaryOp('DILI', num(0)), env) == 'OO'
    assert interp.evaluate(UnaryOp('DILI', Literal(NoneVal(), 'Empty')), env) == 'OO'
    with pytest.raises(BisayaError) as exc:
        interp.evaluate(UnaryOp('-', text('4')), env)
    assert exc.value.kind == 'TypeError'


def test_assignment_is_an_expression():
    interp = Interpreter()
    env = Environment()
    assert interp.evaluate(Assign('x', Assign('y', num(4))), env) == 4.0
    assert env.get('x') == env.get('y') == 4.0


def test_undefined_variable_aborts():
    with pytest.raises(BisayaError) as exc:
        Interpreter().evaluate(Ident('ghost'), Environment())
    assert exc.value.kind == 'NameError'


def test_declarations_without_initializer(capsys):
    program = Program(
        body=[VarDecl('n', None), VarDecl('b', None), VarDecl('c', None), VarDecl('u', None)],
        variable_types={'n': TypeSpec.number(), 'b': TypeSpec.boolean(), 'c': TypeSpec.character()},
    )
    env = Interpreter(announce_completion=False).run(program)
    assert env.get('n') == 0.0
    assert env.get('b') == 'DILI'
    assert env.get('c') == ''
    assert isinstance(env.get('u'), NoneVal)
    assert capsys.readouterr().out == ''


def test_declaration_carries_its_own_type():
    program = Program(body=[VarDecl('n', None, TypeSpec.number()), VarDecl('t', None, TypeSpec.boolean())])
    env = Interpreter(announce_completion=False).run(program)
    assert env.get('n') == 0.0
    assert env.get('t') == 'DILI'
    assert env.declared_type('n') == TypeSpec.number()


def test_print_concatenates_without_separator(capsys):
    program = Program(body=[PrintStmt([num(5), text('-'), num(5.5), char('c')])])
    Interpreter().run(program)
    assert capsys.readouterr().out == '5-5.5c' + COMPLETION_NOTICE


def test_if_and_while():
    body = [
        VarDecl('i', num(0)),
        VarDecl('acc', text('')),
        WhileStmt(BinaryOp('<', Ident('i'), num(3)), Block([
            ExprStmt(Assign('i', BinaryOp('+', Ident('i'), num(1)))),
            IfStmt(
                BinaryOp('==', Ident('i'), num(2)),
                Block([ExprStmt(Assign('acc', BinaryOp('&', Ident('acc'), text('two'))))]),
                Block([ExprStmt(Assign('acc', BinaryOp('&', Ident('acc'), Ident('i'))))]),
            ),
        ])),
    ]
    env = Interpreter(announce_completion=False).run(Program(body=body))
    assert env.get('acc') == '1two3'


def test_blocks_share_the_namespace_by_default():
    body = [Block([Block([VarDecl('inner', num(1)), ExprStmt(Assign('made', text('here')))])])]
    env = Interpreter(announce_completion=False).run(Program(body=body))
    assert env.get('inner') == 1.0
    assert env.get('made') == 'here'


def test_scoped_blocks_keep_new_names_local():
    body = [
        VarDecl('outer', num(1)),
        Block([VarDecl('inner', num(2)), ExprStmt(Assign('outer', num(3)))]),
    ]
    env = Interpreter(scoped_blocks=True, announce_completion=False).run(Program(body=body))
    assert env.get('outer') == 3.0
    with pytest.raises(BisayaError):
        env.get('inner')


def test_error_stops_execution(capsys):
    body = [
        PrintStmt([text('before')]),
        ExprStmt(BinaryOp('/', num(1), num(0))),
        PrintStmt([text('after')]),
    ]
    with pytest.raises(BisayaError):
        Interpreter().run(Program(body=body))
    assert capsys.readouterr().out == 'before'


def test_debug_log_written(tmp_path):
    log = tmp_path / 'debug.txt'
    body = [VarDecl('x', num(1)), ExprStmt(Assign('x', BinaryOp('+', Ident('x'), num(1))))]
    Interpreter(debug_level=3, debug_file=str(log), announce_completion=False).run(Program(body=body))
    content = log.read_text()
    assert 'declare x: Number = 1' in content
    assert 'assign x = 2' in content
    assert 'binary +' in content
