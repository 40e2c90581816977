import pytest

from monkey import run_source, MonkeyParseError
from monkey.ast import Program, ExpressionStatement, Node
from monkey.environment import Environment
from monkey.evaluator import Evaluator, evaluate
from monkey.object import Integer, Boolean, Error, NULL, TRUE, FALSE, INT32_MAX, INT32_MIN
from monkey.parser import parse_program


def run(source, env=None):
    program, errors = parse_program(source)
    assert errors == []
    return evaluate(program, env if env is not None else Environment())


@pytest.mark.parametrize("source, expected", [
    ("5", 5),
    ("10", 10),
    ("-5", -5),
    ("-10", -10),
    ("0", 0),
    ("-0", 0),
    ("5 + 5 + 5 + 5 - 10", 10),
    ("2 * 2 * 2 * 2 * 2", 32),
    ("-50 + 100 + -50", 0),
    ("5 * 2 + 10", 20),
    ("5 + 2 * 10", 25),
    ("20 + 2 * -10", 0),
    ("50 / 2 * 2 + 10", 60),
    ("2 * (5 + 10)", 30),
    ("3 * 3 * 3 + 10", 37),
    ("3 * (3 * 3) + 10", 37),
    ("(5 + 10 * 2 + 15 / 3) * 2 + -10", 50),
])
def test_integer_expressions(source, expected):
    assert run(source) == Integer(expected)


@pytest.mark.parametrize("source, expected", [
    ("7 / 2", 3),
    ("-7 / 2", -3),
    ("7 / -2", -3),
    ("-7 / -2", 3),
])
def test_division_truncates_toward_zero(source, expected):
    assert run(source) == Integer(expected)


def test_division_by_zero():
    assert run("1 / 0") == Error("division by zero")


def test_arithmetic_wraps_to_32_bits():
    assert run(f"{INT32_MAX} + 1") == Integer(INT32_MIN)
    assert run(f"-{INT32_MAX} - 2") == Integer(INT32_MAX)
    assert run("65536 * 65536") == Integer(0)
    assert run(f"-{INT32_MAX} - 1") == Integer(INT32_MIN)
    assert run(f"-(-{INT32_MAX} - 1)") == Integer(INT32_MIN)


@pytest.mark.parametrize("source, expected", [
    ("false", False),
    ("true", True),
    ("1 < 2", True),
    ("1 > 2", False),
    ("1 < 1", False),
    ("1 > 1", False),
    ("1 == 1", True),
    ("1 != 1", False),
    ("1 == 2", False),
    ("1 != 2", True),
    ("true == true", True),
    ("false == false", True),
    ("true == false", False),
    ("true != false", True),
    ("false != true", True),
    ("(1 < 2) == true", True),
    ("(1 < 2) == false", False),
    ("(1 > 2) == true", False),
    ("(1 > 2) == false", True),
])
def test_boolean_expressions(source, expected):
    assert run(source) == Boolean(expected)


@pytest.mark.parametrize("a, b", [(1, 2), (2, 1), (3, 3), (-4, 0)])
def test_comparisons_are_consistent(a, b):
    less = run(f"{a} < {b}")
    greater = run(f"{a} > {b}")
    equal = run(f"{a} == {b}")
    assert less.value == (not (greater.value or equal.value))


@pytest.mark.parametrize("source, expected", [
    ("!true", False),
    ("!false", True),
    ("!5", False),
    ("!0", True),
    ("!!true", True),
    ("!!false", False),
    ("!!5", True),
    ("!!0", False),
])
def test_bang_operator(source, expected):
    assert run(source) == Boolean(expected)


def test_boolean_results_are_singletons():
    assert run("1 < 2") is TRUE
    assert run("!5") is FALSE


@pytest.mark.parametrize("source, expected", [
    ("if (true) { 10 }", Integer(10)),
    ("if (false) { 10 }", NULL),
    ("if (1) { 10 }", Integer(10)),
    ("if (0) { 10 }", NULL),
    ("if (1 < 2) { 10 }", Integer(10)),
    ("if (1 > 2) { 10 }", NULL),
    ("if (1 > 2) { 10 } else { 20 }", Integer(20)),
    ("if (1 < 2) { 10 } else { 20 }", Integer(10)),
    ("if (if (false) { 1 }) { 10 } else { 20 }", Integer(20)),
    ("if (false) { 10 } else { }", NULL),
])
def test_if_expressions(source, expected):
    assert run(source) == expected


@pytest.mark.parametrize("source, expected", [
    ("9; 8;", 8),
    ("return 10;", 10),
    ("return 10; 9;", 10),
    ("return 2 * 5; 9;", 10),
    ("9; return 2 * 5; 6;", 10),
    ("if (10 > 1) { if (10 > 1) { return 10; } return 1; }", 10),
    ("if (10 > 1) { return 10; 1 } 2", 10),
])
def test_return_statements(source, expected):
    assert run(source) == Integer(expected)


@pytest.mark.parametrize("source, expected", [
    ("1 + if (true) { return 5; }; 99", 5),
    ("if (true) { return 5; } + 1; 99", 5),
    ("-if (true) { return 5; }; 99", 5),
    ("!if (true) { return 5; }; 99", 5),
    ("if (if (true) { return 4; }) { 1 } else { 2 }; 99", 4),
    ("return if (true) { return 7; }; 99", 7),
])
def test_return_inside_expression_ends_program(source, expected):
    assert run(source) == Integer(expected)


def test_return_inside_let_value_skips_binding():
    env = Environment()
    assert run("let a = if (true) { return 3; }; 99", env) == Integer(3)
    assert env.get('a') is None


def test_return_inside_expression_stays_wrapped_in_blocks():
    # the enclosing block must stop at the nested return as well
    source = "if (true) { let x = 1 + if (true) { return 8; }; 100 }; 99"
    assert run(source) == Integer(8)


@pytest.mark.parametrize("source, message", [
    ("5 + true;", "type mismatch: INTEGER + BOOLEAN"),
    ("5 + true; 5;", "type mismatch: INTEGER + BOOLEAN"),
    ("-true", "unknown operator: -BOOLEAN"),
    ("true + false;", "unknown operator: BOOLEAN + BOOLEAN"),
    ("5; true + false; 5", "unknown operator: BOOLEAN + BOOLEAN"),
    ("if (10 > 1) { true + false; }", "unknown operator: BOOLEAN + BOOLEAN"),
    ("if (10 > 1) { if (10 > 1) { return true + false; } return 1; }",
     "unknown operator: BOOLEAN + BOOLEAN"),
    ("foobar", "identifier not found: foobar"),
    ("true < false", "unknown operator: BOOLEAN < BOOLEAN"),
    ("1 == true", "type mismatch: INTEGER == BOOLEAN"),
    ("-(if (false) { 1 })", "unknown operator: -NULL"),
    ("(if (false) { 1 }) == (if (false) { 1 })", "unknown operator: NULL == NULL"),
])
def test_error_handling(source, message):
    assert run(source) == Error(message)


def test_error_short_circuits_operands():
    env = Environment()
    assert run("let a = 1; foo + (let_not_reached)", env) == Error("identifier not found: foo")
    assert run("-(1 + true) * missing", env) == Error("type mismatch: INTEGER + BOOLEAN")


def test_error_in_condition_stops_if():
    assert run("if (nope) { 1 } else { 2 }") == Error("identifier not found: nope")


@pytest.mark.parametrize("source, expected", [
    ("let a = 5; a;", 5),
    ("let a = 5 * 5; a;", 25),
    ("let a = 5; let b = a; b;", 5),
    ("let a = 5; let b = a; let c = a + b + 5; c;", 15),
    ("let a = 1; let a = a + 1; a", 2),
])
def test_let_statements(source, expected):
    assert run(source) == Integer(expected)


def test_let_evaluates_to_bound_value():
    assert run("let a = 7;") == Integer(7)


def test_failed_let_does_not_bind():
    env = Environment()
    assert run("let a = -true;", env) == Error("unknown operator: -BOOLEAN")
    assert env.get('a') is None


def test_bindings_persist_across_evaluations():
    env = Environment()
    run("let a = 5;", env)
    assert run("a * 2", env) == Integer(10)
    run("let a = 100;", env)
    assert run("a + 1", env) == Integer(101)


def test_bindings_inside_blocks_share_scope():
    env = Environment()
    run("if (true) { let inner = 3; }", env)
    assert run("inner", env) == Integer(3)


def test_lookup_falls_back_to_outer_environment():
    outer = Environment()
    outer.set('x', Integer(4))
    inner = Environment.enclosed(outer)
    assert run("x * x", inner) == Integer(16)


def test_empty_program_is_null():
    assert run("") is NULL
    assert run("if (true) { }") is NULL


def test_run_source_raises_on_syntax_errors():
    with pytest.raises(MonkeyParseError) as excinfo:
        run_source("let x 5; let = 10;")
    assert len(excinfo.value.errors) >= 2


def test_run_source_with_lark_frontend():
    env = Environment()
    assert run_source("let a = 5;", env, frontend='lark') == Integer(5)
    assert run_source("a * 3", env, frontend='lark') == Integer(15)


def test_unknown_node_type_is_a_host_error():
    class Mystery(Node):
        pass
    with pytest.raises(NotImplementedError):
        evaluate(Program([ExpressionStatement(Mystery())]), Environment())


def test_debug_trace_is_written(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    evaluator = Evaluator(debug_level=3, debug_file=str(debug_file))
    program, _ = parse_program("let a = 2; if (a > 1) { a * 3 }")
    assert evaluator.run(program, Environment()) == Integer(6)
    evaluator.close()
    trace = debug_file.read_text(encoding='utf-8')
    assert "let a: INTEGER = 2" in trace
    assert "if condition true -> True" in trace
    assert "apply 2 * 3" in trace
    assert "result: INTEGER 6" in trace


def test_debug_file_not_opened_by_default(tmp_path):
    evaluator = Evaluator(debug_file=str(tmp_path / 'debug.txt'))
    assert evaluator.debug_fp is None
    assert not (tmp_path / 'debug.txt').exists()
