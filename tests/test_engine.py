"""Test the Engine class with AST nodes."""

import pytest

import iron
import irontest


def test_simple_literal():
    """Test evaluating simple literals."""
    assert irontest.run_ast(iron.ast.Number(42)) == 42
    assert irontest.run_ast(iron.ast.String("forty-two")) == "forty-two"
    assert irontest.run_ast(iron.ast.Nil()) is None
    assert irontest.run_ast(iron.ast.Symbol("x")) == iron.Symbol("x")


def test_call_node():
    # (+ 1 (+ 2 3))
    expr = iron.ast.Sexpr(iron.ast.Identifier("+"), [
        iron.ast.Number(1),
        iron.ast.Sexpr(iron.ast.Identifier("+"), [iron.ast.Number(2), iron.ast.Number(3)]),
    ])
    assert irontest.run_ast(expr) == 6


def test_identifier_binding():
    expr = iron.ast.Identifier("x")
    assert irontest.run_ast(expr, x=[1, 2]) == [1, 2]

    with pytest.raises(iron.EvalError) as exc_info:
        irontest.run_ast(iron.ast.Identifier("missing"))
    irontest.assert_error(exc_info, "ident missing not declared")


def test_array_literal_is_fresh():
    node = iron.parse("[1 2]").kids[0]
    first = irontest.run_ast(node)
    second = irontest.run_ast(node)
    assert first == [1, 2]
    assert isinstance(first, iron.Array)
    assert first is not second


def test_root_returns_last_value():
    root = iron.parse("; start\n1 2 3")
    assert irontest.run_ast(root) == 3
    assert irontest.run_ast(iron.parse("")) is None


def test_apply_node():
    add = iron.builtin.create_module()["+"]
    assert irontest.run_ast(iron.ast.Apply(add, [1, 2, 3])) == 6


def test_deep_recursion():
    """Iron recursion runs on the frame chain, not the Python stack."""
    code = """
    (define count (fn [n] (if (= n 0) 'done (count (+ n -1)))))
    (count 20000)
    """
    assert irontest.run(code) == iron.Symbol("done")


def test_max_depth():
    interp = iron.Interp(max_depth=100)
    interp.run("(define count (fn [n] (if (= n 0) 'done (count (+ n -1)))))")
    assert interp.run("(count 5)") == iron.Symbol("done")

    with pytest.raises(iron.EvalError) as exc_info:
        interp.run("(count 1000)")
    irontest.assert_error(exc_info, "evaluation depth exceeded 100 frames")


def test_error_gets_position():
    with pytest.raises(iron.EvalError) as exc_info:
        iron.Interp().run("(define x 1)\n(print (get x 0))", filename="where.irl")
    position = exc_info.value.position
    assert position.filename == "where.irl"
    assert position.start_line == 2
    assert str(exc_info.value).endswith("(where.irl:2:8)")


def test_error_from_callback_gets_call_site():
    """Calls made from Python builtins report the nearest source node."""
    with pytest.raises(iron.EvalError) as exc_info:
        iron.Interp().run("(do\n  (fn [] 1)\n  5)")
    assert exc_info.value.position.start_line == 1


def test_python_errors_are_not_wrapped():
    def explode(frame):
        raise ZeroDivisionError("boom")

    with pytest.raises(ZeroDivisionError):
        irontest.run("(explode)", explode=iron.Builtin("explode", explode))


def test_generators_closed_on_error():
    closed = []

    def watch(frame, func):
        try:
            yield frame.call(func)
        finally:
            closed.append(True)

    with pytest.raises(iron.EvalError):
        irontest.run("(watch (fn [] (missing)))", watch=iron.Builtin("watch", watch))
    assert closed == [True]
