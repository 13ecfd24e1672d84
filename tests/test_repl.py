"""Test the REPL evaluation context."""

import pytest

import iron
from iron import repl


def test_eval_line():
    context = repl.ReplContext()
    assert context.eval_line("(+ 1 2)") == (True, 3)
    assert context.eval_line("(define x 10)") == (True, 10)
    assert context.eval_line("(+ x 1)") == (True, 11)


def test_last_result():
    context = repl.ReplContext()
    context.eval_line("(+ 20 1)")
    assert context.eval_line("(+ _ _)") == (True, 42)


def test_multiline_input():
    context = repl.ReplContext()
    assert context.eval_line("(define add (fn [a b]") == (False, None)
    assert context.eval_line("  (+ a b)))") == (True, context.interp.lookup("add"))
    assert context.eval_line("(add 2 3)") == (True, 5)


def test_error_resets_pending():
    context = repl.ReplContext()
    with pytest.raises(iron.EvalError):
        context.eval_line("(missing)")
    with pytest.raises(iron.ParseError):
        context.eval_line("(+ 1 ]")
    assert context.pending == []
    assert context.eval_line("1") == (True, 1)


def test_format_value():
    assert repl.format_value(None) == "nil"
    assert repl.format_value(iron.Array([1, "a", iron.Symbol("s")])) == '[1 "a" \'s]'
    assert repl.format_value(iron.List((iron.Symbol("a"), iron.List((1,))))) == "'(a (1))"
    assert repl.format_value(iron.builtin.create_module()["len"]) == "<builtin len>"
    func = iron.Interp().run("(fn [v] (+ v 1))")
    assert repl.format_value(func) == "(fn [v] (+ v 1))"


def test_repl_session(monkeypatch, capsys):
    lines = iter(["(define greeting \"hi\")", "", "(print greeting)", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    repl.repl()
    out = capsys.readouterr().out
    assert '"hi"' in out
    assert "hinil" in out
    assert "Goodbye!" in out
