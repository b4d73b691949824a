import builtins
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from lox.lox_repl import PROMPT, print_traceback, start_repl


def feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> list[str]:
    """Answer input() with ``lines`` and then end of input; returns the prompts seen."""
    prompts: list[str] = []
    it: Iterator[str] = iter(lines)

    def fake_input(prompt: str = "") -> str:
        prompts.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)
    return prompts


def test_repl_banner_and_exit(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, [""])
    assert start_repl() == 0
    out = capsys.readouterr().out
    assert out.startswith("Lox REPL.")
    assert out.rstrip().endswith("Exiting Lox REPL.")


def test_repl_runs_each_line(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    prompts = feed(monkeypatch, ["print 1 + 1;", 'print "two";', ""])
    start_repl()
    out = capsys.readouterr().out
    assert "2\ntwo\n" in out
    assert prompts == [PROMPT] * 3


def test_repl_lines_do_not_share_variables(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["var a = 1;", "print a;"])
    start_repl()
    captured = capsys.readouterr()
    assert "nil\n" in captured.out
    assert "Undefined variable 'a'." in captured.err


def test_repl_errors_do_not_end_session(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["print ;", "@", "print 3;"])
    start_repl()
    captured = capsys.readouterr()
    assert "3\n" in captured.out
    assert "Expect expression, got ';'." in captured.err
    assert "Unexpected character '@'." in captured.err


def test_repl_whitespace_line_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    prompts = feed(monkeypatch, ["   ", "print 1;"])
    start_repl()
    assert len(prompts) == 1
    assert "1\n" not in capsys.readouterr().out


def test_repl_end_of_input(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, [])
    assert start_repl() == 0
    assert "Exiting Lox REPL." in capsys.readouterr().out


def test_repl_keyboard_interrupt(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(
        builtins, "input", lambda _: (_ for _ in ()).throw(KeyboardInterrupt())
    )
    assert start_repl() == 0
    assert "Exiting Lox REPL." in capsys.readouterr().out


def test_repl_prints_ast_when_asked(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["print 1;"])
    start_repl(print_ast=True)
    assert "(print 1)\n1\n" in capsys.readouterr().out


def test_repl_internal_error_prints_traceback(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(*args: object, **kwargs: object) -> int:
        raise NotImplementedError("no handler")

    feed(monkeypatch, ["print 1;"])
    monkeypatch.setattr("lox.lox_repl.run_source", broken)
    with patch("builtins.print") as mock_print:
        start_repl()
    printed = [str(call.args[0]) for call in mock_print.call_args_list if call.args]
    assert "[internal error] >>>" in printed
    assert any("NotImplementedError: no handler" in text for text in printed)


def test_print_traceback_outputs_error() -> None:
    with patch("builtins.print") as mock_print:
        try:
            raise ValueError("boom")
        except ValueError:
            print_traceback()
    assert mock_print.call_args_list[0].args[0] == "[internal error] >>>"
    assert "ValueError: boom" in mock_print.call_args_list[1].args[0]
