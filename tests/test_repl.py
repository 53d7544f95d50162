import builtins
from collections.abc import Iterator

import pytest

from monkey.monkey_repl import start_repl


def feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it: Iterator[str] = iter(lines)

    def fake_input(_: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


def test_repl_quit(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["quit"])
    start_repl()
    assert "Exiting Monkey REPL" in capsys.readouterr().out


def test_repl_exits_on_eof(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, [])
    start_repl()
    assert "Exiting Monkey REPL" in capsys.readouterr().out


def test_repl_prints_rendering(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["-a * b", "exit"])
    start_repl()
    assert "((-a) * b)" in capsys.readouterr().out


def test_repl_multiline_entry(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["let f = fn(x) {", "  x + 1", "};", "exit"])
    start_repl()
    assert "let f = fn(x) { (x + 1); };" in capsys.readouterr().out


def test_repl_reports_parse_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["let 5;", "exit"])
    start_repl()
    out = capsys.readouterr().out
    assert "[parse error] >>>" in out
    assert "expected next token to be IDENT, got INT instead" in out


def test_repl_reports_lexer_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ['"unterminated', "exit"])
    start_repl()
    out = capsys.readouterr().out
    assert "[error] >>>" in out
    assert "Unterminated string" in out


def test_repl_verbose_toggle(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["verbose-mode", "x", "exit"])
    start_repl()
    out = capsys.readouterr().out
    assert "Verbose mode ON" in out
    assert '"kind": "Identifier"' in out


def test_repl_skips_blank_and_comments(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, ["", "# note", "exit"])
    start_repl()
    out = capsys.readouterr().out
    assert "[parse error]" not in out
