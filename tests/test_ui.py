import pytest

from rustlings.ui import success, warn


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)


def test_warn_without_emoji(monkeypatch, capsys):
    monkeypatch.setenv("NO_EMOJI", "1")
    warn("Compilation of exercises/intro/intro1.rs failed!")
    out = capsys.readouterr().out
    assert out.rstrip("\n") == "! Compilation of exercises/intro/intro1.rs failed!"


def test_success_without_emoji(monkeypatch, capsys):
    monkeypatch.setenv("NO_EMOJI", "1")
    success("Successfully ran exercises/intro/intro1.rs")
    out = capsys.readouterr().out
    assert out.rstrip("\n") == "✓ Successfully ran exercises/intro/intro1.rs"


def test_warn_with_emoji(monkeypatch, capsys):
    monkeypatch.delenv("NO_EMOJI", raising=False)
    warn("Ran it with errors")
    out = capsys.readouterr().out.rstrip("\n")
    assert out.startswith("⚠️")
    assert out.endswith(" Ran it with errors")


def test_success_with_emoji(monkeypatch, capsys):
    monkeypatch.delenv("NO_EMOJI", raising=False)
    success("Successfully tested it")
    out = capsys.readouterr().out.rstrip("\n")
    assert out == "✅ Successfully tested it"


def test_markup_is_printed_literally(monkeypatch, capsys):
    monkeypatch.setenv("NO_EMOJI", "1")
    warn("[bold]not markup[/bold]")
    out = capsys.readouterr().out
    assert "[bold]not markup[/bold]" in out