"""Tests for the sgrkit command line."""

import io

import pytest

from sgrkit.cli import main
from sgrkit.config import CONFIG_ENV
from sgrkit.mode import ColorMode, get_default_mode, reset_default_mode


@pytest.fixture(autouse=True)
def clean_mode(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    reset_default_mode()
    yield
    reset_default_mode()


def _run(*argv):
    out = io.StringIO()
    code = main(list(argv), out=out)
    return code, out.getvalue()


class TestSwatches:
    def test_ansi_never(self):
        code, out = _run("--mode", "never", "ansi")
        assert code == 0
        assert "\033[" not in out
        assert "bright_red" in out
        assert len(out.splitlines()) == 16

    def test_ansi_always(self):
        code, out = _run("--mode", "always", "ansi")
        assert code == 0
        assert "\033[91m" in out
        assert "\033[101m" in out

    def test_xterm(self):
        code, out = _run("--mode", "always", "xterm")
        assert code == 0
        assert len(out.splitlines()) == 16
        assert "\033[48;5;255m 255\033[0m" in out

    def test_effects(self):
        code, out = _run("--mode", "always", "effects")
        assert code == 0
        assert "\033[9mstrikethrough\033[0m" in out


class TestShow:
    def test_rgb(self):
        code, out = _run("show", "rgb", "255", "0", "0")
        assert code == 0
        assert "'38;2;255;0;0'" in out
        assert repr("\033[58;2;255;0;0m") in out

    def test_xterm(self):
        code, out = _run("show", "xterm", "196")
        assert code == 0
        assert "'48;5;196'" in out

    def test_ansi(self):
        code, out = _run("show", "ansi", "9")
        assert code == 0
        assert "'90'" not in out
        assert "'91'" in out
        assert "'101'" in out

    def test_bad_arity(self):
        code, out = _run("show", "rgb", "1", "2")
        assert code == 2
        assert out == ""

    def test_out_of_range(self):
        code, _ = _run("show", "xterm", "300")
        assert code == 2


class TestOptions:
    def test_bad_mode(self):
        code, _ = _run("--mode", "sometimes", "ansi")
        assert code == 2

    def test_config_applies_default(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("color:\n  mode: never\n", encoding="utf-8")
        code, out = _run("--config", str(path), "effects")
        assert code == 0
        assert "\033[" not in out
        assert get_default_mode() is ColorMode.NEVER

    def test_missing_command(self):
        with pytest.raises(SystemExit):
            main([], out=io.StringIO())
