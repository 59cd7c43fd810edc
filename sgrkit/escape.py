"""SGR escape encoder — color values + layer → parameter strings / escape sequences.

Supports: 16-color (30-37, 90-97 / 40-47, 100-107), 256-color (x8;5;N),
24-bit truecolor (x8;2;R;G;B) on the foreground, background and underline layers.
"""

from __future__ import annotations

import enum
import re
from typing import NamedTuple

_ESC = "\033["
RESET = f"{_ESC}0m"

# Longest sequence the encoder can produce: "\x1b[38;2;255;255;255m"
MAX_ESCAPE_LEN = 19

_ANSI_RE = re.compile(r"\033\[[0-9;]*m")


class Layer(enum.IntEnum):
    """Which text facet a color targets; the value is the leading SGR digit."""

    FOREGROUND = 3
    BACKGROUND = 4
    UNDERLINE = 5


# ── Runtime encoder ──────────────────────────────────────────────

_ZERO = ord("0")
_SEP = ord(";")


class _SgrBuffer:
    """Fixed-size byte buffer for one escape sequence."""

    __slots__ = ("data", "len")

    def __init__(self) -> None:
        # pre-filled with separators, so write_sep only advances
        self.data = bytearray(b";" * MAX_ESCAPE_LEN)
        self.len = 0

    def write(self, s: bytes) -> None:
        end = self.len + len(s)
        self.data[self.len:end] = s
        self.len = end

    def write_sep(self) -> None:
        self.len += 1

    def write_u8(self, x: int) -> None:
        data = self.data
        pos = self.len
        if x >= 100:
            data[pos] = _ZERO + x // 100
            pos += 1
        if x >= 10:
            data[pos] = _ZERO + x // 10 % 10
            pos += 1
        data[pos] = _ZERO + x % 10
        self.len = pos + 1

    def write_header(self, layer: Layer, model: int, escape: bool) -> None:
        if escape:
            self.write(b"\033[")
        # "38;" + model + ";"
        data = self.data
        pos = self.len
        data[pos] = _ZERO + layer
        data[pos + 1] = _ZERO + 8
        data[pos + 3] = _ZERO + model
        self.len = pos + 5

    def write_rgb(self, red: int, green: int, blue: int) -> None:
        self.write_u8(red)
        self.write_sep()
        self.write_u8(green)
        self.write_sep()
        self.write_u8(blue)

    def finish(self) -> None:
        self.data[self.len] = ord("m")
        self.len += 1

    def getvalue(self) -> str:
        return self.data[: self.len].decode("ascii")


def rgb_args(layer: Layer, red: int, green: int, blue: int) -> str:
    """`38;2;r;g;b` (or 48/58) for a 24-bit color."""
    buf = _SgrBuffer()
    buf.write_header(layer, 2, escape=False)
    buf.write_rgb(red, green, blue)
    return buf.getvalue()


def rgb_escape(layer: Layer, red: int, green: int, blue: int) -> str:
    buf = _SgrBuffer()
    buf.write_header(layer, 2, escape=True)
    buf.write_rgb(red, green, blue)
    buf.finish()
    return buf.getvalue()


def xterm_args(layer: Layer, index: int) -> str:
    """`38;5;n` (or 48/58) for a 256-color palette index."""
    buf = _SgrBuffer()
    buf.write_header(layer, 5, escape=False)
    buf.write_u8(index)
    return buf.getvalue()


def xterm_escape(layer: Layer, index: int) -> str:
    buf = _SgrBuffer()
    buf.write_header(layer, 5, escape=True)
    buf.write_u8(index)
    buf.finish()
    return buf.getvalue()


# ── 16-color codes ───────────────────────────────────────────────

def _ansi_code(layer: Layer, index: int) -> str:
    if layer is Layer.UNDERLINE:
        # no 3-digit family for underline color, always the indexed form
        return f"58;5;{index}"
    base = 30 if layer is Layer.FOREGROUND else 40
    if index < 8:
        return str(base + index)
    return str(base + 60 + index - 8)


# [layer][index] → params / escape for the 16 named colors
ANSI_ARGS: dict[Layer, tuple[str, ...]] = {
    layer: tuple(_ansi_code(layer, n) for n in range(16)) for layer in Layer
}
ANSI_ESCAPES: dict[Layer, tuple[str, ...]] = {
    layer: tuple(f"{_ESC}{code}m" for code in codes) for layer, codes in ANSI_ARGS.items()
}


# ── Precomputed payloads ─────────────────────────────────────────

class Payload(NamedTuple):
    """One precomputed escape and the substrings trimmed out of it."""

    escape: str  # "\x1b[38;2;r;g;bm"
    args: str    # "38;2;r;g;b"
    raw: str     # "2;r;g;b"


def _digits(x: int) -> str:
    if x >= 100:
        return chr(_ZERO + x // 100) + chr(_ZERO + x // 10 % 10) + chr(_ZERO + x % 10)
    if x >= 10:
        return chr(_ZERO + x // 10) + chr(_ZERO + x % 10)
    return chr(_ZERO + x)


def _payload(escape: str) -> Payload:
    # "\x1b[" is 2 chars, "\x1b[38;" is 5, the trailing "m" is 1
    return Payload(escape, escape[2:-1], escape[5:-1])


def rgb_payload(layer: Layer, red: int, green: int, blue: int) -> Payload:
    escape = f"{_ESC}{layer}8;2;{_digits(red)};{_digits(green)};{_digits(blue)}m"
    return _payload(escape)


def xterm_payload(layer: Layer, index: int) -> Payload:
    return _payload(f"{_ESC}{layer}8;5;{_digits(index)}m")


# [index][layer - 3] → Payload, built once at import
XTERM_TABLE: tuple[tuple[Payload, Payload, Payload], ...] = tuple(
    (
        xterm_payload(Layer.FOREGROUND, n),
        xterm_payload(Layer.BACKGROUND, n),
        xterm_payload(Layer.UNDERLINE, n),
    )
    for n in range(256)
)


def join_params(params: list[str]) -> str:
    """Wrap `;`-joined parameters into one escape; empty list → empty string."""
    if not params:
        return ""
    return f"{_ESC}{';'.join(params)}m"


def strip_ansi(text: str) -> str:
    """Remove all ANSI SGR escape sequences from text."""
    return _ANSI_RE.sub("", text)
