"""Color model — ANSI / Xterm / RGB colors, comptime colors, optional colors.

Every color spec answers the same surface: ``get()``, ``kind()``, the per-layer
``*_args()`` parameter strings and the per-layer full escapes. The set of
color specs is closed; ``encode_params`` / ``encode_escape`` dispatch over it.
"""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field
from typing import final

from sgrkit.escape import (
    ANSI_ARGS,
    ANSI_ESCAPES,
    XTERM_TABLE,
    Layer,
    Payload,
    rgb_args,
    rgb_escape,
    rgb_payload,
)


class Presence(enum.Enum):
    """Whether a color spec renders: always, only when set, or never."""

    ALWAYS = "always"
    MAYBE = "maybe"
    NEVER = "never"


class ColorModel(enum.Enum):
    ANSI = "ansi"
    XTERM = "xterm"
    RGB = "rgb"


def _check_u8(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be in 0..255, got {value}")


class _LayerMethods:
    """Per-layer accessors built on ``args(layer)`` / ``escape(layer)``."""

    __slots__ = ()

    def foreground_args(self) -> str:
        return self.args(Layer.FOREGROUND)

    def background_args(self) -> str:
        return self.args(Layer.BACKGROUND)

    def underline_args(self) -> str:
        return self.args(Layer.UNDERLINE)

    def foreground(self) -> str:
        return self.escape(Layer.FOREGROUND)

    def background(self) -> str:
        return self.escape(Layer.BACKGROUND)

    def underline(self) -> str:
        return self.escape(Layer.UNDERLINE)


# ── Runtime colors ───────────────────────────────────────────────

@final
class AnsiColor(_LayerMethods, enum.IntEnum):
    """The 16 named terminal colors (8 base + 8 bright)."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7
    BRIGHT_BLACK = 8
    BRIGHT_RED = 9
    BRIGHT_GREEN = 10
    BRIGHT_YELLOW = 11
    BRIGHT_BLUE = 12
    BRIGHT_MAGENTA = 13
    BRIGHT_CYAN = 14
    BRIGHT_WHITE = 15

    @property
    def model(self) -> ColorModel:
        return ColorModel.ANSI

    @property
    def is_bright(self) -> bool:
        return self >= 8

    def get(self) -> AnsiColor:
        return self

    def kind(self) -> Presence:
        return Presence.ALWAYS

    def args(self, layer: Layer) -> str:
        return ANSI_ARGS[layer][self]

    def escape(self, layer: Layer) -> str:
        return ANSI_ESCAPES[layer][self]


@final
@dataclass(frozen=True, slots=True)
class XtermColor(_LayerMethods):
    """A 256-color palette index."""

    index: int

    def __post_init__(self) -> None:
        _check_u8("index", self.index)

    @classmethod
    def from_code(cls, index: int) -> XtermColor:
        return cls(index)

    @property
    def model(self) -> ColorModel:
        return ColorModel.XTERM

    def get(self) -> XtermColor:
        return self

    def kind(self) -> Presence:
        return Presence.ALWAYS

    def args(self, layer: Layer) -> str:
        return XTERM_TABLE[self.index][layer - Layer.FOREGROUND].args

    def escape(self, layer: Layer) -> str:
        return XTERM_TABLE[self.index][layer - Layer.FOREGROUND].escape


@final
@dataclass(frozen=True, slots=True)
class RgbColor(_LayerMethods):
    """A 24-bit color; its digits are encoded on every call."""

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        _check_u8("red", self.red)
        _check_u8("green", self.green)
        _check_u8("blue", self.blue)

    @property
    def model(self) -> ColorModel:
        return ColorModel.RGB

    def get(self) -> RgbColor:
        return self

    def kind(self) -> Presence:
        return Presence.ALWAYS

    def args(self, layer: Layer) -> str:
        return rgb_args(layer, self.red, self.green, self.blue)

    def escape(self, layer: Layer) -> str:
        return rgb_escape(layer, self.red, self.green, self.blue)


Color = AnsiColor | XtermColor | RgbColor


# ── Placeholder / optional ───────────────────────────────────────

@final
class NoColor(_LayerMethods):
    """Placeholder for an unset slot; never renders anything."""

    __slots__ = ()
    _instance: NoColor | None = None

    def __new__(cls) -> NoColor:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_COLOR"

    def __reduce__(self) -> str:
        return "NO_COLOR"

    @property
    def value(self) -> None:
        return None

    def get(self) -> None:
        return None

    def kind(self) -> Presence:
        return Presence.NEVER

    def args(self, layer: Layer) -> str:
        return ""

    def escape(self, layer: Layer) -> str:
        return ""


NO_COLOR = NoColor()


@final
@dataclass(frozen=True, slots=True)
class MaybeColor(_LayerMethods):
    """An optional color: renders only when ``color`` is set."""

    color: Color | None = None

    def __post_init__(self) -> None:
        if self.color is not None and not isinstance(self.color, _CONCRETE):
            raise TypeError(f"MaybeColor wraps a concrete color, got {type(self.color).__name__}")

    def get(self) -> Color | None:
        return self.color

    def kind(self) -> Presence:
        return Presence.MAYBE

    def args(self, layer: Layer) -> str:
        if self.color is None:
            return ""
        return self.color.args(layer)

    def escape(self, layer: Layer) -> str:
        if self.color is None:
            return ""
        return self.color.escape(layer)


# ── Comptime colors ──────────────────────────────────────────────

@final
@dataclass(frozen=True, slots=True)
class ConstRgb(_LayerMethods):
    """A 24-bit color whose escapes are computed once, at construction.

    The full escape is built per layer and the args are trimmed out of it,
    so the strings are byte-for-byte what ``RgbColor`` encodes at runtime.
    """

    red: int
    green: int
    blue: int
    _payloads: tuple[Payload, Payload, Payload] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        _check_u8("red", self.red)
        _check_u8("green", self.green)
        _check_u8("blue", self.blue)
        payloads = tuple(
            rgb_payload(layer, self.red, self.green, self.blue) for layer in Layer
        )
        object.__setattr__(self, "_payloads", payloads)

    @property
    def model(self) -> ColorModel:
        return ColorModel.RGB

    @property
    def raw_args(self) -> str:
        """``2;r;g;b`` without the layer prefix."""
        return self._payloads[0].raw

    @property
    def dynamic(self) -> RgbColor:
        return RgbColor(self.red, self.green, self.blue)

    @property
    def value(self) -> RgbColor:
        return self.dynamic

    def get(self) -> RgbColor:
        return self.dynamic

    def kind(self) -> Presence:
        return Presence.ALWAYS

    def args(self, layer: Layer) -> str:
        return self._payloads[layer - Layer.FOREGROUND].args

    def escape(self, layer: Layer) -> str:
        return self._payloads[layer - Layer.FOREGROUND].escape


@final
@dataclass(frozen=True, slots=True)
class ConstXterm(_LayerMethods):
    """A palette index backed by the import-time Xterm table."""

    index: int

    def __post_init__(self) -> None:
        _check_u8("index", self.index)

    @property
    def model(self) -> ColorModel:
        return ColorModel.XTERM

    @property
    def raw_args(self) -> str:
        """``5;n`` without the layer prefix."""
        return XTERM_TABLE[self.index][0].raw

    @property
    def dynamic(self) -> XtermColor:
        return XtermColor(self.index)

    @property
    def value(self) -> XtermColor:
        return self.dynamic

    def get(self) -> XtermColor:
        return self.dynamic

    def kind(self) -> Presence:
        return Presence.ALWAYS

    def args(self, layer: Layer) -> str:
        return XTERM_TABLE[self.index][layer - Layer.FOREGROUND].args

    def escape(self, layer: Layer) -> str:
        return XTERM_TABLE[self.index][layer - Layer.FOREGROUND].escape


XTERM: tuple[ConstXterm, ...] = tuple(ConstXterm(n) for n in range(256))


@functools.lru_cache(maxsize=1024)
def const_rgb(red: int, green: int, blue: int) -> ConstRgb:
    """Shared ``ConstRgb`` for a triple; repeated lookups reuse the strings."""
    return ConstRgb(red, green, blue)


def const_xterm(index: int) -> ConstXterm:
    _check_u8("index", index)
    return XTERM[index]


ColorSpec = AnsiColor | XtermColor | RgbColor | ConstRgb | ConstXterm | MaybeColor | NoColor

_CONCRETE = (AnsiColor, XtermColor, RgbColor)
_COMPTIME = (ConstRgb, ConstXterm)
_SPECS = (AnsiColor, XtermColor, RgbColor, ConstRgb, ConstXterm, MaybeColor, NoColor)


# ── Conversions ──────────────────────────────────────────────────

def is_color_spec(obj: object) -> bool:
    return isinstance(obj, _SPECS)


def to_color(spec: ColorSpec) -> Color | None:
    """Widen to the runtime ``Color`` union; ``NO_COLOR`` becomes ``None``."""
    if isinstance(spec, _CONCRETE):
        return spec
    if isinstance(spec, _COMPTIME):
        return spec.dynamic
    if isinstance(spec, NoColor):
        return None
    if isinstance(spec, MaybeColor):
        raise TypeError("MaybeColor cannot be narrowed to a Color")
    raise TypeError(f"not a color: {spec!r}")


def to_optional(spec: ColorSpec) -> MaybeColor:
    """Widen any color spec to ``MaybeColor``."""
    if isinstance(spec, MaybeColor):
        return spec
    return MaybeColor(to_color(spec))


# ── Encoder dispatch ─────────────────────────────────────────────

def encode_params(color: ColorSpec, layer: Layer) -> str:
    """SGR parameters for ``color`` on ``layer``; empty for an absent color."""
    if isinstance(color, AnsiColor):
        return ANSI_ARGS[layer][color]
    if isinstance(color, XtermColor):
        return XTERM_TABLE[color.index][layer - Layer.FOREGROUND].args
    if isinstance(color, RgbColor):
        return rgb_args(layer, color.red, color.green, color.blue)
    if isinstance(color, _COMPTIME):
        return color.args(layer)
    if isinstance(color, MaybeColor):
        return "" if color.color is None else encode_params(color.color, layer)
    if isinstance(color, NoColor):
        return ""
    raise TypeError(f"not a color: {color!r}")


def encode_escape(color: ColorSpec, layer: Layer) -> str:
    """Complete escape for ``color`` on ``layer``; empty for an absent color."""
    if isinstance(color, AnsiColor):
        return ANSI_ESCAPES[layer][color]
    if isinstance(color, XtermColor):
        return XTERM_TABLE[color.index][layer - Layer.FOREGROUND].escape
    if isinstance(color, RgbColor):
        return rgb_escape(layer, color.red, color.green, color.blue)
    if isinstance(color, _COMPTIME):
        return color.escape(layer)
    if isinstance(color, MaybeColor):
        return "" if color.color is None else encode_escape(color.color, layer)
    if isinstance(color, NoColor):
        return ""
    raise TypeError(f"not a color: {color!r}")
