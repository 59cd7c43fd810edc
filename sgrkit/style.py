"""Style — colors for the three layers plus effects, rendered as one escape pair.

All parameters go into a single ``\\x1b[...m`` opener followed by one
``\\x1b[0m``. Nested styled values each emit their own pair, and the inner
reset also clears whatever the outer style set; text after an inner styled
value is therefore unstyled until the outer reset.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, TextIO

from sgrkit.colors import NO_COLOR, ColorSpec, Presence, encode_params, is_color_spec
from sgrkit.effects import Effect, EffectFlags
from sgrkit.escape import RESET, Layer, join_params
from sgrkit.mode import ColorMode, should_color, should_color_stream


def _slot(color: ColorSpec | None) -> ColorSpec:
    if color is None:
        return NO_COLOR
    if not is_color_spec(color):
        raise TypeError(f"not a color: {color!r}")
    return color


def _slot_params(color: ColorSpec, layer: Layer, params: list[str]) -> None:
    presence = color.kind()
    if presence is Presence.NEVER:
        return
    if presence is Presence.MAYBE and color.get() is None:
        return
    params.append(encode_params(color, layer))


@dataclass(frozen=True, slots=True)
class Style:
    foreground: ColorSpec = NO_COLOR
    background: ColorSpec = NO_COLOR
    underline_color: ColorSpec = NO_COLOR
    effects: EffectFlags = field(default_factory=EffectFlags)

    def __post_init__(self) -> None:
        object.__setattr__(self, "foreground", _slot(self.foreground))
        object.__setattr__(self, "background", _slot(self.background))
        object.__setattr__(self, "underline_color", _slot(self.underline_color))
        if isinstance(self.effects, Effect):
            object.__setattr__(self, "effects", EffectFlags.of(self.effects))
        elif not isinstance(self.effects, EffectFlags):
            object.__setattr__(self, "effects", EffectFlags.from_iter(self.effects))

    # ── Builders ─────────────────────────────────────────────────

    def fg(self, color: ColorSpec | None) -> Style:
        return replace(self, foreground=color)

    def bg(self, color: ColorSpec | None) -> Style:
        return replace(self, background=color)

    def ul(self, color: ColorSpec | None) -> Style:
        """Set the underline color; see ``underline()`` for the effect."""
        return replace(self, underline_color=color)

    def effect(self, effect: Effect) -> Style:
        return replace(self, effects=self.effects | effect)

    def with_effects(self, *effects: Effect) -> Style:
        return replace(self, effects=self.effects | EffectFlags.of(*effects))

    def without(self, *effects: Effect) -> Style:
        return replace(self, effects=self.effects - EffectFlags.of(*effects))

    def bold(self) -> Style:
        return self.effect(Effect.BOLD)

    def dimmed(self) -> Style:
        return self.effect(Effect.DIMMED)

    def italic(self) -> Style:
        return self.effect(Effect.ITALIC)

    def underline(self) -> Style:
        return self.effect(Effect.UNDERLINE)

    def blink(self) -> Style:
        return self.effect(Effect.BLINK)

    def reversed(self) -> Style:
        return self.effect(Effect.REVERSED)

    def hidden(self) -> Style:
        return self.effect(Effect.HIDDEN)

    def strikethrough(self) -> Style:
        return self.effect(Effect.STRIKETHROUGH)

    # ── Rendering ────────────────────────────────────────────────

    def params(self) -> list[str]:
        """SGR parameters in output order: fg, bg, underline color, effects."""
        params: list[str] = []
        _slot_params(self.foreground, Layer.FOREGROUND, params)
        _slot_params(self.background, Layer.BACKGROUND, params)
        _slot_params(self.underline_color, Layer.UNDERLINE, params)
        params.extend(self.effects.codes())
        return params

    def prefix(self) -> str:
        """The opening escape, or ``""`` when nothing is set."""
        return join_params(self.params())

    def is_plain(self) -> bool:
        return not self.params()

    def render(self, value: Any, mode: ColorMode | None = None, format_spec: str = "") -> str:
        return self._wrap(format(value, format_spec), should_color(mode))

    def _wrap(self, text: str, enabled: bool) -> str:
        if not enabled:
            return text
        prefix = self.prefix()
        if not prefix:
            return text
        return f"{prefix}{text}{RESET}"

    def apply(self, value: Any, mode: ColorMode | None = None) -> StyledValue:
        return StyledValue(value, self, mode)

    def write(self, value: Any, file: TextIO | None = None, mode: ColorMode | None = None) -> None:
        """Render into ``file`` (stdout by default); write errors propagate.

        Without an explicit ``mode``, an ``AUTO_*`` default is decided by
        ``file`` itself rather than by the stream the default names.
        """
        if file is None:
            file = sys.stdout
        file.write(self._wrap(format(value), should_color_stream(file, mode)))


@dataclass(frozen=True, slots=True)
class StyledValue:
    """A value bound to a style; ``str()`` / ``format()`` render it."""

    value: Any
    style: Style = field(default_factory=Style)
    mode: ColorMode | None = None

    def with_mode(self, mode: ColorMode | None) -> StyledValue:
        return replace(self, mode=mode)

    def __str__(self) -> str:
        return self.style.render(self.value, self.mode)

    def __format__(self, format_spec: str) -> str:
        return self.style.render(self.value, self.mode, format_spec)


def paint(
    value: Any,
    fg: ColorSpec | None = None,
    bg: ColorSpec | None = None,
    ul: ColorSpec | None = None,
    effects: Iterable[Effect] = (),
    mode: ColorMode | None = None,
) -> StyledValue:
    style = Style(fg, bg, ul, EffectFlags.from_iter(effects))
    return StyledValue(value, style, mode)
