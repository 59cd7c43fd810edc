"""Text effects — SGR attribute codes and an immutable bit set over them."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator


class Effect(enum.Enum):
    """Text attributes; the value is the SGR code that turns the attribute on.

    Declaration order is the canonical order: bit ``i`` belongs to the
    ``i``-th member, and codes ascend with it.
    """

    BOLD = 1
    DIMMED = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    BLINK_FAST = 6
    REVERSED = 7
    HIDDEN = 8
    STRIKETHROUGH = 9
    DOUBLE_UNDERLINE = 21
    NO_UNDERLINE = 24
    OVERLINE = 53
    SUPERSCRIPT = 73
    SUBSCRIPT = 74

    @property
    def code(self) -> str:
        return _CODES[self]

    @property
    def bit(self) -> int:
        return _BITS[self]

    def __or__(self, other: Effect | EffectFlags) -> EffectFlags:
        return EffectFlags(self.bit) | other


_EFFECTS: tuple[Effect, ...] = tuple(Effect)
_BITS: dict[Effect, int] = {effect: 1 << i for i, effect in enumerate(_EFFECTS)}
_CODES: dict[Effect, str] = {effect: str(effect.value) for effect in _EFFECTS}
_ALL_BITS = (1 << len(_EFFECTS)) - 1


def _bits_of(other: Effect | EffectFlags) -> int:
    if isinstance(other, Effect):
        return _BITS[other]
    if isinstance(other, EffectFlags):
        return other.bits
    raise TypeError(f"expected Effect or EffectFlags, got {type(other).__name__}")


@dataclass(frozen=True, slots=True)
class EffectFlags:
    """A set of effects stored as one int."""

    bits: int = 0

    def __post_init__(self) -> None:
        if self.bits & ~_ALL_BITS or self.bits < 0:
            raise ValueError(f"unknown effect bits: {self.bits:#x}")

    @classmethod
    def of(cls, *effects: Effect) -> EffectFlags:
        bits = 0
        for effect in effects:
            bits |= _bits_of(effect)
        return cls(bits)

    @classmethod
    def from_iter(cls, effects: Iterable[Effect]) -> EffectFlags:
        return cls.of(*effects)

    def union(self, other: Effect | EffectFlags) -> EffectFlags:
        return EffectFlags(self.bits | _bits_of(other))

    def remove(self, other: Effect | EffectFlags) -> EffectFlags:
        return EffectFlags(self.bits & ~_bits_of(other))

    def contains(self, effect: Effect) -> bool:
        return bool(self.bits & _BITS[effect])

    __or__ = union
    __ror__ = union
    __sub__ = remove

    def __contains__(self, effect: object) -> bool:
        return isinstance(effect, Effect) and self.contains(effect)

    def __iter__(self) -> Iterator[Effect]:
        bits = self.bits
        while bits:
            low = bits & -bits
            yield _EFFECTS[low.bit_length() - 1]
            bits ^= low

    def codes(self) -> Iterator[str]:
        """SGR codes of the active effects, lowest bit first."""
        for effect in self:
            yield _CODES[effect]

    def __len__(self) -> int:
        return bin(self.bits).count("1")

    def __bool__(self) -> bool:
        return self.bits != 0

    def is_empty(self) -> bool:
        return self.bits == 0

    def __repr__(self) -> str:
        names = "|".join(effect.name for effect in self)
        return f"EffectFlags({names or 'none'})"
