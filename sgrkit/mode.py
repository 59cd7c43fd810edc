"""Color mode — should escapes be emitted for this render?

Resolution order: per-call override, else the process-wide default mode.
``ALWAYS`` / ``NEVER`` are final; the ``AUTO_*`` modes ask the detector about
their stream.

The process default is initialized once from the environment on first use
(``NO_COLOR``, ``FORCE_COLOR``, ``ALWAYS_COLOR``) and afterwards only changes
through ``set_default_mode`` / ``reset_default_mode``.
"""

from __future__ import annotations

import enum
import functools
import logging
import os
import sys
import threading
from typing import Callable, Mapping, TextIO

log = logging.getLogger(__name__)

_FALSY = {"", "0", "false", "no", "off"}


class ColorMode(enum.Enum):
    ALWAYS = "always"
    NEVER = "never"
    AUTO_STDOUT = "stdout"
    AUTO_STDERR = "stderr"
    AUTO_STDIN = "stdin"

    @property
    def is_auto(self) -> bool:
        return self in (ColorMode.AUTO_STDOUT, ColorMode.AUTO_STDERR, ColorMode.AUTO_STDIN)

    @classmethod
    def parse(cls, text: str) -> ColorMode:
        """Mode from its config name; ``auto`` means stdout."""
        name = text.strip().lower()
        if name == "auto":
            return cls.AUTO_STDOUT
        try:
            return cls(name)
        except ValueError:
            raise ValueError(
                f"unknown color mode {text!r} "
                "(expected always, never, auto, stdout, stderr or stdin)"
            ) from None


# ── Environment / tty detection ──────────────────────────────────

def _flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() not in _FALSY


def _no_color(environ: Mapping[str, str]) -> bool:
    # no-color.org: any non-empty value disables color
    return bool(environ.get("NO_COLOR"))


def _force_color(environ: Mapping[str, str]) -> bool:
    return _flag(environ, "FORCE_COLOR") or _flag(environ, "ALWAYS_COLOR")


def mode_from_env(environ: Mapping[str, str] | None = None) -> ColorMode:
    """Default mode implied by the environment variables."""
    if environ is None:
        environ = os.environ
    if _no_color(environ):
        return ColorMode.NEVER
    if _force_color(environ):
        return ColorMode.ALWAYS
    return ColorMode.AUTO_STDOUT


_STREAMS: dict[ColorMode, Callable[[], TextIO | None]] = {
    ColorMode.AUTO_STDOUT: lambda: sys.stdout,
    ColorMode.AUTO_STDERR: lambda: sys.stderr,
    ColorMode.AUTO_STDIN: lambda: sys.stdin,
}


def _isatty(stream: TextIO | None) -> bool:
    if stream is None:
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError, OSError):
        # replaced by a non-file object, or already closed
        return False


def _stream_supports_color(stream: TextIO | None) -> bool:
    if _no_color(os.environ):
        return False
    if _force_color(os.environ):
        return True
    return _isatty(stream)


@functools.lru_cache(maxsize=None)
def detect_color_support(mode: ColorMode) -> bool:
    """Whether the stream behind an ``AUTO_*`` mode should be colorized.

    Read once per stream and kept for the life of the process.
    """
    if not mode.is_auto:
        raise ValueError(f"{mode} is not bound to a stream")
    result = _stream_supports_color(_STREAMS[mode]())
    log.debug("Color support for %s: %s", mode.value, result)
    return result


def stream_mode(stream: TextIO | None) -> ColorMode | None:
    """The ``AUTO_*`` mode bound to a standard stream, or None for any other file."""
    if stream is None:
        return None
    for mode, current in _STREAMS.items():
        if stream is current():
            return mode
    return None


Detector = Callable[[ColorMode], bool]

_detector: Detector = detect_color_support


def set_detector(detector: Detector | None) -> None:
    """Replace the stream detector; ``None`` restores the built-in one."""
    global _detector
    _detector = detector if detector is not None else detect_color_support


# ── Process default ──────────────────────────────────────────────

_default_mode: ColorMode | None = None
_init_lock = threading.Lock()


def get_default_mode() -> ColorMode:
    mode = _default_mode
    if mode is not None:
        return mode
    return _init_default_mode()


def _init_default_mode() -> ColorMode:
    global _default_mode
    with _init_lock:
        if _default_mode is None:
            _default_mode = mode_from_env()
            log.debug("Default color mode from environment: %s", _default_mode.value)
        return _default_mode


def set_default_mode(mode: ColorMode) -> None:
    """Override the process default. Not meant to race with rendering."""
    global _default_mode
    if not isinstance(mode, ColorMode):
        raise TypeError(f"expected ColorMode, got {type(mode).__name__}")
    with _init_lock:
        _default_mode = mode
    log.info("Default color mode set to %s", mode.value)


def reset_default_mode() -> None:
    """Forget the default; the next read initializes it from the environment again."""
    global _default_mode
    with _init_lock:
        _default_mode = None


def should_color(override: ColorMode | None = None) -> bool:
    mode = override if override is not None else get_default_mode()
    if mode is ColorMode.ALWAYS:
        return True
    if mode is ColorMode.NEVER:
        return False
    return _detector(mode)


def should_color_stream(stream: TextIO | None, override: ColorMode | None = None) -> bool:
    """Like ``should_color``, but an ``AUTO_*`` default probes ``stream`` itself.

    Standard streams go through the detector; any other file is checked
    on every call since it is not known to the process-wide cache.
    """
    if override is not None:
        return should_color(override)
    mode = get_default_mode()
    if not mode.is_auto:
        return mode is ColorMode.ALWAYS
    bound = stream_mode(stream)
    if bound is not None:
        return _detector(bound)
    return _stream_supports_color(stream)
