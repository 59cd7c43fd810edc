"""sgrkit command line — color swatches and escape inspection."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence, TextIO

from sgrkit.colors import AnsiColor, ColorSpec, RgbColor, XtermColor
from sgrkit.config import ConfigError, apply_config, load_config
from sgrkit.effects import Effect
from sgrkit.escape import Layer
from sgrkit.mode import ColorMode
from sgrkit.style import Style

log = logging.getLogger(__name__)

_XTERM_ROW = 16


def _print_ansi(out: TextIO, mode: ColorMode | None) -> None:
    for color in AnsiColor:
        label = f"{color.name.lower():<15}"
        fg = Style(foreground=color).render(label, mode)
        bg = Style(background=color).render(label, mode)
        out.write(f"{color.value:>2}  {fg} {bg}\n")


def _print_xterm(out: TextIO, mode: ColorMode | None) -> None:
    for start in range(0, 256, _XTERM_ROW):
        cells = [
            Style(background=XtermColor(n)).render(n, mode, " >4")
            for n in range(start, start + _XTERM_ROW)
        ]
        out.write("".join(cells) + "\n")


def _print_effects(out: TextIO, mode: ColorMode | None) -> None:
    for effect in Effect:
        label = effect.name.lower().replace("_", " ")
        out.write(f"{effect.value:>2}  {Style().effect(effect).render(label, mode)}\n")


def _parse_color(model: str, values: Sequence[int]) -> ColorSpec:
    if model == "rgb":
        if len(values) != 3:
            raise ValueError("rgb takes three values: R G B")
        return RgbColor(*values)
    if len(values) != 1:
        raise ValueError(f"{model} takes one value")
    if model == "xterm":
        return XtermColor(values[0])
    if not 0 <= values[0] <= 15:
        raise ValueError("ansi color must be in 0..15")
    return AnsiColor(values[0])


def _print_show(out: TextIO, color: ColorSpec) -> None:
    out.write(f"{color!r}\n")
    for layer in Layer:
        name = layer.name.lower()
        out.write(f"  {name:<10} args={color.args(layer)!r:<20} escape={color.escape(layer)!r}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sgrkit", description=__doc__)
    parser.add_argument("--mode", help="always, never, auto, stdout, stderr or stdin")
    parser.add_argument("--config", help="YAML config file (default: $SGRKIT_CONFIG)")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("ansi", help="the 16 named colors")
    sub.add_parser("xterm", help="the 256-color palette")
    sub.add_parser("effects", help="text effects")
    show = sub.add_parser("show", help="print the escape sequences of one color")
    show.add_argument("model", choices=("ansi", "xterm", "rgb"))
    show.add_argument("values", type=int, nargs="+")
    return parser


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    if out is None:
        out = sys.stdout

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        apply_config(load_config(args.config))
        mode = ColorMode.parse(args.mode) if args.mode else None
    except (ConfigError, ValueError) as exc:
        log.error("%s", exc)
        return 2

    if args.command == "ansi":
        _print_ansi(out, mode)
    elif args.command == "xterm":
        _print_xterm(out, mode)
    elif args.command == "effects":
        _print_effects(out, mode)
    elif args.command == "show":
        try:
            color = _parse_color(args.model, args.values)
        except ValueError as exc:
            log.error("%s", exc)
            return 2
        _print_show(out, color)
    return 0


if __name__ == "__main__":
    sys.exit(main())
