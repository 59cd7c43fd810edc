"""Tests for the color model — runtime, comptime and optional colors."""

import pickle

import pytest

from sgrkit.colors import (
    NO_COLOR,
    XTERM,
    AnsiColor,
    ColorModel,
    ConstRgb,
    ConstXterm,
    MaybeColor,
    NoColor,
    Presence,
    RgbColor,
    XtermColor,
    const_rgb,
    const_xterm,
    encode_escape,
    encode_params,
    is_color_spec,
    to_color,
    to_optional,
)
from sgrkit.escape import Layer


class TestAnsiColor:
    def test_base_foreground(self):
        assert AnsiColor.RED.foreground_args() == "31"
        assert AnsiColor.RED.foreground() == "\033[31m"

    def test_base_background(self):
        assert AnsiColor.BLUE.background_args() == "44"
        assert AnsiColor.BLUE.background() == "\033[44m"

    def test_bright(self):
        assert AnsiColor.BRIGHT_RED == 9
        assert AnsiColor.BRIGHT_RED.foreground_args() == "91"
        assert AnsiColor.BRIGHT_RED.background_args() == "101"
        assert AnsiColor.BRIGHT_BLACK.foreground_args() == "90"
        assert AnsiColor.BRIGHT_WHITE.background_args() == "107"
        assert AnsiColor.BRIGHT_RED.is_bright
        assert not AnsiColor.RED.is_bright

    def test_underline_uses_indexed_form(self):
        assert AnsiColor.RED.underline_args() == "58;5;1"
        assert AnsiColor.BRIGHT_CYAN.underline() == "\033[58;5;14m"

    def test_all_codes(self):
        for color in AnsiColor:
            n = int(color)
            fg = 30 + n if n < 8 else 90 + n - 8
            assert color.foreground_args() == str(fg)
            assert color.background_args() == str(fg + 10)

    def test_surface(self):
        assert AnsiColor.GREEN.get() is AnsiColor.GREEN
        assert AnsiColor.GREEN.kind() is Presence.ALWAYS
        assert AnsiColor.GREEN.model is ColorModel.ANSI


class TestXtermColor:
    def test_red1(self):
        color = XtermColor(196)
        assert color.foreground_args() == "38;5;196"
        assert color.foreground() == "\033[38;5;196m"
        assert color.background_args() == "48;5;196"
        assert color.underline_args() == "58;5;196"

    def test_single_digit(self):
        assert XtermColor(0).foreground_args() == "38;5;0"
        assert XtermColor(7).background() == "\033[48;5;7m"

    def test_from_code(self):
        assert XtermColor.from_code(42) == XtermColor(42)

    @pytest.mark.parametrize("bad", [-1, 256, 1000])
    def test_out_of_range(self, bad):
        with pytest.raises(ValueError):
            XtermColor(bad)

    def test_rejects_non_int(self):
        with pytest.raises(TypeError):
            XtermColor("12")

    def test_immutable(self):
        color = XtermColor(1)
        with pytest.raises(AttributeError):
            color.index = 2


class TestRgbColor:
    def test_escapes(self):
        color = RgbColor(255, 0, 0)
        assert color.foreground() == "\033[38;2;255;0;0m"
        assert color.background_args() == "48;2;255;0;0"
        assert color.underline() == "\033[58;2;255;0;0m"

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            RgbColor(0, 256, 0)

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            RgbColor(True, 0, 0)

    def test_value_equality(self):
        assert RgbColor(1, 2, 3) == RgbColor(1, 2, 3)
        assert hash(RgbColor(1, 2, 3)) == hash(RgbColor(1, 2, 3))


class TestNoColor:
    def test_singleton(self):
        assert NoColor() is NO_COLOR

    def test_renders_nothing(self):
        assert NO_COLOR.get() is None
        assert NO_COLOR.kind() is Presence.NEVER
        assert NO_COLOR.foreground_args() == ""
        assert NO_COLOR.underline() == ""
        assert NO_COLOR.value is None

    def test_pickle_keeps_singleton(self):
        assert pickle.loads(pickle.dumps(NO_COLOR)) is NO_COLOR


class TestMaybeColor:
    def test_set(self):
        maybe = MaybeColor(XtermColor(3))
        assert maybe.kind() is Presence.MAYBE
        assert maybe.get() == XtermColor(3)
        assert maybe.foreground_args() == "38;5;3"

    def test_unset(self):
        maybe = MaybeColor()
        assert maybe.kind() is Presence.MAYBE
        assert maybe.get() is None
        assert maybe.background_args() == ""
        assert maybe.background() == ""

    def test_rejects_wrappers(self):
        with pytest.raises(TypeError):
            MaybeColor(MaybeColor())
        with pytest.raises(TypeError):
            MaybeColor(const_rgb(1, 2, 3))


class TestConstRgb:
    def test_constants(self):
        color = ConstRgb(255, 0, 0)
        assert color.foreground() == "\033[38;2;255;0;0m"
        assert color.foreground_args() == "38;2;255;0;0"
        assert color.background_args() == "48;2;255;0;0"
        assert color.underline_args() == "58;2;255;0;0"
        assert color.raw_args == "2;255;0;0"

    def test_matches_runtime_encoder(self):
        for r in (0, 5, 10, 99, 100, 105, 255):
            for g in (0, 50, 200):
                for b in (7, 128):
                    comptime = ConstRgb(r, g, b)
                    runtime = RgbColor(r, g, b)
                    for layer in Layer:
                        assert comptime.args(layer) == runtime.args(layer)
                        assert comptime.escape(layer) == runtime.escape(layer)

    def test_dynamic(self):
        color = ConstRgb(1, 2, 3)
        assert color.dynamic == RgbColor(1, 2, 3)
        assert color.value == RgbColor(1, 2, 3)
        assert color.get() == RgbColor(1, 2, 3)
        assert color.kind() is Presence.ALWAYS

    def test_factory_is_memoized(self):
        assert const_rgb(9, 8, 7) is const_rgb(9, 8, 7)

    def test_equality_ignores_cache(self):
        assert ConstRgb(1, 2, 3) == ConstRgb(1, 2, 3)

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            ConstRgb(300, 0, 0)


class TestConstXterm:
    def test_table(self):
        assert len(XTERM) == 256
        assert XTERM[196].foreground_args() == "38;5;196"
        assert XTERM[196].raw_args == "5;196"
        assert const_xterm(196) is XTERM[196]

    def test_matches_runtime(self):
        for n in range(256):
            for layer in Layer:
                assert XTERM[n].escape(layer) == XtermColor(n).escape(layer)
                assert XTERM[n].args(layer) == encode_params(XtermColor(n), layer)

    def test_dynamic(self):
        assert ConstXterm(12).dynamic == XtermColor(12)

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            const_xterm(256)


class TestUnderlineWrapping:
    @pytest.mark.parametrize(
        "color",
        [AnsiColor.RED, AnsiColor.BRIGHT_WHITE, XtermColor(0), XtermColor(255),
         RgbColor(0, 0, 0), RgbColor(255, 255, 255), ConstRgb(12, 0, 200), XTERM[99]],
    )
    def test_underline_escape_shares_args(self, color):
        args = color.underline_args()
        assert args.startswith("58;")
        assert color.underline() == "\033[58;" + args[len("58;"):] + "m"
        assert color.underline() == "\033[" + args + "m"


class TestConversions:
    def test_comptime_widens_to_runtime(self):
        assert to_color(ConstRgb(1, 2, 3)) == RgbColor(1, 2, 3)
        assert to_color(XTERM[5]) == XtermColor(5)

    def test_runtime_is_identity(self):
        color = RgbColor(4, 5, 6)
        assert to_color(color) is color
        assert to_color(AnsiColor.RED) is AnsiColor.RED

    def test_no_color_is_absent(self):
        assert to_color(NO_COLOR) is None
        assert to_optional(NO_COLOR) == MaybeColor(None)

    def test_to_optional(self):
        assert to_optional(ConstRgb(1, 2, 3)) == MaybeColor(RgbColor(1, 2, 3))
        assert to_optional(AnsiColor.BLUE) == MaybeColor(AnsiColor.BLUE)
        maybe = MaybeColor(XtermColor(1))
        assert to_optional(maybe) is maybe

    def test_no_narrowing(self):
        with pytest.raises(TypeError):
            to_color(MaybeColor(XtermColor(1)))

    def test_unknown(self):
        with pytest.raises(TypeError):
            to_color((255, 0, 0))
        assert not is_color_spec("red")
        assert is_color_spec(NO_COLOR)


class TestEncodeDispatch:
    def test_params(self):
        assert encode_params(XtermColor(196), Layer.FOREGROUND) == "38;5;196"
        assert encode_params(RgbColor(1, 2, 3), Layer.BACKGROUND) == "48;2;1;2;3"
        assert encode_params(AnsiColor.BRIGHT_BLACK, Layer.FOREGROUND) == "90"
        assert encode_params(AnsiColor.BRIGHT_RED, Layer.BACKGROUND) == "101"

    def test_absent(self):
        assert encode_params(NO_COLOR, Layer.FOREGROUND) == ""
        assert encode_escape(MaybeColor(), Layer.UNDERLINE) == ""

    def test_wrapped(self):
        maybe = MaybeColor(RgbColor(9, 9, 9))
        assert encode_escape(maybe, Layer.FOREGROUND) == "\033[38;2;9;9;9m"
        assert encode_escape(XTERM[1], Layer.BACKGROUND) == "\033[48;5;1m"

    @pytest.mark.parametrize("layer", list(Layer))
    def test_params_are_escape_without_wrapping(self, layer):
        for color in (AnsiColor.YELLOW, XtermColor(123), RgbColor(200, 10, 0), ConstRgb(0, 1, 2)):
            escape = encode_escape(color, layer)
            assert escape.startswith("\033[") and escape.endswith("m")
            assert encode_params(color, layer) == escape[2:-1]

    def test_rejects_unknown(self):
        with pytest.raises(TypeError):
            encode_params(196, Layer.FOREGROUND)
        with pytest.raises(TypeError):
            encode_escape(None, Layer.FOREGROUND)
