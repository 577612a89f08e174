import pytest

from termtexel import codes
from termtexel.codes import Layer, colour_code, csi, rgb_to_256


def test_csi():
    assert csi("a", 1, 2, 3, 4, 5) == "\x1b[1;2;3;4;5a"
    assert csi("H") == "\x1b[H"


def test_truecolor_builders():
    assert codes.fg(1, 2, 3) == "\x1b[38;2;1;2;3m"
    assert codes.bg(1, 2, 3) == "\x1b[48;2;1;2;3m"


def test_palette_builders():
    assert codes.fg256(196) == "\x1b[38;5;196m"
    assert codes.bg256(21) == "\x1b[48;5;21m"


def test_cursor_moves():
    assert codes.move_to(3, 7) == "\x1b[7;3H"
    assert codes.move_up() == "\x1b[1A"
    assert codes.move_down(5) == "\x1b[5B"
    assert codes.move_right(2) == "\x1b[2C"
    assert codes.move_left(4) == "\x1b[4D"
    assert codes.column(9) == "\x1b[9G"


def test_colour_code_dispatch():
    assert colour_code((1, 2, 3), Layer.FOREGROUND) == codes.fg(1, 2, 3)
    assert colour_code((1, 2, 3), Layer.BACKGROUND) == codes.bg(1, 2, 3)
    assert colour_code(42, Layer.FOREGROUND) == codes.fg256(42)
    assert colour_code(42, Layer.BACKGROUND) == codes.bg256(42)


def test_lookup_table():
    assert codes.CODES["reset"] == codes.RESET == "\x1b[0m"
    assert codes.CODES["red"] == "\x1b[91m"
    assert codes.CODES["red_bg"] == "\x1b[101m"
    assert all(isinstance(v, str) and v for v in codes.CODES.values())


@pytest.mark.parametrize(
    "rgb,index",
    [
        ((0, 0, 0), 16),
        ((255, 255, 255), 231),
        ((255, 0, 0), 196),
        ((0, 255, 0), 46),
        ((0, 0, 255), 21),
        ((128, 128, 128), 244),
        ((8, 8, 8), 232),
        ((95, 135, 175), 67),
    ],
)
def test_rgb_to_256(rgb, index):
    assert rgb_to_256(*rgb) == index


def test_rgb_to_256_in_range():
    for v in range(0, 256, 17):
        assert 16 <= rgb_to_256(v, 255 - v, v // 2) <= 255


def test_clear_erases_then_homes_cursor():
    assert codes.CODES["clear"] == "\x1b[2J\x1b[3J\x1b[H"
