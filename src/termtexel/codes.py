"""ANSI escape codes.

Most sequences follow https://gist.github.com/fnky/458719343aabd01cfb17a3a4f7296797.
Fixed sequences live in the CODES table keyed by a short semantic name;
parametric ones are built by the functions below.
"""

from enum import Enum

from termtexel.glyphs import Colour

ESC = "\x1b"
# Control Sequence Introducer
CSI = "\x1b["
# Device Control String
DCS = "\x1bP"
# Operating System Command
OSC = "\x1b]"
# String terminator
ST = "\x1b\\"

RESET = "\x1b[0m"

# xterm-256 colour cube channel levels
_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


class Layer(Enum):
    FOREGROUND = 38
    BACKGROUND = 48


CODES: dict[str, str] = {
    # general ascii
    "bell": "\x07",
    "backspace": "\x08",
    "htab": "\t",
    "newline": "\n",
    "vtab": "\x0b",
    "formfeed": "\x0c",
    "cr": "\r",
    "delete": "\x7f",
    # cursor
    "home": "\x1b[H",
    "up_scrl": "\x1bM",
    "cur_save": "\x1b7",
    "cur_load": "\x1b8",
    "hide_cursor": "\x1b[?25l",
    "show_cursor": "\x1b[?25h",
    # erase
    "e_end": "\x1b[J",
    "e_start": "\x1b[1J",
    "e_screen": "\x1b[2J",
    "e_all": "\x1b[3J",
    "clear": "\x1b[2J\x1b[3J\x1b[H",
    "e_line_end": "\x1b[K",
    "e_line_start": "\x1b[1K",
    "e_line": "\x1b[2K",
    # text modes
    "reset": RESET,
    "bold": "\x1b[1m",
    "faint": "\x1b[2m",
    "italic": "\x1b[3m",
    "underline": "\x1b[4m",
    "blinking": "\x1b[5m",
    "inverse": "\x1b[7m",
    "invisible": "\x1b[8m",
    "striketrough": "\x1b[9m",
    "double_underline": "\x1b[21m",
    "reset_bold": "\x1b[22m",
    "reset_italic": "\x1b[23m",
    "reset_underline": "\x1b[24m",
    "reset_blinking": "\x1b[25m",
    "reset_inverse": "\x1b[27m",
    "reset_invisible": "\x1b[28m",
    "reset_striketrough": "\x1b[29m",
    # foreground
    "black": "\x1b[30m",
    "white": "\x1b[97m",
    "gray": "\x1b[90m",
    "gray_bright": "\x1b[37m",
    "red": "\x1b[91m",
    "green": "\x1b[92m",
    "yellow": "\x1b[93m",
    "blue": "\x1b[94m",
    "magenta": "\x1b[95m",
    "cyan": "\x1b[96m",
    "red_dark": "\x1b[31m",
    "green_dark": "\x1b[32m",
    "yellow_dark": "\x1b[33m",
    "blue_dark": "\x1b[34m",
    "magenta_dark": "\x1b[35m",
    "cyan_dark": "\x1b[36m",
    "reset_fg": "\x1b[39m",
    # background
    "black_bg": "\x1b[40m",
    "white_bg": "\x1b[107m",
    "gray_bg": "\x1b[100m",
    "gray_bright_bg": "\x1b[47m",
    "red_bg": "\x1b[101m",
    "green_bg": "\x1b[102m",
    "yellow_bg": "\x1b[103m",
    "blue_bg": "\x1b[104m",
    "magenta_bg": "\x1b[105m",
    "cyan_bg": "\x1b[106m",
    "red_dark_bg": "\x1b[41m",
    "green_dark_bg": "\x1b[42m",
    "yellow_dark_bg": "\x1b[43m",
    "blue_dark_bg": "\x1b[44m",
    "magenta_dark_bg": "\x1b[45m",
    "cyan_dark_bg": "\x1b[46m",
    "reset_bg": "\x1b[49m",
    # screen modes
    "enable_line_wrap": "\x1b[=7h",
    "disable_line_wrap": "\x1b[=7l",
    "enable_alt_buffer": "\x1b[?1049h",
    "disable_alt_buffer": "\x1b[?1049l",
}


def csi(end: str, *args: int) -> str:
    """Control sequence: CSI, the arguments joined by ';', then `end`."""
    return f"{CSI}{';'.join(str(a) for a in args)}{end}"


def fg(r: int, g: int, b: int) -> str:
    return csi("m", 38, 2, r, g, b)


def bg(r: int, g: int, b: int) -> str:
    return csi("m", 48, 2, r, g, b)


def fg256(index: int) -> str:
    return csi("m", 38, 5, index)


def bg256(index: int) -> str:
    return csi("m", 48, 5, index)


def move_to(x: int, y: int) -> str:
    return csi("H", y, x)


def move_up(n: int = 1) -> str:
    return csi("A", n)


def move_down(n: int = 1) -> str:
    return csi("B", n)


def move_right(n: int = 1) -> str:
    return csi("C", n)


def move_left(n: int = 1) -> str:
    return csi("D", n)


def column(n: int) -> str:
    return csi("G", n)


def colour_code(colour: Colour, layer: Layer) -> str:
    """Default colour emitter: RGB triples as true colour, ints as palette indices."""
    if isinstance(colour, int):
        return csi("m", layer.value, 5, colour)
    r, g, b = colour
    return csi("m", layer.value, 2, r, g, b)


def _nearest_level(value: int) -> int:
    return min(range(len(_CUBE_LEVELS)), key=lambda i: abs(_CUBE_LEVELS[i] - value))


def rgb_to_256(r: int, g: int, b: int) -> int:
    """Nearest xterm-256 index, from either the 6x6x6 cube or the grey ramp."""
    ri, gi, bi = _nearest_level(r), _nearest_level(g), _nearest_level(b)
    cube = (_CUBE_LEVELS[ri], _CUBE_LEVELS[gi], _CUBE_LEVELS[bi])
    cube_dist = sum((a - c) ** 2 for a, c in zip((r, g, b), cube))

    grey_step = min(23, max(0, round(((r + g + b) / 3 - 8) / 10)))
    grey = 8 + 10 * grey_step
    grey_dist = sum((a - grey) ** 2 for a in (r, g, b))

    if grey_dist < cube_dist:
        return 232 + grey_step
    return 16 + 36 * ri + 6 * gi + bi
