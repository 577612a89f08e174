from collections.abc import Callable, Sequence
from dataclasses import dataclass

from termtexel.codes import Layer, colour_code
from termtexel.glyphs import FULL_BLOCK, SPACE, Colour, GlyphCell

ColourEmitter = Callable[[Colour, Layer], str]


@dataclass
class EncoderState:
    """Colours last emitted during one encode pass; None until first set."""

    fg: Colour | None = None
    bg: Colour | None = None


class Encoder:
    """Turns glyph cells into text, emitting colour codes only when a colour changes."""

    def __init__(self, emitter: ColourEmitter = colour_code):
        self.emitter = emitter

    def encode(self, cells: Sequence[GlyphCell], columns: int, rows: int, row_separator: str) -> str:
        if len(cells) != columns * rows:
            raise ValueError(f"Expected {columns * rows} cells for a {columns}x{rows} grid, got {len(cells)}")

        state = EncoderState()
        out: list[str] = []
        for r in range(rows):
            for cell in cells[r * columns : (r + 1) * columns]:
                # A space shows no foreground and a full block no background
                if cell.glyph != SPACE and cell.fg != state.fg:
                    out.append(self.emitter(cell.fg, Layer.FOREGROUND))
                    state.fg = cell.fg
                if cell.glyph != FULL_BLOCK and cell.bg != state.bg:
                    out.append(self.emitter(cell.bg, Layer.BACKGROUND))
                    state.bg = cell.bg
                out.append(cell.glyph)
            out.append(row_separator)
        return "".join(out)
