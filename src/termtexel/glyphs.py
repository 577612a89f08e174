from dataclasses import dataclass
from enum import Enum

# Indexed by on-quadrant bit mask. Bits: TL=1, TR=2, BL=4, BR=8
QUARTER_GLYPHS = " ▘▝▀▖▌▞▛▗▚▐▜▄▙▟█"

# Bits: top=1, bottom=2
HALF_GLYPHS = " ▀▄█"

SPACE = " "
FULL_BLOCK = "█"

RGB = tuple[int, int, int]
# An RGB triple in true-colour mode, an xterm-256 palette index in palette mode
Colour = RGB | int


class GlyphLayout(Enum):
    """How one terminal cell is subdivided into quadrants."""

    QUARTER = (2, 2, QUARTER_GLYPHS)
    HALF = (1, 2, HALF_GLYPHS)

    def __init__(self, quadrant_columns: int, quadrant_rows: int, glyphs: str):
        self.quadrant_columns = quadrant_columns
        self.quadrant_rows = quadrant_rows
        self.glyphs = glyphs

    @property
    def quadrants(self) -> int:
        return self.quadrant_columns * self.quadrant_rows

    @property
    def full_mask(self) -> int:
        return (1 << self.quadrants) - 1

    def glyph_for(self, mask: int) -> str:
        if not 0 <= mask <= self.full_mask:
            raise ValueError(f"Quadrant mask {mask} out of range for {self.name} layout")
        return self.glyphs[mask]


class ColourMode(Enum):
    TRUECOLOR = "truecolor"
    PALETTE = "palette"


@dataclass(frozen=True)
class GlyphCell:
    glyph: str
    fg: Colour
    bg: Colour
