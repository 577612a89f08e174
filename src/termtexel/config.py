from dataclasses import dataclass

from termtexel.glyphs import ColourMode, GlyphLayout

# Width : height of one terminal character cell
CELL_ASPECT = 0.5

# (columns, rows) used by the CLI when the terminal cannot be queried
FALLBACK_SIZE = (80, 24)

DEFAULT_SEPARATOR = "\n"


@dataclass(frozen=True)
class RenderConfig:
    columns: int | None = None
    rows: int | None = None
    layout: GlyphLayout = GlyphLayout.QUARTER
    colour_mode: ColourMode = ColourMode.TRUECOLOR
    row_separator: str = DEFAULT_SEPARATOR
    workers: int | None = None
