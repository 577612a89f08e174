import numpy as np

from termtexel.codes import rgb_to_256
from termtexel.glyphs import FULL_BLOCK, Colour, ColourMode, GlyphCell, GlyphLayout

# Rec. 709 luma coefficients
LUMA = np.array([0.2126, 0.7152, 0.0722])


def _bipartitions(layout: GlyphLayout) -> list[tuple[int, np.ndarray]]:
    """Every split of the quadrants into two non-empty groups, once each.

    Quadrant 0 is always in the first group, so only odd masks are needed.
    """
    n = layout.quadrants
    return [
        (mask, np.array([bool(mask >> i & 1) for i in range(n)]))
        for mask in range(1, layout.full_mask, 2)
    ]


_BIPARTITIONS = {layout: _bipartitions(layout) for layout in GlyphLayout}


def to_output_colour(colour: np.ndarray, colour_mode: ColourMode) -> Colour:
    """Round and clamp a float colour into the encoder's colour domain."""
    r, g, b = (int(v) for v in np.clip(np.rint(colour), 0, 255))
    if colour_mode is ColourMode.PALETTE:
        return rgb_to_256(r, g, b)
    return (r, g, b)


def quantize(
    colours: np.ndarray,
    layout: GlyphLayout = GlyphLayout.QUARTER,
    colour_mode: ColourMode = ColourMode.TRUECOLOR,
) -> GlyphCell:
    """Pick the glyph and fg/bg colours best approximating one cell.

    Args:
        colours: (layout.quadrants, 3) mean colour of each quadrant
        layout: quadrant layout the colours were sampled with
        colour_mode: domain the output colours are clamped to

    The quadrants are split into the two groups whose mean colours are furthest
    apart (squared RGB distance); the first split found wins ties. The brighter
    group is drawn as the glyph's "on" part in the foreground colour.
    """
    colours = np.asarray(colours, dtype=np.float64)
    if colours.shape != (layout.quadrants, 3):
        raise ValueError(f"Expected {layout.quadrants} quadrant colours, got array of shape {colours.shape}")

    outputs = [to_output_colour(c, colour_mode) for c in colours]
    if all(o == outputs[0] for o in outputs):
        return GlyphCell(glyph=FULL_BLOCK, fg=outputs[0], bg=outputs[0])

    best_mask = 0
    best_on = best_off = colours[0]
    best_score = -1.0
    for mask, on in _BIPARTITIONS[layout]:
        on_mean = colours[on].mean(axis=0)
        off_mean = colours[~on].mean(axis=0)
        score = float(((on_mean - off_mean) ** 2).sum())
        if score > best_score:
            best_mask, best_on, best_off, best_score = mask, on_mean, off_mean, score

    if float(best_off @ LUMA) > float(best_on @ LUMA):
        best_mask = layout.full_mask ^ best_mask
        best_on, best_off = best_off, best_on

    fg = to_output_colour(best_on, colour_mode)
    bg = to_output_colour(best_off, colour_mode)
    if fg == bg:
        return GlyphCell(glyph=FULL_BLOCK, fg=fg, bg=bg)
    return GlyphCell(glyph=layout.glyph_for(best_mask), fg=fg, bg=bg)
