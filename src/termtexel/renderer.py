import logging
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from termtexel.config import DEFAULT_SEPARATOR, RenderConfig
from termtexel.encoder import ColourEmitter, Encoder
from termtexel.errors import InvalidRaster
from termtexel.glyphs import ColourMode, GlyphCell, GlyphLayout
from termtexel.quantizer import quantize
from termtexel.raster import Raster
from termtexel.resampler import TargetGrid, derive_grid, sample_quadrants

logger = logging.getLogger(__name__)


def _quantize_rows(
    colours: np.ndarray, rows: range, layout: GlyphLayout, colour_mode: ColourMode
) -> list[GlyphCell]:
    return [quantize(colours[r, c], layout, colour_mode) for r in rows for c in range(colours.shape[1])]


def _row_bands(rows: int, workers: int) -> list[range]:
    """Split rows into at most `workers` contiguous bands."""
    bands = min(workers, rows)
    edges = [i * rows // bands for i in range(bands + 1)]
    return [range(a, b) for a, b in zip(edges, edges[1:])]


class TexelRenderer:
    """Renders a raster as partial-block glyphs with minimal colour codes."""

    def __init__(self, config: RenderConfig | None = None, emitter: ColourEmitter | None = None):
        self.config = config if config is not None else RenderConfig()
        self.encoder = Encoder(emitter) if emitter is not None else Encoder()

    def render_cells(self, raster: Raster) -> tuple[TargetGrid, list[GlyphCell]]:
        """Resample and quantize without encoding. Cells are in row-major order."""
        if not isinstance(raster, Raster):
            raise InvalidRaster(f"Expected a Raster, got {type(raster).__name__}")
        config = self.config
        grid = derive_grid(raster, config.columns, config.rows, config.layout)
        logger.debug(
            "Rendering %dx%d raster to %dx%d cells (%s, %s)",
            raster.width,
            raster.height,
            grid.columns,
            grid.rows,
            config.layout.name,
            config.colour_mode.value,
        )

        colours = sample_quadrants(raster, grid, config.layout)
        workers = config.workers or 1
        if workers <= 1 or grid.rows == 1:
            cells = _quantize_rows(colours, range(grid.rows), config.layout, config.colour_mode)
        else:
            bands = _row_bands(grid.rows, workers)
            with ThreadPoolExecutor(max_workers=len(bands)) as executor:
                futures = [
                    executor.submit(_quantize_rows, colours, band, config.layout, config.colour_mode)
                    for band in bands
                ]
                # Bands are merged in submission order so cells stay row-major
                cells = [cell for future in futures for cell in future.result()]
        return grid, cells

    def render(self, raster: Raster) -> str:
        start = time.perf_counter()
        grid, cells = self.render_cells(raster)
        text = self.encoder.encode(cells, grid.columns, grid.rows, self.config.row_separator)
        logger.debug("Encoded %d cells into %d characters in %.3fs", grid.cells, len(text), time.perf_counter() - start)
        return text


def render(
    raster: Raster,
    width: int | None = None,
    height: int | None = None,
    row_separator: str = DEFAULT_SEPARATOR,
    *,
    layout: GlyphLayout = GlyphLayout.QUARTER,
    colour_mode: ColourMode = ColourMode.TRUECOLOR,
    workers: int | None = None,
) -> str:
    """Render `raster` into terminal text `width` cells wide and `height` cells tall.

    A missing dimension is derived from the other keeping the aspect ratio.
    No colour reset is appended; restoring terminal colours is up to the caller.
    """
    config = RenderConfig(
        columns=width,
        rows=height,
        layout=layout,
        colour_mode=colour_mode,
        row_separator=row_separator,
        workers=workers,
    )
    return TexelRenderer(config).render(raster)
