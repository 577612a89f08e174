import math
import numbers
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from termtexel.config import CELL_ASPECT
from termtexel.errors import InvalidTarget
from termtexel.glyphs import GlyphLayout
from termtexel.raster import Raster

Rect = tuple[int, int, int, int]  # x0, y0, x1, y1 (exclusive)


@dataclass(frozen=True)
class TargetGrid:
    columns: int
    rows: int

    @property
    def cells(self) -> int:
        return self.columns * self.rows


@dataclass(frozen=True)
class SubBlock:
    """Source pixels of one output cell, split into the layout's quadrants."""

    row: int
    column: int
    quadrants: tuple[Rect, ...]
    colours: np.ndarray  # (quadrants, 3) float64 mean colours


def _check_dimension(name: str, value) -> int | None:
    if value is None:
        return None
    if not isinstance(value, numbers.Integral) or isinstance(value, bool) or value < 1:
        raise InvalidTarget(f"Target {name} must be a positive integer, got {value!r}")
    return int(value)


def derive_grid(
    raster: Raster,
    columns: int | None = None,
    rows: int | None = None,
    layout: GlyphLayout = GlyphLayout.QUARTER,
) -> TargetGrid:
    """Fill in a missing target dimension from the raster's aspect ratio.

    Terminal cells are taller than wide, so the derived dimension is scaled by
    CELL_ASPECT. With neither dimension given, one cell column covers
    `layout.quadrant_columns` source columns.
    """
    columns = _check_dimension("columns", columns)
    rows = _check_dimension("rows", rows)
    if columns is None and rows is None:
        columns = math.ceil(raster.width / layout.quadrant_columns)
    if rows is None:
        rows = max(1, round(columns * raster.height / raster.width * CELL_ASPECT))
    elif columns is None:
        columns = max(1, round(rows * raster.width / raster.height / CELL_ASPECT))
    return TargetGrid(columns=columns, rows=rows)


def cell_edges(size: int, count: int) -> np.ndarray:
    """Proportional boundaries splitting `size` pixels into `count` cells."""
    return np.arange(count + 1, dtype=np.int64) * size // count


def quadrant_edges(size: int, count: int, splits: int) -> np.ndarray:
    """Boundaries of `count * splits` quadrant strips along one axis.

    A pixel goes to the quadrant whose centre is nearest; a pixel exactly in
    the middle of an odd-sized cell goes to the first quadrant.
    """
    edges = cell_edges(size, count)
    if splits == 1:
        return edges
    starts, ends = edges[:-1], edges[1:]
    middles = (starts + ends + 1) // 2
    out = np.empty(count * 2 + 1, dtype=np.int64)
    out[0:-1:2] = starts
    out[1::2] = middles
    out[-1] = size
    return out


def _nearest_pixels(raster: Raster, grid: TargetGrid) -> np.ndarray:
    """Colour of the source pixel nearest each cell centre, shape (rows, cols, 3)."""
    xs = np.minimum((2 * np.arange(grid.columns) + 1) * raster.width // (2 * grid.columns), raster.width - 1)
    ys = np.minimum((2 * np.arange(grid.rows) + 1) * raster.height // (2 * grid.rows), raster.height - 1)
    return raster.pixels()[np.ix_(ys, xs)].astype(np.float64)


def _strip_sums(values: np.ndarray, edges: np.ndarray, axis: int) -> np.ndarray:
    """Sum `values` over the strips [edges[i], edges[i+1]) along `axis` as int64.

    Empty strips sum to zero. The non-empty strips tile the axis, so each one
    ends where the next non-empty strip starts.
    """
    starts = edges[:-1]
    filled = np.diff(edges) > 0
    shape = list(values.shape)
    shape[axis] = len(starts)
    out = np.zeros(shape, dtype=np.int64)
    index = [slice(None)] * values.ndim
    index[axis] = filled
    out[tuple(index)] = np.add.reduceat(values, starts[filled], axis=axis, dtype=np.int64)
    return out


def sample_quadrants(raster: Raster, grid: TargetGrid, layout: GlyphLayout) -> np.ndarray:
    """Mean colour of every quadrant of every cell.

    Returns float64 array of shape (rows, cols, layout.quadrants, 3), quadrants
    in row-major order within the cell. Empty quadrants take their cell's mean;
    empty cells take the nearest source pixel.
    """
    qcols, qrows = layout.quadrant_columns, layout.quadrant_rows
    xs = quadrant_edges(raster.width, grid.columns, qcols)
    ys = quadrant_edges(raster.height, grid.rows, qrows)

    # Collapse rows first so the only intermediate is (quadrant rows, width, 3)
    sums = _strip_sums(_strip_sums(raster.pixels(), ys, axis=0), xs, axis=1)
    counts = np.outer(np.diff(ys), np.diff(xs))

    # (rows*qrows, cols*qcols, ...) -> (rows, cols, quadrants, ...)
    sums = sums.reshape(grid.rows, qrows, grid.columns, qcols, 3).transpose(0, 2, 1, 3, 4)
    sums = sums.reshape(grid.rows, grid.columns, layout.quadrants, 3).astype(np.float64)
    counts = counts.reshape(grid.rows, qrows, grid.columns, qcols).transpose(0, 2, 1, 3)
    counts = counts.reshape(grid.rows, grid.columns, layout.quadrants, 1)

    block_sums = sums.sum(axis=2)
    block_counts = counts.sum(axis=2)
    block_means = np.divide(block_sums, block_counts, out=_nearest_pixels(raster, grid), where=block_counts > 0)

    fallback = np.broadcast_to(block_means[:, :, np.newaxis, :], sums.shape).copy()
    return np.divide(sums, counts, out=fallback, where=counts > 0)


def sub_blocks(raster: Raster, grid: TargetGrid, layout: GlyphLayout) -> Iterator[SubBlock]:
    """Yield the SubBlock of every cell in row-major order."""
    colours = sample_quadrants(raster, grid, layout)
    xs = quadrant_edges(raster.width, grid.columns, layout.quadrant_columns).tolist()
    ys = quadrant_edges(raster.height, grid.rows, layout.quadrant_rows).tolist()
    for r in range(grid.rows):
        for c in range(grid.columns):
            rects = []
            for qy in range(layout.quadrant_rows):
                yi = r * layout.quadrant_rows + qy
                for qx in range(layout.quadrant_columns):
                    xi = c * layout.quadrant_columns + qx
                    rects.append((xs[xi], ys[yi], xs[xi + 1], ys[yi + 1]))
            yield SubBlock(row=r, column=c, quadrants=tuple(rects), colours=colours[r, c])
