import pytest

from termtexel.raster import Raster


@pytest.fixture
def solid_raster():
    """Factory for single-colour rasters."""

    def make(width, height, colour=(255, 0, 0)):
        return Raster(width=width, height=height, samples=bytes(colour) * (width * height))

    return make


@pytest.fixture
def raster_from_rows():
    """Factory building a raster from rows of (r, g, b) tuples."""

    def make(rows):
        samples = b"".join(bytes(pixel) for row in rows for pixel in row)
        return Raster(width=len(rows[0]), height=len(rows), samples=samples)

    return make
