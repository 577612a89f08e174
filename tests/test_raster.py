import numpy as np
import pytest
from PIL import Image

from termtexel.errors import InvalidRaster, RenderError
from termtexel.raster import Raster


def test_valid_raster():
    raster = Raster(width=2, height=3, samples=bytes(18))
    assert raster.width == 2
    assert raster.height == 3


def test_samples_converted_to_bytes():
    raster = Raster(width=1, height=1, samples=bytearray(b"\x01\x02\x03"))
    assert raster.samples == b"\x01\x02\x03"
    assert isinstance(raster.samples, bytes)


@pytest.mark.parametrize("length", [0, 17, 19])
def test_length_mismatch(length):
    with pytest.raises(InvalidRaster, match="Expected 18 samples"):
        Raster(width=2, height=3, samples=bytes(length))


@pytest.mark.parametrize("width,height", [(0, 3), (2, 0), (-1, 3), (0, 0)])
def test_non_positive_dimensions(width, height):
    with pytest.raises(InvalidRaster, match="must be positive"):
        Raster(width=width, height=height, samples=b"")


def test_non_integer_dimension():
    with pytest.raises(InvalidRaster, match="must be an integer"):
        Raster(width=2.0, height=1, samples=bytes(6))


def test_invalid_raster_is_value_error():
    with pytest.raises(ValueError):
        Raster(width=1, height=1, samples=b"")
    assert issubclass(InvalidRaster, RenderError)


def test_pixels_view():
    raster = Raster(width=2, height=1, samples=bytes([1, 2, 3, 4, 5, 6]))
    pixels = raster.pixels()
    assert pixels.shape == (1, 2, 3)
    assert pixels.dtype == np.uint8
    assert pixels[0, 1].tolist() == [4, 5, 6]
    assert not pixels.flags.writeable


def test_from_image_converts_to_rgb():
    img = Image.new("RGBA", (3, 2), (10, 20, 30, 40))
    raster = Raster.from_image(img)
    assert (raster.width, raster.height) == (3, 2)
    assert raster.samples == bytes([10, 20, 30]) * 6


def test_from_greyscale_image():
    img = Image.new("L", (1, 1), 200)
    raster = Raster.from_image(img)
    assert raster.samples == bytes([200, 200, 200])


@pytest.mark.parametrize("width,height", [(np.int64(2), np.int64(3)), (np.int32(2), 3), (2, np.uint16(3))])
def test_numpy_integer_dimensions(width, height):
    raster = Raster(width=width, height=height, samples=bytes(18))
    assert (raster.width, raster.height) == (2, 3)
    assert type(raster.width) is int
    assert type(raster.height) is int


def test_bool_dimension_rejected():
    with pytest.raises(InvalidRaster, match="must be an integer"):
        Raster(width=True, height=1, samples=bytes(3))


@pytest.mark.parametrize("samples", ["abc", None, [300, 0, 0], 3, object()])
def test_samples_must_be_bytes_like(samples):
    with pytest.raises(InvalidRaster, match="bytes-like"):
        Raster(width=1, height=1, samples=samples)


def test_samples_from_memoryview_and_list():
    assert Raster(width=1, height=1, samples=memoryview(b"abc")).samples == b"abc"
    assert Raster(width=1, height=1, samples=[1, 2, 3]).samples == b"\x01\x02\x03"
