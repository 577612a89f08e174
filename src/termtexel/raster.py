import numbers
from dataclasses import dataclass

import numpy as np
from PIL import Image

from termtexel.errors import InvalidRaster


@dataclass(frozen=True)
class Raster:
    """Immutable row-major RGB raster, 3 bytes per pixel, no alpha."""

    width: int
    height: int
    samples: bytes

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Integral) or isinstance(value, bool):
                raise InvalidRaster(f"Raster {name} must be an integer, got {value!r}")
            if value <= 0:
                raise InvalidRaster(f"Raster {name} must be positive, got {value}")
            object.__setattr__(self, name, int(value))
        samples = self.samples
        if not isinstance(samples, bytes):
            # bytes(n) would silently build n zero bytes
            if isinstance(samples, numbers.Integral):
                raise InvalidRaster(f"Raster samples must be bytes-like, got {samples!r}")
            try:
                samples = bytes(samples)
            except (TypeError, ValueError) as e:
                raise InvalidRaster(f"Raster samples must be bytes-like: {e}") from e
            object.__setattr__(self, "samples", samples)
        expected = self.width * self.height * 3
        if len(samples) != expected:
            raise InvalidRaster(
                f"Expected {expected} samples for a {self.width}x{self.height} raster, got {len(samples)}"
            )

    @classmethod
    def from_image(cls, image: Image.Image) -> "Raster":
        image = image.convert("RGB")
        return cls(width=image.width, height=image.height, samples=image.tobytes())

    def pixels(self) -> np.ndarray:
        """Read-only uint8 view of shape (height, width, 3)."""
        return np.frombuffer(self.samples, dtype=np.uint8).reshape(self.height, self.width, 3)
