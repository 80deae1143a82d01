"""The valid ASTC block footprints."""

from __future__ import annotations

import enum


class Footprint(enum.Enum):
    """ASTC block footprints in the order the specification lists them."""

    BLOCK_4X4 = (4, 4)
    BLOCK_5X4 = (5, 4)
    BLOCK_5X5 = (5, 5)
    BLOCK_6X5 = (6, 5)
    BLOCK_6X6 = (6, 6)
    BLOCK_8X5 = (8, 5)
    BLOCK_8X6 = (8, 6)
    BLOCK_10X5 = (10, 5)
    BLOCK_10X6 = (10, 6)
    BLOCK_8X8 = (8, 8)
    BLOCK_10X8 = (10, 8)
    BLOCK_10X10 = (10, 10)
    BLOCK_12X10 = (12, 10)
    BLOCK_12X12 = (12, 12)

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]

    @property
    def num_pixels(self) -> int:
        return self.width * self.height

    @classmethod
    def from_dimensions(cls, width: int, height: int) -> Footprint:
        """Look up the footprint with the given block size."""
        try:
            return cls((width, height))
        except ValueError:
            raise ValueError(f"no ASTC footprint of size {width}x{height}") from None

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"