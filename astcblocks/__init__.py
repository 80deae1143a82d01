"""Building blocks for ASTC texture data: bit utilities, quantization and partition search."""

__version__ = "0.1.0"