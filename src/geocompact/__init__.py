"""
GeoCompact - Make GeoJSON files smaller.

This package rounds coordinates to a fixed precision, simplifies lines with
the Douglas-Peucker algorithm, strips empty property values and writes
minified JSON, reporting the size before and after.
"""

__version__ = "0.1.0"

from .compressor import (
    CompressionResult,
    ValidationResult,
    compress,
    compress_async,
    compress_document,
    validate,
)
from .errors import GeoCompactError, ParseError, ValidationError
from .geometry import compress_geometry
from .measure import compression_ratio, format_bytes, measure_bytes
from .options import CompressionOptions, SanitizeMode, SizeMode
from .properties import sanitize_properties
from .prune import prune_empty
from .rounding import round_coordinate
from .simplify import douglas_peucker

__all__ = [
    "CompressionOptions",
    "CompressionResult",
    "GeoCompactError",
    "ParseError",
    "SanitizeMode",
    "SizeMode",
    "ValidationError",
    "ValidationResult",
    "compress",
    "compress_async",
    "compress_document",
    "compress_geometry",
    "compression_ratio",
    "douglas_peucker",
    "format_bytes",
    "measure_bytes",
    "prune_empty",
    "round_coordinate",
    "sanitize_properties",
    "validate",
]
