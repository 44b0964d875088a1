"""
Error types raised by the compression engine.

Both derive from ValueError so callers can treat bad input the same way
they treat any other invalid argument.
"""


class GeoCompactError(ValueError):
    """Base class for engine errors."""


class ParseError(GeoCompactError):
    """Input text is not valid JSON."""


class ValidationError(GeoCompactError):
    """Parsed value is not a GeoJSON document the engine understands."""
