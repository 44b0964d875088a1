"""
Compression options.

All engine configuration lives in a CompressionOptions value passed to each
call; there is no global configuration.
"""

import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional

MIN_PRECISION = 1
MAX_PRECISION = 10


class SanitizeMode(Enum):
    """Property sanitization variants."""
    RECURSIVE = "recursive"   # Nested mappings cleaned, strings stripped
    SHALLOW = "shallow"       # Top-level null and blank strings only


class SizeMode(Enum):
    """How the size of the original document is measured."""
    CANONICAL = "canonical"   # Minified JSON encoding of the parsed value
    RAW = "raw"               # Input text as supplied


@dataclass(frozen=True)
class CompressionOptions:
    """
    Options for a compression run.

    Attributes:
        precision: Decimal places kept per coordinate (1..10)
        simplify: Apply Douglas-Peucker to lines
        simplify_epsilon: Simplification tolerance in coordinate units
        simplify_rings: Also simplify polygon rings
        sanitize_properties: Drop null and blank property values
        sanitize_mode: Which sanitizer variant to use
        property_precision: Round float properties to this many decimals
        size_mode: How to measure the original document
    """
    precision: int = 6
    simplify: bool = True
    simplify_epsilon: float = 0.0001
    simplify_rings: bool = True
    sanitize_properties: bool = True
    sanitize_mode: SanitizeMode = SanitizeMode.RECURSIVE
    property_precision: Optional[int] = None
    size_mode: SizeMode = SizeMode.CANONICAL

    def __post_init__(self):
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise ValueError(f"precision must be an integer, got {self.precision!r}")
        if not MIN_PRECISION <= self.precision <= MAX_PRECISION:
            raise ValueError(
                f"precision must be between {MIN_PRECISION} and {MAX_PRECISION}, "
                f"got {self.precision}"
            )
        epsilon = self.simplify_epsilon
        if isinstance(epsilon, bool) or not isinstance(epsilon, (int, float)):
            raise ValueError(f"simplify_epsilon must be a number, got {epsilon!r}")
        if not math.isfinite(epsilon) or epsilon < 0:
            raise ValueError(
                f"simplify_epsilon must be a finite number >= 0, got {epsilon}"
            )
        if self.property_precision is not None and (
            isinstance(self.property_precision, bool)
            or not isinstance(self.property_precision, int)
        ):
            raise ValueError(
                f"property_precision must be an integer, got {self.property_precision!r}"
            )
        if self.property_precision is not None and self.property_precision < 0:
            raise ValueError(
                f"property_precision must be >= 0, got {self.property_precision}"
            )
        # Accept plain strings for the enum fields
        object.__setattr__(self, "sanitize_mode", SanitizeMode(self.sanitize_mode))
        object.__setattr__(self, "size_mode", SizeMode(self.size_mode))

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "CompressionOptions":
        """Build options from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown compression options: {', '.join(unknown)}")
        return cls(**dict(values))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "precision": self.precision,
            "simplify": self.simplify,
            "simplify_epsilon": self.simplify_epsilon,
            "simplify_rings": self.simplify_rings,
            "sanitize_properties": self.sanitize_properties,
            "sanitize_mode": self.sanitize_mode.value,
            "property_precision": self.property_precision,
            "size_mode": self.size_mode.value,
        }
