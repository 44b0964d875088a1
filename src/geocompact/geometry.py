"""
GeoJSON geometry walker.

Rebuilds a geometry with its coordinates rounded and, where enabled, its
lines simplified. The set of geometry types is closed: anything else is a
ValidationError.
"""

import logging
from typing import Any, Dict, List, Optional

from .errors import ValidationError
from .options import CompressionOptions
from .rounding import is_number, round_coordinates
from .simplify import douglas_peucker

logger = logging.getLogger(__name__)

GEOMETRY_TYPES = (
    "Point",
    "LineString",
    "Polygon",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
    "GeometryCollection",
)


def check_position(position: Any, geometry_type: str) -> None:
    """A position is a list of at least two numbers."""
    if (
        not isinstance(position, list)
        or len(position) < 2
        or not all(is_number(v) for v in position)
    ):
        raise ValidationError(f"{geometry_type} has an invalid position: {position!r}")


def check_sequence(value: Any, geometry_type: str) -> List[Any]:
    if not isinstance(value, list):
        raise ValidationError(f"{geometry_type} coordinates must be an array")
    return value


def compress_positions(
    positions: Any,
    geometry_type: str,
    options: CompressionOptions,
    simplify: bool,
) -> List[Any]:
    """
    Round a list of positions, simplifying it first when asked to.

    Simplification runs on the unrounded values and only on 2D lines of
    more than two points.
    """
    positions = check_sequence(positions, geometry_type)
    for position in positions:
        check_position(position, geometry_type)

    if simplify and len(positions) > 2 and all(len(p) == 2 for p in positions):
        simplified = douglas_peucker(positions, options.simplify_epsilon)
        logger.debug(
            "Simplified %s from %d to %d points",
            geometry_type, len(positions), len(simplified),
        )
        positions = simplified

    return round_coordinates(positions, options.precision)


def compress_rings(
    rings: Any,
    geometry_type: str,
    options: CompressionOptions,
    simplify: bool,
) -> List[List[Any]]:
    """Apply the line treatment to each ring (or member line) independently."""
    return [
        compress_positions(ring, geometry_type, options, simplify)
        for ring in check_sequence(rings, geometry_type)
    ]


def compress_geometry(
    geometry: Optional[Dict[str, Any]],
    options: Optional[CompressionOptions] = None,
) -> Optional[Dict[str, Any]]:
    """
    Compress a single geometry.

    Args:
        geometry: A GeoJSON geometry object, or None
        options: Compression options (defaults if omitted)

    Returns:
        A new geometry with the same type, or None for a None geometry

    Raises:
        ValidationError: If the geometry is malformed or of an unknown type
    """
    if geometry is None:
        return None
    if options is None:
        options = CompressionOptions()
    if not isinstance(geometry, dict):
        raise ValidationError(f"Geometry must be an object, got {type(geometry).__name__}")

    geometry_type = geometry.get("type")
    if geometry_type not in GEOMETRY_TYPES:
        raise ValidationError(f"Invalid geometry type: {geometry_type}")

    if geometry_type == "GeometryCollection":
        members = geometry.get("geometries")
        if not isinstance(members, list):
            raise ValidationError("GeometryCollection must have 'geometries' array")
        return {
            "type": geometry_type,
            "geometries": [compress_geometry(g, options) for g in members],
        }

    if "coordinates" not in geometry:
        raise ValidationError(f"{geometry_type} is missing 'coordinates'")
    coords = geometry["coordinates"]

    if geometry_type == "Point":
        check_position(coords, geometry_type)
        compressed = round_coordinates(coords, options.precision)
    elif geometry_type in ("LineString", "MultiPoint"):
        compressed = compress_positions(coords, geometry_type, options, options.simplify)
    elif geometry_type == "MultiLineString":
        compressed = compress_rings(coords, geometry_type, options, options.simplify)
    elif geometry_type == "Polygon":
        compressed = compress_rings(
            coords, geometry_type, options, options.simplify and options.simplify_rings
        )
    else:
        compressed = [
            compress_rings(
                polygon, geometry_type, options, options.simplify and options.simplify_rings
            )
            for polygon in check_sequence(coords, geometry_type)
        ]

    return {"type": geometry_type, "coordinates": compressed}
