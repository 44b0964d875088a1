"""
GeoJSON Compressor - Shrinks GeoJSON documents.

This module validates a GeoJSON document, runs every geometry through the
geometry walker and every property mapping through the sanitizer, prunes
empty members and writes the result as minified JSON, together with
before/after size statistics.
"""

import asyncio
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .errors import ParseError, ValidationError
from .geometry import GEOMETRY_TYPES, compress_geometry
from .measure import (
    canonical_dumps,
    compression_ratio,
    measure_bytes,
    measure_text_bytes,
    savings,
)
from .options import CompressionOptions, SizeMode
from .properties import sanitize_properties
from .prune import prune_empty

logger = logging.getLogger(__name__)

GEOJSON_TYPES = ("Feature", "FeatureCollection") + GEOMETRY_TYPES

# Raw text, UTF-8 bytes, or an already parsed value
GeoJSONInput = Union[str, bytes, Dict[str, Any]]

NESTED_TOO_DEEPLY = "Document is nested too deeply"


@dataclass
class ValidationResult:
    """Outcome of a pre-flight structure check."""
    valid: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "error": self.error}


@dataclass
class CompressionResult:
    """
    Outcome of a compression run.

    Attributes:
        compressed: Minified output text, or the untouched input on error
        document: The compressed value, None on error
        original_size: Size of the input in bytes
        compressed_size: Size of `compressed` in bytes
        compression_ratio: compressed_size as a percentage of original_size
        savings: Bytes saved
        saved_percentage: 100 minus the ratio, 0 on error
        processing_time_ms: Wall time spent in compress()
        error: Error message, None on success
    """
    compressed: str
    document: Optional[Any]
    original_size: int
    compressed_size: int
    compression_ratio: float
    savings: int = 0
    saved_percentage: float = 0.0
    processing_time_ms: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def stats(self) -> Dict[str, Any]:
        """Size statistics without the payload."""
        return {
            "original_size": self.original_size,
            "compressed_size": self.compressed_size,
            "compression_ratio": self.compression_ratio,
            "savings": self.savings,
            "saved_percentage": self.saved_percentage,
            "processing_time_ms": self.processing_time_ms,
            "error": self.error,
        }


def parse_geojson(text: Union[str, bytes]) -> Any:
    """Parse JSON text, raising ParseError if it is not valid JSON."""
    try:
        return json.loads(text)
    except (ValueError, UnicodeDecodeError, RecursionError) as e:
        raise ParseError(f"Invalid JSON format: {e}") from e


def check_document(document: Any) -> None:
    """
    Check the top-level structure of a parsed document.

    Raises:
        ValidationError: With the message reported by validate()
    """
    if not isinstance(document, dict) or "type" not in document:
        raise ValidationError("Missing 'type' property")

    doc_type = document["type"]
    if doc_type not in GEOJSON_TYPES:
        raise ValidationError(f"Invalid type: {doc_type}")

    if doc_type == "FeatureCollection" and not isinstance(document.get("features"), list):
        raise ValidationError("FeatureCollection must have 'features' array")


def validate(geojson: GeoJSONInput) -> ValidationResult:
    """
    Pre-flight check that input looks like GeoJSON.

    Only the top level is checked; deeper problems surface as a
    ValidationError from compress_document().
    """
    if isinstance(geojson, (str, bytes)):
        try:
            geojson = parse_geojson(geojson)
        except ParseError:
            return ValidationResult(valid=False, error="Invalid JSON format")

    try:
        check_document(geojson)
    except ValidationError as e:
        return ValidationResult(valid=False, error=str(e))

    return ValidationResult(valid=True)


def compress_feature(feature: Any, options: CompressionOptions) -> Dict[str, Any]:
    """Compress one Feature's geometry and properties, keeping its id."""
    if not isinstance(feature, dict) or feature.get("type") != "Feature":
        raise ValidationError("FeatureCollection members must be Features")

    compressed: Dict[str, Any] = {
        "type": "Feature",
        "geometry": compress_geometry(feature.get("geometry"), options),
    }

    properties = feature.get("properties")
    if options.sanitize_properties:
        properties = sanitize_properties(
            properties, options.sanitize_mode, options.property_precision
        )
    elif properties is not None and not isinstance(properties, dict):
        raise ValidationError("Feature properties must be an object or null")

    if properties is not None:
        compressed["properties"] = properties

    if "id" in feature and feature["id"] is not None:
        compressed["id"] = feature["id"]

    return compressed


def compress_document(
    document: Any,
    options: Optional[CompressionOptions] = None,
) -> Any:
    """
    Compress a parsed GeoJSON document.

    Args:
        document: Parsed GeoJSON value (left unmodified)
        options: Compression options (defaults if omitted)

    Returns:
        A new, compressed document of the same type

    Raises:
        ValidationError: If the document is not valid GeoJSON, or is nested
            deeper than the interpreter can walk
    """
    if options is None:
        options = CompressionOptions()

    check_document(document)
    doc_type = document["type"]

    try:
        if doc_type == "FeatureCollection":
            compressed = {
                "type": doc_type,
                "features": [compress_feature(f, options) for f in document["features"]],
            }
        elif doc_type == "Feature":
            compressed = compress_feature(document, options)
        else:
            compressed = compress_geometry(document, options)

        return prune_empty(compressed)
    except RecursionError:
        raise ValidationError(NESTED_TOO_DEEPLY) from None


def compress(
    geojson: GeoJSONInput,
    options: Optional[CompressionOptions] = None,
) -> CompressionResult:
    """
    Compress GeoJSON text or a parsed value.

    Bad input does not raise: the result carries the error message and the
    original input as its `compressed` text, with a ratio of 0.

    Args:
        geojson: GeoJSON text, UTF-8 bytes, or a parsed value
        options: Compression options (defaults if omitted)

    Returns:
        CompressionResult
    """
    if options is None:
        options = CompressionOptions()

    start = time.perf_counter()
    is_text = isinstance(geojson, (str, bytes))

    try:
        document = parse_geojson(geojson) if is_text else geojson
        compressed_doc = compress_document(document, options)

        if is_text and options.size_mode == SizeMode.RAW:
            original_size = measure_text_bytes(geojson)
        else:
            original_size = measure_bytes(document)

        compressed_text = canonical_dumps(compressed_doc)
    except (ParseError, ValidationError) as e:
        logger.debug("Compression rejected input: %s", e)
        return _fallback_result(geojson, str(e), start)
    except RecursionError:
        # Foreign members are never walked, but still encoded when measuring
        logger.debug("Compression rejected input: %s", NESTED_TOO_DEEPLY)
        return _fallback_result(geojson, NESTED_TOO_DEEPLY, start)

    compressed_size = measure_text_bytes(compressed_text)
    ratio = compression_ratio(original_size, compressed_size)

    result = CompressionResult(
        compressed=compressed_text,
        document=compressed_doc,
        original_size=original_size,
        compressed_size=compressed_size,
        compression_ratio=ratio,
        savings=savings(original_size, compressed_size),
        saved_percentage=round(100 - ratio, 1) if original_size else 0.0,
        processing_time_ms=_elapsed_ms(start),
    )

    logger.debug(
        "Compressed %s: %d -> %d bytes (%.1f%%)",
        compressed_doc.get("type"), original_size, compressed_size, ratio,
    )
    return result


async def compress_async(
    geojson: GeoJSONInput,
    options: Optional[CompressionOptions] = None,
) -> CompressionResult:
    """Run compress() on a worker thread."""
    return await asyncio.to_thread(compress, geojson, options)


def _fallback_result(geojson: GeoJSONInput, error: str, start: float) -> CompressionResult:
    if isinstance(geojson, bytes):
        text = geojson.decode("utf-8", errors="replace")
        size = len(geojson)
    elif isinstance(geojson, str):
        text = geojson
        size = measure_text_bytes(geojson)
    else:
        try:
            text = canonical_dumps(geojson)
        except RecursionError:
            # Too deep to encode; there is no text to hand back
            text = ""
        size = measure_text_bytes(text)

    return CompressionResult(
        compressed=text,
        document=None,
        original_size=size,
        compressed_size=size,
        compression_ratio=0.0,
        processing_time_ms=_elapsed_ms(start),
        error=error,
    )


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)
