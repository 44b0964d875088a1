"""
Feature property sanitization.

Strips values that carry no information (null, blank strings, empty
containers) so they are not shipped in the output.
"""

from typing import Any, Dict, Mapping, Optional

from .errors import ValidationError
from .options import SanitizeMode
from .rounding import round_coordinate


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after stripping."""
    return value is None or (isinstance(value, str) and not value.strip())


def sanitize_shallow(properties: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in properties.items() if not is_blank(value)}


def sanitize_recursive(
    properties: Mapping[str, Any],
    precision: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Sanitize a property mapping and any mappings nested in it.

    Strings are stored stripped. Lists are kept as they are unless empty.
    When `precision` is given, float values are rounded to that many
    decimals; integers are never touched.
    """
    cleaned: Dict[str, Any] = {}

    for key, value in properties.items():
        if is_blank(value):
            continue

        if isinstance(value, bool):
            cleaned[key] = value
        elif isinstance(value, (int, float)):
            if precision is not None and isinstance(value, float):
                value = round_coordinate(value, precision)
            cleaned[key] = value
        elif isinstance(value, str):
            cleaned[key] = value.strip()
        elif isinstance(value, dict):
            nested = sanitize_recursive(value, precision)
            if nested:
                cleaned[key] = nested
        elif isinstance(value, list):
            if value:
                cleaned[key] = value
        else:
            cleaned[key] = value

    return cleaned


def sanitize_properties(
    properties: Optional[Mapping[str, Any]],
    mode: SanitizeMode = SanitizeMode.RECURSIVE,
    precision: Optional[int] = None,
) -> Optional[Dict[str, Any]]:
    """
    Sanitize a feature's properties.

    Args:
        properties: Property mapping, or None
        mode: Sanitizer variant
        precision: Float rounding for the recursive variant (None keeps floats)

    Returns:
        A new mapping, or None when no key survives
    """
    if properties is None:
        return None
    if not isinstance(properties, dict):
        raise ValidationError("Feature properties must be an object or null")

    if SanitizeMode(mode) == SanitizeMode.SHALLOW:
        cleaned = sanitize_shallow(properties)
    else:
        cleaned = sanitize_recursive(properties, precision)

    return cleaned or None
