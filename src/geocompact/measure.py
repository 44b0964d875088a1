"""
Size and ratio measurement.

Sizes are UTF-8 byte counts of the canonical minified JSON encoding, which
is also the encoding the compressor writes.
"""

import json
from typing import Any, Union


def canonical_dumps(value: Any) -> str:
    """Encode a value as JSON with no insignificant whitespace."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def measure_bytes(value: Any) -> int:
    """UTF-8 byte length of the canonical encoding of `value`."""
    return len(canonical_dumps(value).encode("utf-8"))


def measure_text_bytes(text: Union[str, bytes]) -> int:
    """UTF-8 byte length of text exactly as supplied."""
    if isinstance(text, bytes):
        return len(text)
    return len(text.encode("utf-8"))


def compression_ratio(original_bytes: int, compressed_bytes: int) -> float:
    """
    Compressed size as a percentage of the original, to one decimal.

    Defined as 0 when the original is empty.
    """
    if original_bytes == 0:
        return 0.0
    return round(compressed_bytes / original_bytes * 100, 1)


def savings(original_bytes: int, compressed_bytes: int) -> int:
    return original_bytes - compressed_bytes


def format_bytes(num_bytes: int) -> str:
    """Human-readable size, e.g. '1.5 KB'."""
    if num_bytes == 0:
        return "0 Bytes"

    k = 1024
    sizes = ["Bytes", "KB", "MB", "GB"]
    i = 0
    while i < len(sizes) - 1 and num_bytes >= k ** (i + 1):
        i += 1
    value = round(num_bytes / k ** i, 2)
    if value.is_integer():
        value = int(value)
    return f"{value} {sizes[i]}"
