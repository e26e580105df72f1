"""Byte-size and stream rendering for command output."""

import base64
from collections.abc import Iterable
from typing import Any, Final

OUTPUT_FORMATS: Final[tuple[str, ...]] = ("utf-8", "base64")

_UNITS: Final[list[str]] = ["B", "KiB", "MiB", "GiB", "TiB"]


def format_bytes(num_bytes: int) -> str:
    """Format a byte count as a human-readable size (e.g. "1.32 MiB")."""
    if num_bytes <= 0:
        return "0 B"

    exponent = 0
    value = float(num_bytes)
    while value >= 1024 and exponent < len(_UNITS) - 1:
        value /= 1024
        exponent += 1

    decimals = 0 if exponent == 0 else 2
    return f"{value:.{decimals}f} {_UNITS[exponent]}"


def normalize_formats(formats: Iterable[str] | None) -> list[str]:
    """Keep known output formats; default to utf-8 when none are given."""
    requested = list(formats or [])
    if not requested:
        return ["utf-8"]
    return [f for f in requested if f in OUTPUT_FORMATS]


def format_stream(data: bytes, formats: Iterable[str] | None = None) -> dict[str, Any]:
    """Render captured stream bytes in the requested formats with size metadata.

    Args:
        data: Raw stream bytes
        formats: Any of "utf-8" and "base64"

    Returns:
        Dict with byteCount and size, plus text and/or base64 fields
    """
    result: dict[str, Any] = {
        "byteCount": len(data),
        "size": format_bytes(len(data)),
    }

    for fmt in normalize_formats(formats):
        if fmt == "utf-8":
            result["text"] = data.decode("utf-8", errors="replace")
        elif fmt == "base64":
            encoded = base64.b64encode(data).decode("ascii")
            result["base64"] = encoded
            result["base64ByteCount"] = len(encoded)
            result["base64Size"] = format_bytes(len(encoded))

    return result
