from typing import List, Sequence

import polyline

from .RouteBase import LatLng
from .config import POLYLINE_PRECISION
from .errors import DecodeError

# every encoded character is a 5-bit chunk offset by 63; chunks >= 0x20 continue a value
_MIN_CHAR = 63
_MAX_CHAR = 63 + 0x3F
_CONTINUATION = 0x20


def _check_encoding(encoded: str) -> None:
    values = 0
    for pos, ch in enumerate(encoded):
        chunk = ord(ch) - _MIN_CHAR
        if not (_MIN_CHAR <= ord(ch) <= _MAX_CHAR):
            raise DecodeError(f"Invalid polyline character {ch!r} at position {pos}")
        if chunk < _CONTINUATION:
            values += 1
    if encoded and ord(encoded[-1]) - _MIN_CHAR >= _CONTINUATION:
        raise DecodeError("Polyline ends in the middle of a value")
    if values % 2:
        raise DecodeError("Polyline has an odd number of values (lat without lng)")


def decode(encoded: str, precision: int = POLYLINE_PRECISION) -> List[LatLng]:
    """Decode a GraphHopper 'points' string into LatLng points (lat, lng order)."""
    if not isinstance(encoded, str):
        raise DecodeError(f"Encoded polyline must be a string, got {type(encoded).__name__}")
    _check_encoding(encoded)
    try:
        coords = polyline.decode(encoded, precision)
    except (IndexError, ValueError) as e:
        raise DecodeError(f"Malformed polyline: {e}") from e
    return [LatLng(lat, lng) for lat, lng in coords]


def encode(coordinates: Sequence[LatLng], precision: int = POLYLINE_PRECISION) -> str:
    return polyline.encode([c.as_tuple() for c in coordinates], precision)
