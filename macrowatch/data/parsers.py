"""
Source-specific parsers for converting raw payload elements to (date, value) pairs.

This module handles decoding of the known element schemas into canonical
dates and numeric values. Schemas are tried in a fixed priority order and the
first structural match wins:

1. NOAA SWPC solar cycle indices: {"time-tag": "2024-05", "ssn": 171.2}
   or {"time-tag": "2025-01", "predicted_ssn": 140.1}
2. Series points: {"time": "2024-05-01T00:00:00Z", "value": 12.5}
3. FRED observations: {"date": "2024-05-01", "value": "4.42"} ("." = missing)
"""

import math
from collections.abc import Callable, Mapping
from typing import Any, Optional, Union

import orjson

from ..utils.dates import to_canonical_date

DEFAULT_MISSING_MARKERS = (".", "")


class ParseError(Exception):
    """Raised when parsing fails due to invalid data format."""
    pass


class UnknownSchemaError(ParseError):
    """Raised when an element matches none of the known schemas."""
    pass


class InvalidDateError(ParseError):
    """Raised when an element's date cannot be made canonical."""
    pass


class InvalidValueError(ParseError):
    """Raised when an element's value is missing, a sentinel or not numeric."""
    pass


def _parse_number(value: Any, *, allow_strings: bool,
                  missing_markers: tuple[str, ...]) -> float:
    """Convert a raw value to a finite float or raise InvalidValueError."""
    if value is None:
        raise InvalidValueError("Value is missing")

    if isinstance(value, bool):
        raise InvalidValueError(f"Boolean is not a numeric value: {value!r}")

    if isinstance(value, str):
        if value.strip() in missing_markers:
            raise InvalidValueError(f"Missing-value marker: {value!r}")
        if not allow_strings:
            raise InvalidValueError(f"String is not a numeric value: {value!r}")
        try:
            number = float(value)
        except ValueError:
            raise InvalidValueError(f"Non-numeric value: {value!r}")
    elif isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise InvalidValueError("Integer value out of float range")
    else:
        raise InvalidValueError(f"Unsupported value type: {type(value).__name__}")

    if not math.isfinite(number):
        raise InvalidValueError(f"Non-finite value: {value!r}")

    return number


def _parse_date(raw: Any) -> str:
    canonical = to_canonical_date(raw)
    if canonical is None:
        raise InvalidDateError(f"Invalid date: {raw!r}")
    return canonical


def _decode_solar_cycle(element: Mapping[str, Any],
                        missing_markers: tuple[str, ...]) -> tuple[str, float]:
    """Decode a NOAA SWPC observed or predicted solar cycle element."""
    key = "ssn" if "ssn" in element else "predicted_ssn"
    date = _parse_date(element["time-tag"])
    value = _parse_number(element[key], allow_strings=False, missing_markers=missing_markers)
    return date, value


def _decode_time_value(element: Mapping[str, Any],
                       missing_markers: tuple[str, ...]) -> tuple[str, float]:
    """Decode a {time, value} series point."""
    date = _parse_date(element["time"])
    value = _parse_number(element["value"], allow_strings=False, missing_markers=missing_markers)
    return date, value


def _decode_fred_observation(element: Mapping[str, Any],
                             missing_markers: tuple[str, ...]) -> tuple[str, float]:
    """Decode a FRED {date, value} observation where values are numeric strings."""
    date = _parse_date(element["date"])
    value = _parse_number(element["value"], allow_strings=True, missing_markers=missing_markers)
    return date, value


Decoder = Callable[[Mapping[str, Any], tuple[str, ...]], tuple[str, float]]

# (schema name, predicate on present fields, decoder) in priority order
SCHEMAS: tuple[tuple[str, Callable[[Mapping[str, Any]], bool], Decoder], ...] = (
    ("solar_cycle",
     lambda e: "time-tag" in e and ("ssn" in e or "predicted_ssn" in e),
     _decode_solar_cycle),
    ("time_value",
     lambda e: "time" in e and "value" in e,
     _decode_time_value),
    ("fred_observation",
     lambda e: "date" in e and "value" in e,
     _decode_fred_observation),
)


def detect_schema(element: Any) -> Optional[str]:
    """
    Identify which known schema an element matches.

    Args:
        element: Raw payload element

    Returns:
        Schema name, or None if the element matches no known schema
    """
    if not isinstance(element, Mapping):
        return None

    for name, matches, _decoder in SCHEMAS:
        if matches(element):
            return name
    return None


def decode_element(element: Any,
                   missing_markers: tuple[str, ...] = DEFAULT_MISSING_MARKERS) -> tuple[str, float]:
    """
    Decode one raw payload element into a canonical (date, value) pair.

    Args:
        element: Raw payload element
        missing_markers: String values that mean "no observation"

    Returns:
        Tuple of (canonical_date, value)

    Raises:
        UnknownSchemaError: If the element matches no known schema
        InvalidDateError: If the element's date is unusable
        InvalidValueError: If the element's value is missing or not numeric
    """
    if not isinstance(element, Mapping):
        raise UnknownSchemaError(f"Element must be an object, got {type(element).__name__}")

    for _name, matches, decoder in SCHEMAS:
        if matches(element):
            return decoder(element, missing_markers)

    raise UnknownSchemaError(f"Unrecognized element fields: {sorted(element)[:5]}")


def parse_json_payload(raw_data: Union[str, bytes]) -> list[Any]:
    """
    Parse raw JSON text into the payload element array.

    Envelope objects carrying an "observations" array (FRED responses) are
    unwrapped to that array.

    Args:
        raw_data: Raw JSON text from a source

    Returns:
        Decoded element list

    Raises:
        ParseError: If JSON decoding fails or the result has no element array
    """
    try:
        payload = orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}")

    return unwrap_payload(payload)


def unwrap_payload(payload: Any) -> list[Any]:
    """Return the element array of an already decoded payload."""
    if isinstance(payload, list):
        return payload

    if isinstance(payload, Mapping) and isinstance(payload.get("observations"), list):
        return payload["observations"]

    raise ParseError(f"Payload must be an array, got {type(payload).__name__}")
