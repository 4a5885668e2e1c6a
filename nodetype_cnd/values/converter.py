# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Conversion of literal default values to typed values."""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict

from ..exceptions import CndParseError, ValueConversionError
from ..models.namespaces import NamespaceMapping
from ..models.path import parse_path
from ..models.property_types import PropertyType, Value


LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1

_LONG_RE = re.compile(r"[+-]?\d+")
_DOUBLE_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_DOUBLE_SPECIALS = {
    "NaN": math.nan,
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
}
_DATE_RE = re.compile(
    r"(?P<year>[+-]?\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.(?P<millis>\d{3}))?"
    r"(?P<tz>Z|[+-]\d{2}:\d{2})"
)


def parse_long(text: str) -> int:
    """Parse a signed 64-bit integer literal.

    Raises ValueError on non-numeric text or overflow.
    """
    if not _LONG_RE.fullmatch(text):
        raise ValueError(f"'{text}' is not an integer literal")
    number = int(text)
    if number < LONG_MIN or number > LONG_MAX:
        raise ValueError(f"'{text}' is out of the 64-bit integer range")
    return number


def parse_double(text: str) -> float:
    """Parse a double literal (decimal, exponent, NaN or Infinity).

    Raises ValueError on non-numeric text or overflow.
    """
    if text in _DOUBLE_SPECIALS:
        return _DOUBLE_SPECIALS[text]
    if not _DOUBLE_RE.fullmatch(text):
        raise ValueError(f"'{text}' is not a floating point literal")
    number = float(text)
    if math.isinf(number):
        raise ValueError(f"'{text}' overflows a double")
    return number


def parse_boolean(text: str) -> bool:
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"'{text}' is not 'true' or 'false'")


def parse_date(text: str) -> datetime:
    """Parse ``[+-]YYYY-MM-DDThh:mm:ss[.SSS]TZD`` into an aware datetime.

    TZD is ``Z`` or ``+hh:mm`` / ``-hh:mm``.
    """
    m = _DATE_RE.fullmatch(text)
    if m is None:
        raise ValueError(f"'{text}' is not a date of the form YYYY-MM-DDThh:mm:ss.SSSTZD")

    tz_text = m.group("tz")
    if tz_text == "Z":
        tz = timezone.utc
    else:
        sign = -1 if tz_text[0] == "-" else 1
        hours, minutes = int(tz_text[1:3]), int(tz_text[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"Invalid time zone offset '{tz_text}'")
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))

    millis = m.group("millis")
    # datetime validates the calendar fields (month 13, February 30, ...)
    return datetime(
        int(m.group("year")),
        int(m.group("month")),
        int(m.group("day")),
        int(m.group("hour")),
        int(m.group("minute")),
        int(m.group("second")),
        int(millis) * 1000 if millis else 0,
        tzinfo=tz,
    )


def _identity(text: str, namespaces: NamespaceMapping) -> str:
    return text


def _reference(text: str, namespaces: NamespaceMapping) -> str:
    if not text.strip():
        raise ValueError("a reference needs a non-empty identifier")
    return text


_CONVERTERS: Dict[PropertyType, Callable[[str, NamespaceMapping], object]] = {
    PropertyType.STRING: _identity,
    PropertyType.UNDEFINED: _identity,
    PropertyType.REFERENCE: _reference,
    PropertyType.BINARY: lambda text, ns: text.encode("utf-8"),
    PropertyType.LONG: lambda text, ns: parse_long(text),
    PropertyType.DOUBLE: lambda text, ns: parse_double(text),
    PropertyType.BOOLEAN: lambda text, ns: parse_boolean(text),
    PropertyType.DATE: lambda text, ns: parse_date(text),
    PropertyType.NAME: lambda text, ns: ns.resolve(text),
    PropertyType.PATH: lambda text, ns: parse_path(text, ns),
}


def format_value(value: Value, namespaces: NamespaceMapping) -> str:
    """Render a typed value as the literal that converts back to it."""
    payload = value.value
    if value.type == PropertyType.BINARY:
        return payload.decode("utf-8")
    if value.type == PropertyType.BOOLEAN:
        return "true" if payload else "false"
    if value.type == PropertyType.DOUBLE:
        if math.isnan(payload):
            return "NaN"
        if math.isinf(payload):
            return "Infinity" if payload > 0 else "-Infinity"
        return repr(payload)
    if value.type == PropertyType.DATE:
        text = payload.isoformat(timespec="milliseconds")
        return text[:-6] + "Z" if text.endswith("+00:00") else text
    if value.type == PropertyType.NAME:
        return namespaces.render(payload)
    if value.type == PropertyType.PATH:
        return payload.render(namespaces)
    return str(payload)


def convert_value(literal: str, required_type: PropertyType, namespaces: NamespaceMapping) -> Value:
    """Convert *literal* to a :class:`Value` of *required_type*.

    Names and paths are resolved through *namespaces*.

    Raises:
        ValueConversionError: If the literal is not a valid representation of
            a value of the type.
    """
    converter = _CONVERTERS[required_type]
    try:
        return Value(required_type, converter(literal, namespaces))
    except (ValueError, CndParseError) as exc:
        reason = exc.message if isinstance(exc, CndParseError) else str(exc)
        raise ValueConversionError(
            f"'{literal}' is not a valid string representation of a value of type "
            f"{required_type}: {reason}"
        ) from exc
