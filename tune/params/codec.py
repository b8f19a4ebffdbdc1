"""
Value Codec.

Per-type parsing (text -> value) and formatting (value -> canonical text) for
tunable parameters. The same functions back the interactive set/get path, the
parm file, and the exported snapshot.

Parsing raises TuneSyntaxError when the text cannot be read as the parameter's
type at all, and TuneBadValueError when it can be read but is not acceptable
(out of range, missing object, wrong object kind). Callers map these onto
set result codes; nothing here touches stored state.

Canonical spellings
-------------------
- boolean:  "yes" / "no"
- integer:  decimal
- timespan: decimal seconds
- dbref:    "#" followed by the decimal object number
- string:   verbatim; the null state of a nullable string is ""
"""

import re
from typing import Callable, Dict, Optional

from ..common import TuneException
from ..objects import ObjectDatabase
from .schema import (
    ParamDef, ParamType, ObjectType, TuneValue,
    BooleanValue, IntegerValue, TimespanValue, DbrefValue, StringValue,
)


class TuneSyntaxError(TuneException):
    """The text could not be parsed as the parameter's type."""


class TuneBadValueError(TuneException):
    """The text parsed, but the value is not acceptable for the parameter."""


INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

NUMBER_TOKEN = "#"

TRUE_SPELLINGS = frozenset({"yes", "y", "true", "on", "1"})
FALSE_SPELLINGS = frozenset({"no", "n", "false", "off", "0"})

_INTEGER_RE = re.compile(r'^\s*([+-]?\d+)\s*$')
_UNIT_RE = re.compile(r'^\s*([+-]?\d+)\s*([smhd])\s*$', re.IGNORECASE)
_CLOCK_RE = re.compile(r'^\s*(\d+)d\s+(\d{1,2}):(\d{1,2}):(\d{1,2})\s*$', re.IGNORECASE)
_DBREF_RE = re.compile(r'^\s*#(-?\d+)\s*$')

TIME_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400}

# Longer numbers are outside every supported range.
MAX_DIGITS = 18


def _to_int(digits: str) -> int:
    """
    Convert a matched run of digits. Overlong numbers come back just past
    INT_MIN/INT_MAX so the range checks reject them, instead of int() being
    handed arbitrarily long text.
    """
    if len(digits.lstrip("+-").lstrip("0")) > MAX_DIGITS:
        return INT_MIN - 1 if digits.startswith("-") else INT_MAX + 1
    return int(digits)


def _check_range(param: ParamDef, value: int) -> int:
    if not INT_MIN <= value <= INT_MAX:
        raise TuneBadValueError(f"'{param.name}' value {value} is out of range")

    constraints = param.constraints or {}
    if "min" in constraints and value < constraints["min"]:
        raise TuneBadValueError(f"'{param.name}' must be >= {constraints['min']}, got {value}")
    if "max" in constraints and value > constraints["max"]:
        raise TuneBadValueError(f"'{param.name}' must be <= {constraints['max']}, got {value}")

    return value


def _parse_boolean(param: ParamDef, text: str, objects: Optional[ObjectDatabase]) -> TuneValue:
    word = text.strip().lower()
    if word in TRUE_SPELLINGS:
        return BooleanValue(True)
    if word in FALSE_SPELLINGS:
        return BooleanValue(False)
    raise TuneSyntaxError(f"'{param.name}' expects yes or no, got '{text}'")


def _parse_integer(param: ParamDef, text: str, objects: Optional[ObjectDatabase]) -> TuneValue:
    match = _INTEGER_RE.match(text)
    if match is None:
        raise TuneSyntaxError(f"'{param.name}' expects an integer, got '{text}'")
    return IntegerValue(_check_range(param, _to_int(match.group(1))))


def parse_timespan(text: str) -> Optional[int]:
    """
    Read a duration as seconds.

    Accepts "90", "90s", "15m", "2h", "1d" and "1d 02:30:00". Returns None
    when the text fits none of these forms.
    """
    match = _INTEGER_RE.match(text)
    if match:
        return _to_int(match.group(1))

    match = _UNIT_RE.match(text)
    if match:
        return _to_int(match.group(1)) * TIME_UNITS[match.group(2).lower()]

    match = _CLOCK_RE.match(text)
    if match:
        days, hrs, mins, secs = (_to_int(g) for g in match.groups())
        return days * 86400 + hrs * 3600 + mins * 60 + secs

    return None


def _parse_timespan(param: ParamDef, text: str, objects: Optional[ObjectDatabase]) -> TuneValue:
    seconds = parse_timespan(text)
    if seconds is None:
        raise TuneSyntaxError(f"'{param.name}' expects a time span, got '{text}'")
    if seconds < 0:
        raise TuneBadValueError(f"'{param.name}' cannot be a negative time span, got {seconds}")
    return TimespanValue(_check_range(param, seconds))


def _parse_dbref(param: ParamDef, text: str, objects: Optional[ObjectDatabase]) -> TuneValue:
    match = _DBREF_RE.match(text)
    if match is None:
        raise TuneSyntaxError(f"'{param.name}' expects an object reference like #123, got '{text}'")

    ref = _to_int(match.group(1))
    if ref < 0 or objects is None or not objects.exists(ref):
        raise TuneBadValueError(f"'{param.name}': object #{ref} does not exist")

    kind = objects.kind(ref)
    if kind == ObjectType.GARBAGE:
        raise TuneBadValueError(f"'{param.name}': object #{ref} has been recycled")
    if param.object_type != ObjectType.ANY and kind != param.object_type:
        raise TuneBadValueError(
            f"'{param.name}' must be a {param.object_type.value}, "
            f"but #{ref} is a {kind.value}"
        )

    return DbrefValue(ref)


def _parse_string(param: ParamDef, text: str, objects: Optional[ObjectDatabase]) -> TuneValue:
    if "\n" in text or "\r" in text:
        raise TuneBadValueError(f"'{param.name}' cannot contain line breaks")
    if param.nullable and text == "":
        return StringValue(None)
    return StringValue(text)


_PARSERS: Dict[ParamType, Callable[[ParamDef, str, Optional[ObjectDatabase]], TuneValue]] = {
    ParamType.BOOLEAN: _parse_boolean,
    ParamType.INTEGER: _parse_integer,
    ParamType.TIMESPAN: _parse_timespan,
    ParamType.DBREF: _parse_dbref,
    ParamType.STRING: _parse_string,
}


def parse_value(param: ParamDef, text: str, objects: Optional[ObjectDatabase] = None) -> TuneValue:
    """
    Parse text into a value for a parameter.

    Args:
        param: Definition of the parameter being set.
        text: Raw text, without any default flag.
        objects: Host object database used to validate dbrefs.

    Returns:
        A value of param.param_type.value_class.

    Raises:
        TuneSyntaxError: The text is not a value of the parameter's type.
        TuneBadValueError: The value is not acceptable for this parameter.
    """
    if text is None:
        raise TuneSyntaxError(f"'{param.name}' needs a value")
    return _PARSERS[param.param_type](param, text, objects)


_FORMATTERS: Dict[ParamType, Callable[[TuneValue], str]] = {
    ParamType.BOOLEAN: lambda v: "yes" if v.value else "no",
    ParamType.INTEGER: lambda v: str(v.value),
    ParamType.TIMESPAN: lambda v: str(v.value),
    ParamType.DBREF: lambda v: f"{NUMBER_TOKEN}{v.value}",
    ParamType.STRING: lambda v: "" if v.value is None else v.value,
}


def format_value(param: ParamDef, value: TuneValue) -> str:
    """Canonical text for a value of the given parameter."""
    return _FORMATTERS[param.param_type](value)
