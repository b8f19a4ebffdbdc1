"""
Set Result Codes and Message Formatting.

Setting a parameter never raises for operator mistakes; it returns one of the
TuneSetResult codes below. This module turns those codes into the short
messages shown to operators (on the command line and when acknowledging each
line of a loaded parm file), so every front end words them the same way.

Message Format
--------------
- Parameter name in single quotes: 'param_name'
- Result messages end in a period: "Parameter set."
- Unknown names get "Did you mean?" suggestions where available

Examples:
- "dump_interval: Parameter set."
- "Unknown parameter 'dump_intreval'. Did you mean 'dump_interval'?"
"""

from enum import IntEnum
from typing import List, Optional


class TuneSetResult(IntEnum):
    """Outcome of setting a parameter. Only SUCCESS* results mutate state."""
    SUCCESS = 0
    UNKNOWN = 1
    SYNTAX = 2
    BADVAL = 3
    DENIED = 4
    SUCCESS_DEFAULT = 5

    @property
    def succeeded(self) -> bool:
        return self in (TuneSetResult.SUCCESS, TuneSetResult.SUCCESS_DEFAULT)


_RESULT_MESSAGES = {
    TuneSetResult.SUCCESS: "Parameter set.",
    TuneSetResult.SUCCESS_DEFAULT: "Parameter set to default.",
    TuneSetResult.UNKNOWN: "Unknown parameter.",
    TuneSetResult.SYNTAX: "Bad parameter syntax.",
    TuneSetResult.BADVAL: "Bad parameter value.",
    TuneSetResult.DENIED: "Permission denied.",
}


def result_message(result: TuneSetResult) -> str:
    """Operator-facing message for a set result."""
    return _RESULT_MESSAGES[TuneSetResult(result)]


def format_param(name: str) -> str:
    """Format a parameter name for error messages."""
    return f"'{name}'"


def set_result_line(name: str, result: TuneSetResult) -> str:
    """
    Create the acknowledgement line for one applied parameter.

    Args:
        name: Parameter name as it appeared in the input.
        result: Outcome of the set.

    Returns:
        Line of the form "<name>: <message>".
    """
    return f"{name}: {result_message(result)}"


def unknown_param_error(param: str, suggestions: Optional[List[str]] = None) -> str:
    """
    Create an error message for an unknown parameter with suggestions.

    Args:
        param: The unknown parameter name.
        suggestions: Optional list of similar valid parameter names.

    Returns:
        Formatted error message with "Did you mean?" if suggestions available.
    """
    base_msg = f"Unknown parameter {format_param(param)}"
    if suggestions:
        if len(suggestions) == 1:
            return f"{base_msg}. Did you mean {format_param(suggestions[0])}?"
        quoted = [format_param(s) for s in suggestions]
        return f"{base_msg}. Did you mean one of: {', '.join(quoted)}?"
    return base_msg
