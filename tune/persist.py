"""
Parm file persistence.

The parm file holds one assignment per line:

    dump_interval=3600
    %dump_warntime=120

A leading '%' marks a parameter that still holds its compiled-in default. The
value is written anyway so operators can see what is available, but on load
the '%' resets the parameter to whatever the current default is. Lines whose
first non-blank character is '#' are comments; save never writes any.

Loading applies each line independently at GOD level. Unknown names and bad
values are reported to the recipient (if any) and skipped; they never stop
the rest of the file from loading.
"""

import io, typing, dataclasses

from .                import common
from .access          import MuckerLevel
from .tunables        import Tunables
from .params.errors   import TuneSetResult, set_result_line
from .params.registry import TP_FLAG_DEFAULT


COMMENT_TOKEN = "#"

Recipient = typing.Callable[[str], typing.Any]


@dataclasses.dataclass
class LoadReport:
    lines_read: int = 0
    results:    typing.List[typing.Tuple[str, TuneSetResult]] = dataclasses.field(default_factory=list)

    @property
    def applied(self) -> typing.List[str]:
        return [ name for name, result in self.results if result.succeeded ]

    @property
    def failed(self) -> typing.List[typing.Tuple[str, TuneSetResult]]:
        return [ (name, result) for name, result in self.results if not result.succeeded ]


def format_parm_line(name: str, text: str, is_default: bool) -> str:
    return f"{TP_FLAG_DEFAULT if is_default else ''}{name}={text}"


def split_parm_line(line: str) -> typing.Optional[typing.Tuple[str, str]]:
    """
    Returns (name, value) for an assignment line, or None for comments, blank
    lines and lines without '='. The name keeps any leading '%' and loses
    surrounding blanks; the value is kept exactly, minus the line terminator,
    so string values survive a save and load unchanged.
    """

    stripped = line.lstrip()
    if not stripped or stripped.startswith(COMMENT_TOKEN):
        return None

    name, sep, value = stripped.partition("=")
    if not sep:
        return None

    name = name.strip()
    if not name:
        return None

    return name, value.rstrip("\r\n")


def save_parms(tunables: Tunables, stream: typing.TextIO) -> int:
    """ Write every parameter, in definition order. Returns the line count. """
    count = 0
    for param, _, is_default in tunables.items():
        stream.write(format_parm_line(param.name, tunables.format_current(param), is_default))
        stream.write("\n")
        count += 1

    return count


def load_parms(tunables: Tunables,
               stream: typing.TextIO,
               recipient: typing.Optional[Recipient] = None,
               count: int = -1) -> LoadReport:
    """
    Apply assignments read from 'stream'. Reads at most 'count' lines, or the
    whole stream when 'count' is negative. Each processed assignment is
    acknowledged to 'recipient' as "<name>: <message>"; with no recipient the
    load is silent.
    """

    report = LoadReport()

    for line in stream:
        if 0 <= count <= report.lines_read:
            break

        report.lines_read += 1

        parsed = split_parm_line(line)
        if parsed is None:
            continue

        name, value = parsed
        result = tunables.set_parameter(name, value, MuckerLevel.GOD)
        report.results.append((name, result))

        if recipient is not None:
            recipient(set_result_line(name, result))

    return report


def save_parms_to_file(tunables: Tunables, filepath: str) -> int:
    buff = io.StringIO()
    count = save_parms(tunables, buff)
    common.file_write(filepath, buff.getvalue())

    return count


def load_parms_from_file(tunables: Tunables,
                         filepath: str,
                         recipient: typing.Optional[Recipient] = None,
                         count: int = -1) -> LoadReport:
    return load_parms(tunables, io.StringIO(common.file_read(filepath)), recipient, count)
