"""
Tune Parameter Command.

CLI counterpart of the server's @tune command, working on the parm file.
"""

import os, typing

import rich.table
from rich.markup import escape

from .state    import ARG, CFG
from .common   import TuneException, format_list_to_string
from .printer  import cons
from .access   import can_read
from .tunables import Tunables
from .export   import export_parms, ParamRecord
from .persist  import load_parms_from_file, save_parms_to_file
from .params.errors  import TuneSetResult, result_message, unknown_param_error
from .params.suggest import suggest_parameter


def tune():
    """Execute the tune command based on CLI arguments."""
    {
        "list":  _list,
        "get":   _get,
        "set":   _set,
        "reset": _reset,
        "save":  _save,
        "load":  _load,
    }[ARG("command")]()


def _level() -> int:
    level = ARG("level")
    return CFG().level if level is None else level


def _parmfile() -> str:
    return ARG("file") or CFG().parmfile


def _new_tunables() -> Tunables:
    return Tunables(objects=CFG().make_objects(), inactive_modules=CFG().inactive_modules)


def _open_tunables() -> Tunables:
    """ Build a Tunables with defaults, then silently apply the parm file if
        there is one. """
    tunables = _new_tunables()

    filepath = _parmfile()
    if os.path.exists(filepath):
        load_parms_from_file(tunables, filepath)

    return tunables


def _unknown(name: str) -> TuneException:
    return TuneException(unknown_param_error(name, suggest_parameter(name)))


def _list():
    tunables = _open_tunables()
    pattern  = ARG("pattern")
    records  = export_parms(tunables, pattern, _level())

    if not records:
        cons.print(f"[yellow]No parameters found matching '{escape(pattern)}'[/yellow]")
        return

    groups: typing.Dict[str, typing.List[ParamRecord]] = {}
    for record in records:
        groups.setdefault(record.group, []).append(record)

    for group, members in groups.items():
        table = rich.table.Table(title=f"[bold]{escape(group)}[/bold]", title_justify="left",
                                 show_header=True, box=rich.table.box.SIMPLE)
        table.add_column("Parameter", justify="left")
        table.add_column("Type",      justify="left")
        table.add_column("Value",     justify="left")
        table.add_column("Write",     justify="right")

        for record in members:
            value = escape(record.value)
            if not tunables.is_default(record.name):
                value = f"[magenta]{value}[/magenta]"

            table.add_row(record.name, record.type, value, str(record.writemlev),
                          style=None if record.active else "dim")

        cons.raw.print(table)

    cons.print(f"[dim]{len(records)} of {tunables.count_parms()} parameters shown; "
               f"customized values in[/dim] [magenta]magenta[/magenta][dim].[/dim]")


def _get():
    tunables = _open_tunables()
    name     = ARG("name")

    param = tunables.lookup(name)
    if param is None:
        raise _unknown(name)

    if not can_read(param, _level()):
        raise TuneException(f"{param.name}: {result_message(TuneSetResult.DENIED)}")

    value = tunables.get_parameter_string(name, _level())
    state = "default" if tunables.is_default(name) else "customized"

    cons.print(f"[bold]{param.name}[/bold] = {escape(value)}")
    cons.indent()
    cons.print(f"[dim]{escape(param.label)}[/dim]")
    cons.print(f"[dim]{param.type_tag}, {state}, group {escape(param.group)}, read {param.read_level}, write {param.write_level}[/dim]")
    cons.unindent()


def _apply(name: str, value: str):
    tunables = _open_tunables()

    result = tunables.set_parameter(name, value, _level())
    if result == TuneSetResult.UNKNOWN:
        raise _unknown(name)
    if not result.succeeded:
        raise TuneException(f"{name}: {result_message(result)}")

    save_parms_to_file(tunables, _parmfile())

    param = tunables.lookup(name)
    cons.print(f"[bold green]{param.name}[/bold green]: {result_message(result)} "
               f"Now '{escape(tunables.get_parameter_string(name, _level()))}'.", highlight=False)


def _set():
    _apply(ARG("name"), ARG("value"))


def _reset():
    _apply(ARG("name"), "%")


def _save():
    tunables = _open_tunables()
    count    = save_parms_to_file(tunables, _parmfile())

    cons.print(f"Saved [cyan]{count}[/cyan] parameters to [bold]{escape(_parmfile())}[/bold].")


def _load():
    source = ARG("source")
    quiet  = ARG("quiet")

    # Without a source the parm file is replayed against fresh defaults to
    # check it, and is left as it is on disk.
    replay = source is None
    if replay:
        tunables = _new_tunables()
        source   = _parmfile()
    else:
        tunables = _open_tunables()

    cons.print(f"Loading [bold]{escape(source)}[/bold]")
    cons.indent()
    report = load_parms_from_file(tunables, source, recipient=None if quiet else cons.notify, count=ARG("count"))
    cons.unindent()

    if not replay:
        save_parms_to_file(tunables, _parmfile())

    cons.print(f"Applied [cyan]{len(report.applied)}[/cyan] of {len(report.results)} assignments "
               f"from {report.lines_read} lines.")
    if report.failed:
        skipped = format_list_to_string([ escape(name) for name, _ in report.failed ], "bold")
        cons.print(f"[yellow]Skipped[/yellow] {skipped}.")
