import os, yaml

from os.path import join, abspath


TUNE_CONFIG_FILEPATH = abspath(join(os.getcwd(), "tune.yaml"))
TUNE_PARMS_FILEPATH  = abspath(join(os.getcwd(), "parmfile.cfg"))


class TuneException(Exception):
    pass


def file_write(filepath: str, content: str):
    try:
        with open(filepath, "w") as f:
            f.write(content)
    except IOError as exc:
        raise TuneException(f'Failed to write to "{filepath}": {exc}') from exc


def file_read(filepath: str):
    try:
        with open(filepath, "r") as f:
            return f.read()
    except IOError as exc:
        raise TuneException(f'Failed to read from "{filepath}": {exc}') from exc


def file_load_yaml(filepath: str):
    try:
        with open(filepath, "r") as f:
            return yaml.safe_load(f)
    except (IOError, yaml.YAMLError) as exc:
        raise TuneException(f'Failed to load YAML from "{filepath}": {exc}') from exc


def format_list_to_string(arr: list, item_style=None, empty=None):
    if empty is None:
        empty = "nothing"

    pre, post = "", ""
    if item_style is not None:
        pre  = f"[{item_style}]"
        post = f"[/{item_style}]"

    if len(arr) == 0:
        return f"{pre}{empty}{post}"

    if len(arr) == 1:
        return f"{pre}{arr[0]}{post}"

    if len(arr) == 2:
        return f"{pre}{arr[0]}{post} and {pre}{arr[1]}{post}"

    lhs = ', '.join([ f"{pre}{e}{post}" for e in arr[:-1]])
    rhs = f", and {pre}{arr[-1]}{post}"

    return lhs + rhs
