"""
Access Control Gate.

Every externally reachable read or write of a tunable goes through
can_read()/can_write() before touching the stored value. A level is any
integer; MuckerLevel names the levels the server hands out.
"""

from .params.schema import ParamDef, MuckerLevel

__all__ = ['MuckerLevel', 'can_read', 'can_write']


def can_read(param: ParamDef, level: int) -> bool:
    return level >= param.read_level


def can_write(param: ParamDef, level: int) -> bool:
    # Checked on its own, even though tables keep write_level >= read_level.
    return level >= param.write_level
