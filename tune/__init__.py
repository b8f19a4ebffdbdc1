"""
Runtime-tunable parameter registry.

The parameter table lives in tune.params (frozen at import). Live values are
held by a Tunables instance, which the server creates at startup:

    from tune import Tunables, MuckerLevel
    from tune.persist import load_parms_from_file

    tunables = Tunables(objects=db)
    load_parms_from_file(tunables, "data/parmfile.cfg")

    tunables.set_parameter("dump_interval", "2h", MuckerLevel.WIZARD)
    tunables["dump_interval"]      # 7200
"""

from .common   import TuneException
from .access   import MuckerLevel, can_read, can_write
from .tunables import Tunables
from .params   import REGISTRY, ParamDef, ParamType, ObjectType
from .params.errors import TuneSetResult

__all__ = [
    'TuneException', 'MuckerLevel', 'can_read', 'can_write', 'Tunables',
    'REGISTRY', 'ParamDef', 'ParamType', 'ObjectType', 'TuneSetResult',
]
