"""
Introspection snapshot for the scripting environment.

export_parms() produces one ParamRecord per parameter the caller may read,
in definition order. ParamRecord.to_dict() gives the dictionary layout MUF
programs receive:

    type, group, name, value, mlev, readmlev, writemlev, label, default,
    active, nullable and, for dbref parameters, objtype
"""

import typing, fnmatch, dataclasses

from .access        import can_read
from .tunables      import Tunables
from .params.codec  import format_value
from .params.schema import ParamDef, ParamType, ObjectType


Matcher = typing.Callable[[str, str], bool]

_WILDCARDS = set("*?[")


def match_name(pattern: str, name: str) -> bool:
    """ Case-insensitive shell-style match. A pattern without wildcards
        matches anywhere in the name. """
    pattern, name = pattern.lower(), name.lower()
    if not _WILDCARDS & set(pattern):
        return pattern in name

    return fnmatch.fnmatchcase(name, pattern)


@dataclasses.dataclass(frozen=True)
class ParamRecord:
    # pylint: disable=too-many-instance-attributes
    type:      str
    group:     str
    name:      str
    value:     str
    readmlev:  int
    writemlev: int
    label:     str
    default:   str
    active:    bool
    nullable:  bool
    objtype:   typing.Optional[str] = None

    @property
    def mlev(self) -> int:
        return self.readmlev

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        d = {
            "type":      self.type,
            "group":     self.group,
            "name":      self.name,
            "value":     self.value,
            "mlev":      self.mlev,
            "readmlev":  self.readmlev,
            "writemlev": self.writemlev,
            "label":     self.label,
            "default":   self.default,
            "active":    self.active,
            "nullable":  self.nullable,
        }

        if self.objtype is not None:
            d["objtype"] = self.objtype

        return d


def objtype_name(param: ParamDef) -> str:
    try:
        return ObjectType(param.object_type).value
    except ValueError:
        return ObjectType.UNKNOWN.value


def make_record(tunables: Tunables, param: ParamDef) -> ParamRecord:
    return ParamRecord(
        type      = param.type_tag,
        group     = param.group,
        name      = param.name,
        value     = tunables.format_current(param),
        readmlev  = int(param.read_level),
        writemlev = int(param.write_level),
        label     = param.label,
        default   = format_value(param, param.default),
        active    = tunables.is_active(param),
        nullable  = param.nullable,
        objtype   = objtype_name(param) if param.param_type == ParamType.DBREF else None,
    )


def export_parms(tunables: Tunables,
                 pattern: str = "",
                 level: int = 0,
                 matcher: Matcher = None) -> typing.List[ParamRecord]:
    """
    Records for every parameter 'level' may read whose name matches
    'pattern'. An empty pattern matches everything. 'matcher' is called as
    matcher(pattern, name) and defaults to match_name().
    """

    if matcher is None:
        matcher = match_name

    records = []
    for param, _, _ in tunables.items():
        if not can_read(param, level):
            continue

        if pattern and not matcher(pattern, param.name):
            continue

        records.append(make_record(tunables, param))

    return records
