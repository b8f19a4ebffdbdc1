"""
Tunable Parameter Schema Definitions.

This module defines the core types for the tune parameter schema:
- ParamType: The five value kinds a tunable parameter can hold
- ObjectType: Object kinds a dbref-typed parameter may be restricted to
- BooleanValue, IntegerValue, TimespanValue, DbrefValue, StringValue:
  the tagged value forms stored for each kind
- ParamDef: Defines a single parameter (name, type, default, levels, etc.)

The ParamType on a ParamDef is the only discriminator for which value form
is valid. Code must never decide a branch by inspecting the value itself.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Any, Dict, Union


class ParamType(Enum):
    """
    Parameter value kinds.

    - BOOLEAN: yes/no switches
    - INTEGER: plain signed integers
    - TIMESPAN: durations, stored as a count of seconds
    - DBREF: references to objects in the host database ("#123")
    - STRING: free text, optionally nullable
    """
    BOOLEAN = "boolean"
    INTEGER = "integer"
    TIMESPAN = "timespan"
    DBREF = "dbref"
    STRING = "string"

    @property
    def value_class(self):
        """Return the value class installed for parameters of this type."""
        return _VALUE_CLASSES[self]


class MuckerLevel(IntEnum):
    """
    Privilege levels handed out by the server, lowest first.

    Any integer works as a level; these are the named ones.
    """
    NONE = 0
    APPRENTICE = 1
    JOURNEYMAN = 2
    MASTER = 3
    WIZARD = 4
    GOD = 5


class ObjectType(Enum):
    """
    Object kinds known to the host database.

    ANY is used on a ParamDef to mean "no restriction". UNKNOWN is only
    produced when spelling out a kind the database could not classify.
    """
    ANY = "any"
    PLAYER = "player"
    THING = "thing"
    ROOM = "room"
    EXIT = "exit"
    PROGRAM = "program"
    GARBAGE = "garbage"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True)
class IntegerValue:
    value: int


@dataclass(frozen=True)
class TimespanValue:
    """A duration in whole seconds."""
    value: int


@dataclass(frozen=True)
class DbrefValue:
    value: int


@dataclass(frozen=True)
class StringValue:
    """Text value. None is the null state of a nullable string."""
    value: Optional[str]


TuneValue = Union[BooleanValue, IntegerValue, TimespanValue, DbrefValue, StringValue]

_VALUE_CLASSES = {
    ParamType.BOOLEAN: BooleanValue,
    ParamType.INTEGER: IntegerValue,
    ParamType.TIMESPAN: TimespanValue,
    ParamType.DBREF: DbrefValue,
    ParamType.STRING: StringValue,
}


@dataclass
class ParamDef:  # pylint: disable=too-many-instance-attributes
    """
    Definition of a single tunable parameter.

    Definitions are fixed for the lifetime of the process. The live value
    of a parameter is not stored here; see tune.tunables.Tunables.

    Attributes:
        name: Parameter name as used in the parm file (e.g., "dump_interval")
        param_type: Value kind (BOOLEAN, INTEGER, TIMESPAN, DBREF, STRING)
        default: Compiled-in default, an instance of param_type.value_class
        label: Short human-readable description
        group: Configuration group used for display (e.g., "Database")
        module: Server module the parameter belongs to (e.g., "ssl")
        read_level: Minimum mucker level needed to read the value
        write_level: Minimum mucker level needed to change the value
        nullable: STRING only, whether the empty value means "unset"
        object_type: DBREF only, the object kind the reference must have
        constraints: INTEGER/TIMESPAN only, optional {"min": n, "max": n}
    """
    name: str
    param_type: ParamType
    default: Any
    label: str = ""
    group: str = ""
    module: str = ""
    read_level: int = 0
    write_level: int = MuckerLevel.WIZARD
    nullable: bool = False
    object_type: ObjectType = ObjectType.ANY
    constraints: Optional[Dict[str, int]] = field(default=None)

    def __post_init__(self):
        if not isinstance(self.default, self.param_type.value_class):
            raise ValueError(
                f"Default for '{self.name}' must be a {self.param_type.value_class.__name__}, "
                f"got {type(self.default).__name__}"
            )
        if self.nullable and self.param_type != ParamType.STRING:
            raise ValueError(f"Only string parameters can be nullable, not '{self.name}'")
        if self.object_type != ObjectType.ANY and self.param_type != ParamType.DBREF:
            raise ValueError(f"Only dbref parameters can restrict object type, not '{self.name}'")
        if self.constraints and self.param_type not in (ParamType.INTEGER, ParamType.TIMESPAN):
            raise ValueError(f"Only numeric parameters can have constraints, not '{self.name}'")

    @property
    def key(self) -> str:
        """Case-folded name used for lookups."""
        return self.name.lower()

    @property
    def type_tag(self) -> str:
        """Return the type tag exposed to the scripting consumer."""
        return self.param_type.value
