"""
Live storage for tunable parameters.

A Tunables instance owns the current value of every parameter in a
ParamRegistry, plus whether each one still holds its compiled-in default. The
server constructs one at startup and passes it to whatever needs it; other
subsystems read values through get_value() rather than holding on to them.

Access discipline
-----------------
Tunables does no locking. One owner (the server's main loop) reads and writes
it; anything running on another thread must go through that owner.
"""

import typing

from .common         import TuneException
from .access         import can_read, can_write
from .objects        import ObjectDatabase, MemoryObjectDatabase
from .params         import REGISTRY
from .params.codec   import parse_value, format_value, TuneSyntaxError, TuneBadValueError
from .params.errors  import TuneSetResult, unknown_param_error
from .params.registry import ParamRegistry, TP_FLAG_DEFAULT, strip_default_flag
from .params.schema  import ParamDef, TuneValue
from .params.suggest import suggest_parameter


class Tunables:
    def __init__(self,
                 registry: ParamRegistry = None,
                 objects: ObjectDatabase = None,
                 inactive_modules: typing.Iterable[str] = None):
        self.registry = registry if registry is not None else REGISTRY
        self.objects  = objects if objects is not None else MemoryObjectDatabase()

        self.inactive_modules: typing.Set[str] = { m.lower() for m in (inactive_modules or []) }

        self._values:   typing.Dict[str, TuneValue] = {}
        self._defaults: typing.Dict[str, bool]      = {}

        self.load_defaults()

    def count_parms(self) -> int:
        return self.registry.count()

    def load_defaults(self) -> None:
        """ Replace every current value with its compiled-in default and mark
            it default. Overrides are lost; reload a saved parm file to get
            them back. """
        for param in self.registry:
            self._install(param, param.default, True)

    def free_parms(self) -> int:
        """ Release all override storage at shutdown. Returns how many
            parameters held an override. """
        released = sum(1 for is_default in self._defaults.values() if not is_default)
        self.load_defaults()

        return released

    def lookup(self, name: str) -> typing.Optional[ParamDef]:
        return self.registry.lookup(name)

    def _require(self, name: str) -> ParamDef:
        param = self.registry.lookup(name)
        if param is None:
            raise KeyError(unknown_param_error(name, suggest_parameter(name, self.registry)))

        return param

    def _install(self, param: ParamDef, value: TuneValue, is_default: bool) -> None:
        if not isinstance(value, param.param_type.value_class):
            raise TuneException(
                f"Cannot store a {type(value).__name__} in {param.param_type.value} parameter '{param.name}'"
            )

        self._values[param.key]   = value
        self._defaults[param.key] = is_default

    def is_default(self, name: str) -> bool:
        return self._defaults[self._require(name).key]

    def is_active(self, param: ParamDef) -> bool:
        return param.module.lower() not in self.inactive_modules

    def get_tuneval(self, name: str) -> TuneValue:
        """ Current value of a parameter in its tagged form. Not privilege
            checked: this is the accessor for server code. """
        return self._values[self._require(name).key]

    def get_value(self, name: str) -> typing.Any:
        """ Current value as a plain Python object: bool, int (timespans in
            seconds, dbrefs as the object number) or str (None when a
            nullable string is unset). """
        return self.get_tuneval(name).value

    def __getitem__(self, name: str) -> typing.Any:
        return self.get_value(name)

    def __contains__(self, name: str) -> bool:
        return self.registry.lookup(name) is not None

    def __len__(self) -> int:
        return self.count_parms()

    def items(self) -> typing.Iterator[typing.Tuple[ParamDef, TuneValue, bool]]:
        """ (definition, current value, is default) in definition order. """
        for param in self.registry:
            yield param, self._values[param.key], self._defaults[param.key]

    def format_current(self, param: ParamDef) -> str:
        return format_value(param, self._values[param.key])

    def set_parameter(self, name: str, raw_text: typing.Optional[str], level: int) -> TuneSetResult:
        """
        Set a parameter from text on behalf of a caller at mucker level
        'level'. A '%' before the name, or a value of exactly '%', resets the
        parameter to its default instead.

        Nothing is changed unless the result is SUCCESS or SUCCESS_DEFAULT.
        """
        param = self.registry.lookup(name)
        if param is None:
            return TuneSetResult.UNKNOWN

        _, reset = strip_default_flag(name)
        if raw_text == TP_FLAG_DEFAULT:
            reset = True

        if not can_write(param, level):
            return TuneSetResult.DENIED

        if reset:
            self._install(param, param.default, True)
            return TuneSetResult.SUCCESS_DEFAULT

        try:
            value = parse_value(param, raw_text, self.objects)
        except TuneSyntaxError:
            return TuneSetResult.SYNTAX
        except TuneBadValueError:
            return TuneSetResult.BADVAL

        self._install(param, value, False)
        return TuneSetResult.SUCCESS

    def get_parameter_string(self, name: str, level: int) -> str:
        """ Current value as canonical text, or "" if the parameter does not
            exist or 'level' may not read it. A leading '%' on the name is
            ignored. """
        param = self.registry.lookup(name)
        if param is None or not can_read(param, level):
            return ""

        return self.format_current(param)
