import os, typing, dataclasses

import fastjsonschema

from . import common
from .objects       import MemoryObjectDatabase
from .params.schema import MuckerLevel, ObjectType


CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "parmfile":         {"type": "string"},
        "level":            {"type": "integer", "minimum": 0},
        "inactive_modules": {"type": "array", "items": {"type": "string"}},
        "objects": {
            "type": "object",
            "propertyNames": {"pattern": "^#?[0-9]+$"},
            "additionalProperties": {"enum": [ t.value for t in ObjectType if t != ObjectType.ANY ]},
        },
    },
    "additionalProperties": False,
}

_validate_config = fastjsonschema.compile(CONFIG_SCHEMA)


@dataclasses.dataclass
class TuneConfig:
    parmfile:         str       = common.TUNE_PARMS_FILEPATH
    level:            int       = MuckerLevel.WIZARD
    inactive_modules: typing.List[str] = dataclasses.field(default_factory=list)
    objects:          typing.Dict[str, str] = dataclasses.field(default_factory=dict)

    @staticmethod
    def from_dict(d: dict):
        """ Create a TuneConfig object from a dictionary with (a subset of)
            the same keys as the fields of TuneConfig """
        try:
            _validate_config(d)
        except fastjsonschema.JsonSchemaException as exc:
            raise common.TuneException(f"Invalid configuration: {exc}") from exc

        r = TuneConfig()

        for field in dataclasses.fields(TuneConfig):
            if field.name in d:
                setattr(r, field.name, d[field.name])

        return r

    def make_objects(self) -> MemoryObjectDatabase:
        return MemoryObjectDatabase.from_dict(self.objects)


def load(filepath: str = None) -> TuneConfig:
    """ Read the YAML configuration at 'filepath' (tune.yaml in the working
        directory by default). A missing default file means all defaults. """
    if filepath is None:
        if not os.path.exists(common.TUNE_CONFIG_FILEPATH):
            return TuneConfig()

        filepath = common.TUNE_CONFIG_FILEPATH

    if not os.path.isfile(filepath):
        raise common.TuneException(f"Configuration file {filepath} does not exist.")

    d = common.file_load_yaml(filepath)
    if d is None:
        return TuneConfig()

    # YAML reads "0: room" with an integer key
    if isinstance(d, dict) and isinstance(d.get("objects"), dict):
        d["objects"] = { str(k): v for k, v in d["objects"].items() }

    return TuneConfig.from_dict(d)


gCFG: TuneConfig = TuneConfig()
gARG: dict       = {}

def ARG(arg: str, dflt = None) -> typing.Any:
    # pylint: disable=global-variable-not-assigned
    global gARG
    if arg in gARG:
        return gARG[arg]
    if dflt is not None:
        return dflt

    raise KeyError(f"{arg} is not an argument.")

def CFG() -> TuneConfig:
    # pylint: disable=global-variable-not-assigned
    global gCFG
    return gCFG
