"""
Host object database contract.

The tune registry only needs two questions answered about a dbref: does the
object exist, and what kind is it. The server supplies an implementation of
ObjectDatabase; MemoryObjectDatabase backs the command line and the tests.
"""

import typing

from .params.schema import ObjectType


class ObjectDatabase(typing.Protocol):
    def exists(self, ref: int) -> bool: ...

    def kind(self, ref: int) -> ObjectType: ...


class MemoryObjectDatabase:
    """Dict-backed object database: dbref number -> ObjectType."""

    def __init__(self, objects: typing.Optional[typing.Mapping[int, ObjectType]] = None):
        self.objects: typing.Dict[int, ObjectType] = dict(objects or {})

    @staticmethod
    def from_dict(d: typing.Mapping[typing.Any, str]) -> "MemoryObjectDatabase":
        """ Build from a mapping like {0: "room", 1: "player"}, as found in
            tune.yaml. Keys may be ints or "#N" strings. """
        objects = {}
        for ref, kind in d.items():
            if isinstance(ref, str):
                ref = int(ref.lstrip("#"))
            objects[int(ref)] = ObjectType(str(kind).lower())

        return MemoryObjectDatabase(objects)

    def add(self, ref: int, kind: ObjectType) -> None:
        self.objects[ref] = kind

    def recycle(self, ref: int) -> None:
        if ref in self.objects:
            self.objects[ref] = ObjectType.GARBAGE

    def exists(self, ref: int) -> bool:
        return ref in self.objects

    def kind(self, ref: int) -> ObjectType:
        return self.objects.get(ref, ObjectType.UNKNOWN)

    def __len__(self) -> int:
        return len(self.objects)
