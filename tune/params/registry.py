"""
Parameter Registry.

Central storage for tunable parameter definitions. This module provides the
ParamRegistry class which serves as the single source of truth for every
parameter the server knows about.

Usage
-----
The global REGISTRY instance is populated by importing the definitions module.
Once populated, parameters can be queried by name or by group:

    from tune.params import REGISTRY

    # Get a specific parameter (case-insensitive, '%' prefix ignored)
    param = REGISTRY.lookup('Dump_Interval')

    # Get parameters by display group
    db_params = REGISTRY.get_params_by_group('Database')

The '%' Flag
------------
A leading '%' on a parameter name is not part of the name. In a parm file it
marks a line whose value is still the compiled-in default; on a set it asks
for the parameter to be reset. strip_default_flag() is the one place that
recognises it.

Thread Safety
-------------
The registry is populated once at import time and frozen (made immutable).
After freezing, it is safe to read from multiple threads. Attempts to
register new parameters after freezing will raise RegistryFrozenError.
"""

from typing import Dict, List, Iterator, Mapping, Optional, Set, Tuple
from types import MappingProxyType
from collections import defaultdict

from .schema import ParamDef


TP_FLAG_DEFAULT = "%"


class RegistryFrozenError(RuntimeError):
    """Raised when attempting to modify a frozen registry."""


class ParamTableError(ValueError):
    """Raised when a parameter definition is inconsistent with the table."""


def strip_default_flag(text: str) -> Tuple[str, bool]:
    """
    Remove one leading default flag from a name or value.

    Args:
        text: Parameter name or value as typed or read from a parm file.

    Returns:
        Tuple of (text without the flag, whether the flag was present).
    """
    if text and text[0] == TP_FLAG_DEFAULT:
        return text[1:], True
    return text, False


class ParamRegistry:
    """
    Central registry for tunable parameters.

    This class stores parameter definitions in definition order and provides
    case-insensitive lookup. Definition order is the order used when saving
    and exporting.

    Attributes:
        _params: Dictionary mapping case-folded names to ParamDef instances.
        _by_group: Dictionary mapping group names to lists of parameter names.
        _frozen: Whether the registry has been frozen (immutable).
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._params: Dict[str, ParamDef] = {}
        self._by_group: Dict[str, List[str]] = defaultdict(list)
        self._frozen: bool = False
        self._params_proxy: Mapping[str, ParamDef] = None

    def freeze(self) -> None:
        """
        Freeze the registry, preventing further modifications.

        This method is idempotent (safe to call multiple times).
        """
        if not self._frozen:
            self._frozen = True
            self._params_proxy = MappingProxyType(self._params)

    @property
    def is_frozen(self) -> bool:
        """Return True if the registry has been frozen."""
        return self._frozen

    def register(self, param: ParamDef) -> None:
        """
        Register a parameter definition.

        Args:
            param: The parameter definition to register.

        Raises:
            RegistryFrozenError: If the registry has been frozen.
            ParamTableError: If the name is already taken (case-insensitively),
                starts with the default flag, or the write level is below the
                read level.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{param.name}': registry is frozen. "
                "All parameters must be registered during module initialization."
            )

        if not param.name or param.name.startswith(TP_FLAG_DEFAULT):
            raise ParamTableError(
                f"Invalid parameter name '{param.name}': names must not be empty "
                f"or start with '{TP_FLAG_DEFAULT}'"
            )

        if param.key in self._params:
            raise ParamTableError(f"Duplicate parameter '{param.name}'")

        if param.write_level < param.read_level:
            raise ParamTableError(
                f"'{param.name}' has write level {param.write_level} below "
                f"read level {param.read_level}"
            )

        self._params[param.key] = param
        self._by_group[param.group].append(param.name)

    @property
    def all_params(self) -> Mapping[str, ParamDef]:
        """
        Get all registered parameters keyed by case-folded name.

        If the registry is frozen, returns a read-only view.
        """
        if self._frozen and self._params_proxy is not None:
            return self._params_proxy
        return self._params

    def lookup(self, name: Optional[str]) -> Optional[ParamDef]:
        """
        Find a parameter by name.

        Matching is case-insensitive and ignores one leading default flag.

        Args:
            name: Parameter name, possibly prefixed with '%'.

        Returns:
            The ParamDef, or None if no parameter has that name.
        """
        if name is None:
            return None
        name, _ = strip_default_flag(name)
        return self._params.get(name.lower())

    def count(self) -> int:
        """Number of defined parameters across all types."""
        return len(self._params)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[ParamDef]:
        return iter(list(self._params.values()))

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def names(self) -> List[str]:
        """Parameter names as defined, in definition order."""
        return [param.name for param in self._params.values()]

    def get_params_by_group(self, group: str) -> Dict[str, ParamDef]:
        """
        Get parameters with a specific display group.

        Args:
            group: The group name (e.g., "Database", "SSL").

        Returns:
            Dictionary mapping parameter names to their definitions, in
            definition order.
        """
        return {name: self._params[name.lower()] for name in self._by_group.get(group, [])}

    def get_all_groups(self) -> Set[str]:
        """
        Get all display groups used in the registry.

        Returns:
            Set of all group names.
        """
        return set(self._by_group.keys())


# Global registry instance - populated when definitions module is imported
REGISTRY = ParamRegistry()
