"""Read-only key/value configuration over named parameters.

Web containers, application frameworks and similar hosts usually hand out
their start-up settings as a flat set of named string parameters. This module
wraps such a set in a small configuration API that understands multi-valued
properties (``"a, b, c"``) and refuses every modification.

Any object with ``parameter_names()`` and ``get_parameter(name)`` can act as
the backing source; :class:`MappingParameterSource` adapts plain mappings and
:class:`~web_config_combiner.web.AppParameterSource` reads from a FastAPI
application.

Example:
    from web_config_combiner.sources import InitParameterConfiguration, MappingParameterSource

    config = InitParameterConfiguration(
        MappingParameterSource({"hosts": "a.example, b.example", "port": "8080"})
    )
    config.get_property("hosts")   # ['a.example', 'b.example']
    config.get_property("port")    # '8080'
    config.set_property("port", "9090")  # raises UnsupportedOperationError
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Iterator, List, Optional, Protocol, Union

from .converter import split
from .exceptions import UnsupportedOperationError
from .settings import ReaderSettings

PropertyValue = Union[str, List[str]]


class ParameterSource(Protocol):
    """A host-provided enumeration of named string values."""

    def parameter_names(self) -> Iterable[str]: ...

    def get_parameter(self, name: str) -> Optional[str]: ...


class MappingParameterSource:
    """Expose a mapping of parameter names to strings as a parameter source."""

    def __init__(self, parameters: Mapping) -> None:
        self._parameters = parameters

    def parameter_names(self) -> Iterable[str]:
        return iter(self._parameters)

    def get_parameter(self, name: str) -> Optional[str]:
        return self._parameters.get(name)


class InitParameterConfiguration(Mapping):
    """Read-only configuration backed by a :class:`ParameterSource`.

    Values containing the configured list delimiter are returned as a list
    of their elements unless delimiter parsing is disabled in ``settings``.
    Keys are enumerated in whatever order the source provides them.

    Args:
        source: Backing parameter source; it is queried on every access and
            never copied.
        settings: Delimiter handling; defaults to :class:`ReaderSettings`.
    """

    def __init__(
        self, source: ParameterSource, settings: Optional[ReaderSettings] = None
    ) -> None:
        self.source = source
        self.settings = settings or ReaderSettings()

    # ---------------- Reading ---------------- #

    def get_property(self, key: str) -> Optional[PropertyValue]:
        """Return the value of ``key``, a list for multi-valued properties.

        Returns:
            ``None`` if the source has no such parameter.
        """
        value = self.source.get_parameter(key)
        if value is None:
            return None
        value = str(value)
        if self.settings.delimiter_parsing_disabled:
            return value
        parts = split(value, self.settings.list_delimiter, self.settings.trim_values)
        return parts if len(parts) > 1 else value

    def get_keys(self) -> Iterator[str]:
        return iter(self.source.parameter_names())

    def contains_key(self, key: str) -> bool:
        return self.source.get_parameter(key) is not None

    def is_empty(self) -> bool:
        return next(self.get_keys(), None) is None

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return a single string value; the first element for list values."""
        value = self.get_property(key)
        if value is None:
            return default
        if isinstance(value, list):
            return value[0]
        return value

    def get_list(self, key: str) -> List[str]:
        """Return the value of ``key`` as a list (empty if absent)."""
        value = self.get_property(key)
        if value is None:
            return []
        if isinstance(value, list):
            return value
        return [value]

    # ---------------- Mapping protocol ---------------- #

    def __getitem__(self, key: str) -> PropertyValue:
        value = self.get_property(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains_key(key)

    def __iter__(self) -> Iterator[str]:
        return self.get_keys()

    def __len__(self) -> int:
        return sum(1 for _ in self.get_keys())

    # ---------------- Mutation (unsupported) ---------------- #

    def set_property(self, key: str, value: Any) -> None:
        self._read_only()

    def add_property(self, key: str, value: Any) -> None:
        self._read_only()

    def clear_property(self, key: str) -> None:
        self._read_only()

    def clear(self) -> None:
        self._read_only()

    def __setitem__(self, key: str, value: Any) -> None:
        self._read_only()

    def __delitem__(self, key: str) -> None:
        self._read_only()

    def _read_only(self) -> None:
        raise UnsupportedOperationError(
            f"{type(self).__name__} is read-only and cannot be modified"
        )
