"""Field selectors: how a report column reads its value from a record."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from tzlab.errors import InvalidArgument


def to_display_string(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class FieldSelector(ABC):
    """Reads one field of a record and renders it as a display string."""

    name: str = ""

    @abstractmethod
    def get_value(self, record: Any) -> Any:
        """Return the raw field value of ``record``."""

    def get_display_string(self, record: Any) -> str:
        return to_display_string(self.get_value(record))


class AttributeSelector(FieldSelector):
    """Selects a named field from a mapping or an object.

    Whether the name is a key or an attribute is decided on the first record
    seen and reused for every later record of the report.
    """

    def __init__(self, name: str) -> None:
        if not name:
            raise InvalidArgument("The field selector name cannot be None or the empty string.")
        self.name = name
        self._getter: Optional[Callable[[Any], Any]] = None

    def _resolve(self, record: Any) -> Callable[[Any], Any]:
        if isinstance(record, Mapping):
            return lambda rec: rec[self.name]
        if not hasattr(record, self.name):
            raise AttributeError(
                f"{type(record).__qualname__} has no field named '{self.name}'"
            )
        return lambda rec: getattr(rec, self.name)

    def get_value(self, record: Any) -> Any:
        if self._getter is None:
            self._getter = self._resolve(record)
        return self._getter(record)

    def __repr__(self) -> str:
        return f"AttributeSelector({self.name!r})"


class CallableSelector(FieldSelector):
    """Selects a value by calling an accessor function on the record."""

    def __init__(self, accessor: Callable[[Any], Any], name: Optional[str] = None) -> None:
        if not callable(accessor):
            raise InvalidArgument("The field accessor must be callable.")
        self.accessor = accessor
        self.name = name or getattr(accessor, "__name__", "") or repr(accessor)

    def get_value(self, record: Any) -> Any:
        return self.accessor(record)

    def __repr__(self) -> str:
        return f"CallableSelector({self.name!r})"


SelectorLike = Union[str, Callable[[Any], Any], FieldSelector]


def make_selector(selector: SelectorLike) -> FieldSelector:
    if isinstance(selector, FieldSelector):
        return selector
    if isinstance(selector, str):
        return AttributeSelector(selector)
    if selector is None:
        raise InvalidArgument("The field selector cannot be None or the empty string.")
    return CallableSelector(selector)
