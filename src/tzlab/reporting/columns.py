"""A single column of a fixed-width report."""

from __future__ import annotations

import functools
from typing import Any, Optional

from tzlab.errors import InvalidArgument, TypeMismatch

from .selectors import FieldSelector, SelectorLike, make_selector

GUIDE_DEFAULT = "-"


def resolve_guide_char(guide_char: Optional[str]) -> str:
    """Return ``guide_char``, or the default guide when it is None or empty."""

    if not guide_char:
        return GUIDE_DEFAULT
    if len(guide_char) != 1:
        raise InvalidArgument(f"The guide must be a single character, got {guide_char!r}.")
    return guide_char


@functools.total_ordering
class ReportColumn:
    """One column of a fixed-width report.

    Columns order and compare by ``position`` only. The width starts at the
    label length and grows to fit the longest value observed through
    :meth:`update_width`; it never shrinks.
    """

    def __init__(self, position: int, field: SelectorLike, label: str) -> None:
        self.position = position
        self.selector = field
        self.label = label
        self._max_value_width = 0

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"Column position must be an integer, got {value!r}.")
        if value < 0:
            raise InvalidArgument(
                f"Column position must be a valid list index, got {value}."
            )
        self._position = value

    @property
    def selector(self) -> FieldSelector:
        return self._selector

    @selector.setter
    def selector(self, value: SelectorLike) -> None:
        if value is None or value == "":
            raise InvalidArgument("The field selector cannot be None or the empty string.")
        self._selector = make_selector(value)

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value: str) -> None:
        if not value:
            raise InvalidArgument("The label cannot be None or the empty string.")
        self._label = value

    @property
    def width(self) -> int:
        return max(len(self._label), self._max_value_width)

    def update_width(self, candidate_length: int) -> None:
        # Values no wider than the label are covered by ``width`` already.
        if candidate_length > len(self._label) and candidate_length > self._max_value_width:
            self._max_value_width = candidate_length

    def update_width_from_record(self, record: Any) -> None:
        if record is None:
            return
        self.update_width(len(self._selector.get_display_string(record)))

    def render_label(self) -> str:
        return self._label.ljust(self.width)

    def render_guide(self, guide_char: Optional[str] = None) -> str:
        return resolve_guide_char(guide_char) * self.width

    def render_value(self, record: Any) -> str:
        return self._selector.get_display_string(record).ljust(self.width)

    def _check_comparand(self, other: object) -> "ReportColumn":
        if not isinstance(other, ReportColumn):
            raise TypeMismatch(type(self), type(other))
        return other

    def __eq__(self, other: object) -> bool:
        return self._position == self._check_comparand(other)._position

    def __lt__(self, other: object) -> bool:
        return self._position < self._check_comparand(other)._position

    def __hash__(self) -> int:
        return hash(self._position)

    def __str__(self) -> str:
        return self._label

    def __repr__(self) -> str:
        return (
            f"ReportColumn(position={self._position}, field={self._selector.name!r}, "
            f"label={self._label!r}, width={self.width})"
        )
