"""Fixed-width tabular report engine."""

from .column_set import (
    FIELD_SEPARATOR,
    LabelRule,
    ReportColumnSet,
    ReportStage,
    derive_label,
)
from .columns import GUIDE_DEFAULT, ReportColumn
from .selectors import AttributeSelector, CallableSelector, FieldSelector, make_selector

__all__ = [
    "FIELD_SEPARATOR",
    "GUIDE_DEFAULT",
    "AttributeSelector",
    "CallableSelector",
    "FieldSelector",
    "LabelRule",
    "ReportColumn",
    "ReportColumnSet",
    "ReportStage",
    "derive_label",
    "make_selector",
]
