"""Parsed schedule model and per-field bounds."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, NamedTuple

from .token import FieldName


class FieldBounds(NamedTuple):
    min: int
    max: int


FIELD_BOUNDS: Mapping[FieldName, FieldBounds] = MappingProxyType({
    FieldName.SECOND: FieldBounds(0, 59),
    FieldName.MINUTE: FieldBounds(0, 59),
    FieldName.HOUR: FieldBounds(0, 23),
    FieldName.DAY: FieldBounds(1, 31),
    FieldName.MONTH: FieldBounds(1, 12),
    FieldName.WEEKDAY: FieldBounds(0, 6),  # 0 = Sunday
})

FieldValueSet = FrozenSet[int]


@dataclass(frozen=True)
class ParsedSchedule:
    """Permitted values for every field of a cron expression.

    Built once by the parser and shared by matching and next-run search.
    """
    source: str
    has_seconds: bool
    fields: Mapping[FieldName, FieldValueSet] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # Freeze the mapping so callers cannot mutate a shared schedule
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def values(self, name: FieldName) -> FieldValueSet:
        return self.fields[name]

    def allows(self, name: FieldName, value: int) -> bool:
        return value in self.fields[name]
