"""Fleet refresh results and comparison structures."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

from skiwatch.config.schema import LocationConfig
from skiwatch.models.common import CycleId
from skiwatch.models.conditions import LocationSummary

MAX_COMPARED = 3


@dataclass(frozen=True)
class LocationFailure:
    location: LocationConfig
    cause: str

    @property
    def name(self) -> str:
        return self.location.name


FleetEntry: TypeAlias = LocationSummary | LocationFailure


@dataclass(frozen=True)
class FleetResult:
    """Outcome of one refresh cycle, keyed by location name in configured order.

    Entries are copied into a read-only mapping, so a published result
    cannot change under its readers.
    """

    cycle_id: CycleId
    entries: Mapping[str, FleetEntry]
    completed_at: str = ""

    def __post_init__(self):
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries.values())

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def get(self, name: str) -> FleetEntry | None:
        return self.entries.get(name)

    @property
    def summaries(self) -> list[LocationSummary]:
        return [e for e in self.entries.values() if isinstance(e, LocationSummary)]

    @property
    def failures(self) -> list[LocationFailure]:
        return [e for e in self.entries.values() if isinstance(e, LocationFailure)]

    @property
    def failure_count(self) -> int:
        return len(self.failures)


@dataclass(frozen=True)
class ComparisonSet:
    """Up to MAX_COMPARED location names, in the order they were selected."""

    names: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self):
        return iter(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    @property
    def is_full(self) -> bool:
        return len(self.names) >= MAX_COMPARED


@dataclass(frozen=True)
class ComparisonRow:
    key: str
    label: str
    cells: tuple[str, ...]


@dataclass(frozen=True)
class ComparisonTable:
    columns: tuple[str, ...]
    rows: tuple[ComparisonRow, ...] = field(default_factory=tuple)

    def row(self, key: str) -> ComparisonRow:
        for r in self.rows:
            if r.key == key:
                return r
        raise KeyError(f"No comparison row: {key}")

    def column(self, name: str) -> list[str]:
        idx = self.columns.index(name)
        return [r.cells[idx] for r in self.rows]
