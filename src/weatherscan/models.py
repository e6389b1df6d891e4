# models and tiny stats helper to keep data shapes explicit and reusable across the app

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Tuple

# one csv record, column name -> raw text
Row = Mapping[str, str]

TEMPERATURE = "TemperatureF"
HUMIDITY = "Humidity"

# reserved literals that mark a missing reading, compared as text
TEMPERATURE_SENTINEL = "-9999"
HUMIDITY_SENTINEL = "N/A"

# DateUTC first, the local time columns only when it is absent
TIMESTAMP_FIELDS = ("DateUTC", "TimeEST", "TimeEDT")


class Outcome(Enum):
    NO_INPUT = "no input"
    NO_VALID_ROWS = "no valid rows"
    FOUND = "found"


def _outcome(rows_seen: int, found: bool) -> Outcome:
    if rows_seen == 0:
        return Outcome.NO_INPUT
    return Outcome.FOUND if found else Outcome.NO_VALID_ROWS


@dataclass(frozen=True)
class Reading:
    # the winning row of an extremum scan and the value that won the comparison
    row: Row
    value: float
    record_number: int

    @property
    def observed_at(self) -> str:
        for name in TIMESTAMP_FIELDS:
            if self.row.get(name) is not None:
                return self.row[name]
        return "N/A"

    def raw(self, name: str) -> str:
        return self.row.get(name) or ""


@dataclass(frozen=True)
class FileReading:
    path: Path
    reading: Reading


@dataclass(frozen=True)
class ScanResult:
    # output of a single-sequence extremum scan
    reading: Optional[Reading]
    warnings: Tuple[str, ...] = field(default_factory=tuple)
    rows_seen: int = 0

    @property
    def outcome(self) -> Outcome:
        return _outcome(self.rows_seen, self.reading is not None)


@dataclass(frozen=True)
class AverageResult:
    # value is None when nothing qualified (no data)
    value: Optional[float]
    count: int = 0
    warnings: Tuple[str, ...] = field(default_factory=tuple)
    rows_seen: int = 0

    @property
    def outcome(self) -> Outcome:
        return _outcome(self.rows_seen, self.value is not None)


def mean(total: float, count: int) -> Optional[float]:
    # simple average that returns None on empty input to avoid zero division
    return total / count if count > 0 else None
