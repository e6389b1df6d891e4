# business rules for scanning observation rows.
# pure functions (scan a row sequence -> result value) plus file-level helpers
# that pull rows from a CSVRowSource and combine results across files

from __future__ import annotations
import logging
import math
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .models import (
    HUMIDITY,
    HUMIDITY_SENTINEL,
    TEMPERATURE,
    TEMPERATURE_SENTINEL,
    AverageResult,
    FileReading,
    Reading,
    Row,
    ScanResult,
    mean,
)
from .source import CSVRowSource, PathLike, WeatherDataError

logger = logging.getLogger("weatherscan.service")

_LABELS = {TEMPERATURE: "temperature", HUMIDITY: "humidity"}


# validity predicates, applied before anything is accumulated

def is_sentinel(row: Row, name: str, sentinel: str) -> bool:
    return row.get(name) == sentinel


def parse_field(row: Row, name: str, record_number: int, warnings: List[str]) -> Optional[float]:
    # a missing column or a nan/inf reading counts as unparsable
    # the warning goes both to the caller's list and to the module logger
    raw = row.get(name)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = None
    if value is None or not math.isfinite(value):
        message = f"Could not parse {_LABELS.get(name, name)} value: {raw!r} in record {record_number}"
        logger.warning(message)
        warnings.append(message)
        return None
    return value


# single sequence scans

def _lowest(rows: Iterable[Row], name: str, sentinel: str) -> ScanResult:
    best: Optional[Reading] = None
    warnings: List[str] = []
    seen = 0
    for seen, row in enumerate(rows, start=1):
        if is_sentinel(row, name, sentinel):
            continue
        value = parse_field(row, name, seen, warnings)
        if value is None:
            continue
        # strict comparison keeps the first of several equal readings
        if best is None or value < best.value:
            best = Reading(row=row, value=value, record_number=seen)
    return ScanResult(reading=best, warnings=tuple(warnings), rows_seen=seen)


def coldest_in_rows(rows: Iterable[Row]) -> ScanResult:
    return _lowest(rows, TEMPERATURE, TEMPERATURE_SENTINEL)


def lowest_humidity_in_rows(rows: Iterable[Row]) -> ScanResult:
    return _lowest(rows, HUMIDITY, HUMIDITY_SENTINEL)


def average_temperature(rows: Iterable[Row]) -> AverageResult:
    total, count = 0.0, 0
    warnings: List[str] = []
    seen = 0
    for seen, row in enumerate(rows, start=1):
        if is_sentinel(row, TEMPERATURE, TEMPERATURE_SENTINEL):
            continue
        temp = parse_field(row, TEMPERATURE, seen, warnings)
        if temp is None:
            continue
        total += temp
        count += 1
    return AverageResult(value=mean(total, count), count=count, warnings=tuple(warnings), rows_seen=seen)


def average_temperature_where_humidity_at_least(rows: Iterable[Row], threshold: float) -> AverageResult:
    total, count = 0.0, 0
    warnings: List[str] = []
    seen = 0
    for seen, row in enumerate(rows, start=1):
        if is_sentinel(row, HUMIDITY, HUMIDITY_SENTINEL) or is_sentinel(row, TEMPERATURE, TEMPERATURE_SENTINEL):
            continue
        humidity = parse_field(row, HUMIDITY, seen, warnings)
        # temperature is only looked at for rows that pass the (inclusive) threshold
        if humidity is None or not humidity >= threshold:
            continue
        temp = parse_field(row, TEMPERATURE, seen, warnings)
        if temp is None:
            continue
        total += temp
        count += 1
    return AverageResult(value=mean(total, count), count=count, warnings=tuple(warnings), rows_seen=seen)


# single file path: open -> scan

def _source(source: Optional[CSVRowSource]) -> CSVRowSource:
    return source if source is not None else CSVRowSource()


def coldest_in_file(path: PathLike, source: Optional[CSVRowSource] = None) -> ScanResult:
    return coldest_in_rows(_source(source).rows(path))


def lowest_humidity_in_file(path: PathLike, source: Optional[CSVRowSource] = None) -> ScanResult:
    return lowest_humidity_in_rows(_source(source).rows(path))


def average_temperature_in_file(path: PathLike, source: Optional[CSVRowSource] = None) -> AverageResult:
    return average_temperature(_source(source).rows(path))


def average_temperature_with_humidity_in_file(
    path: PathLike, threshold: float, source: Optional[CSVRowSource] = None
) -> AverageResult:
    return average_temperature_where_humidity_at_least(_source(source).rows(path), threshold)


# across files: reduce per-file extrema, keeping the first strictly lower one

def _lowest_across_files(
    files: Optional[Sequence[PathLike]],
    scan: Callable[[Iterable[Row]], ScanResult],
    label: str,
    source: Optional[CSVRowSource],
) -> Optional[FileReading]:
    if not files:
        return None
    source = _source(source)
    best: Optional[FileReading] = None
    for f in files:
        path = Path(f)
        try:
            result = scan(source.rows(path))
        except WeatherDataError as exc:
            # one unreadable file must not stop the others
            logger.error("Skipping %s: %s", path.name, exc)
            continue
        if result.reading is None:
            logger.info("No valid %s data found in file: %s", label, path.name)
            continue
        if best is None or result.reading.value < best.reading.value:
            best = FileReading(path=path, reading=result.reading)
    return best


def coldest_across_files(
    files: Optional[Sequence[PathLike]], source: Optional[CSVRowSource] = None
) -> Optional[FileReading]:
    return _lowest_across_files(files, coldest_in_rows, "temperature", source)


def coldest_record_across_files(
    files: Optional[Sequence[PathLike]], source: Optional[CSVRowSource] = None
) -> Optional[Reading]:
    best = coldest_across_files(files, source)
    return best.reading if best is not None else None


def lowest_humidity_across_files(
    files: Optional[Sequence[PathLike]], source: Optional[CSVRowSource] = None
) -> Optional[Reading]:
    best = _lowest_across_files(files, lowest_humidity_in_rows, "humidity", source)
    return best.reading if best is not None else None
