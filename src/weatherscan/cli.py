# connects the configured data directory to the service and prints the reports.

from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .config import ConfigError, Settings
from .models import HUMIDITY, TEMPERATURE, TEMPERATURE_SENTINEL
from .service import (
    average_temperature_in_file,
    average_temperature_with_humidity_in_file,
    coldest_across_files,
    coldest_in_file,
    lowest_humidity_in_file,
)
from .source import CSVRowSource, WeatherDataError, select_files


def report_coldest_hour(files: List[Path], source: CSVRowSource) -> None:
    if not files:
        print("No files selected.")
        return
    first = files[0]
    coldest = coldest_in_file(first, source).reading
    if coldest is None:
        print(f"No valid temperature readings in file {first.name}")
        return
    print(f"Coldest temperature in file {first.name} was {coldest.raw(TEMPERATURE)} F")
    print(f"Coldest temperature occurred at {coldest.observed_at}")


def report_coldest_file(files: List[Path], source: CSVRowSource) -> None:
    best = coldest_across_files(files, source)
    if best is None:
        print("Unable to find file with coldest temperature (no files selected or no valid data).")
        return
    print(f"Coldest day was in file {best.path}")
    print(f"Coldest temperature on that day was {best.reading.raw(TEMPERATURE)} F")
    print("All the Temperatures on the coldest day were:")
    # a fresh row sequence, the one used for the scan is already consumed
    count = 0
    for count, row in enumerate(source.rows(best.path), start=1):
        if row.get(TEMPERATURE) != TEMPERATURE_SENTINEL:
            print(f"{row.get('DateUTC', 'N/A')}: {row.get(TEMPERATURE)}")
    print(f"Total records processed: {count}")


def report_lowest_humidity(files: List[Path], source: CSVRowSource) -> None:
    if not files:
        print("No files selected.")
        return
    first = files[0]
    lowest = lowest_humidity_in_file(first, source).reading
    if lowest is None:
        print(f"No valid humidity readings in file {first.name}")
        return
    print(f"Lowest Humidity in file {first.name} was {lowest.raw(HUMIDITY)} at {lowest.observed_at}")


def report_averages(files: List[Path], source: CSVRowSource, threshold: float) -> None:
    if not files:
        print("No files selected.")
        return
    first = files[0]
    avg = average_temperature_in_file(first, source).value
    if avg is None:
        print(f"No valid temperature readings in file {first.name}")
    else:
        print(f"Average temperature in file {first.name} is {avg:.2f} F")

    humid_avg = average_temperature_with_humidity_in_file(first, threshold, source).value
    if humid_avg is None:
        print(f"No temperatures with humidity at least {threshold:g}")
    else:
        print(f"Average temperature when humidity is at least {threshold:g} is {humid_avg:.2f} F")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="weatherscan", description="Scan CSV weather observations.")
    parser.add_argument("directory", nargs="?", help="directory of CSV files (default: WEATHER_DATA_DIR)")
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        print(f"Configuration error: {exc}")
        return 1
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    data_dir = Path(args.directory) if args.directory else settings.data_dir
    source = CSVRowSource()
    try:
        files = select_files(data_dir, settings.file_pattern)
    except WeatherDataError as exc:
        print(f"Error: {exc}")
        return 1

    sections = [
        ("Coldest Hour in File (First Selected File)", lambda: report_coldest_hour(files, source)),
        ("File with Coldest Temperature (Across Multiple Files)", lambda: report_coldest_file(files, source)),
        ("Lowest Humidity in File (First Selected File)", lambda: report_lowest_humidity(files, source)),
        ("Average Temperature (First Selected File)",
         lambda: report_averages(files, source, settings.humidity_threshold)),
    ]
    failed = False
    for i, (title, report) in enumerate(sections):
        if i:
            print()
        print(f"=== {title} ===")
        # an unreadable file only ends its own section, the others still run
        try:
            report()
        except WeatherDataError as exc:
            print(f"Error: {exc}")
            failed = True
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
