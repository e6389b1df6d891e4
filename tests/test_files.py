# file level scans and aggregation across files, using the csv fixtures under tests/data

import logging
from pathlib import Path
import pytest
from weatherscan.source import CSVRowSource, WeatherDataError, select_files
from weatherscan.service import (
    average_temperature_in_file,
    average_temperature_with_humidity_in_file,
    coldest_across_files,
    coldest_in_file,
    coldest_record_across_files,
    lowest_humidity_across_files,
    lowest_humidity_in_file,
)

DATA = Path(__file__).parent / "data"
JAN_08 = DATA / "weather-2014-01-08.csv"
JAN_20 = DATA / "weather-2014-01-20.csv"

HEADER = "TimeEST,TemperatureF,Humidity,DateUTC\n"


def write_csv(path: Path, *lines: str) -> Path:
    path.write_text(HEADER + "".join(line + "\n" for line in lines))
    return path


def test_select_files_sorted():
    assert select_files(DATA) == [JAN_08, JAN_20]


def test_select_files_missing_directory(tmp_path):
    with pytest.raises(WeatherDataError):
        select_files(tmp_path / "nope")


def test_rows_are_fresh_on_each_call():
    source = CSVRowSource()
    first = list(source.rows(JAN_20))
    second = list(source.rows(JAN_20))
    assert len(first) == len(second) == 3
    assert first[1]["TemperatureF"] == "10.0"


def test_unreadable_file_raises(tmp_path):
    with pytest.raises(WeatherDataError, match="Cannot read"):
        coldest_in_file(tmp_path / "missing.csv")


def test_coldest_in_file():
    result = coldest_in_file(JAN_08)
    # two rows tie at -5.0, the earlier one wins
    assert result.reading.value == -5.0
    assert result.reading.observed_at == "2014-01-08 07:51:00"
    # only the "abc" row is reported, the -9999 row is skipped silently
    assert len(result.warnings) == 1


def test_lowest_humidity_in_file():
    result = lowest_humidity_in_file(JAN_08)
    assert result.reading.value == 58.0
    assert result.reading.raw("TimeEST") == "2:51 AM"


def test_averages_in_file():
    assert average_temperature_in_file(JAN_20).value == pytest.approx((15.1 + 10.0 + 12.0) / 3)
    assert average_temperature_with_humidity_in_file(JAN_08, 80).value == 1.0


def test_coldest_across_files():
    best = coldest_across_files([JAN_20, JAN_08])
    assert best.path == JAN_08
    assert best.reading.value == -5.0


def test_coldest_record_across_files():
    reading = coldest_record_across_files([JAN_08, JAN_20])
    assert reading.row["DateUTC"] == "2014-01-08 07:51:00"


def test_lowest_humidity_across_files():
    reading = lowest_humidity_across_files([JAN_08, JAN_20])
    assert reading.value == 40.0
    assert reading.row["DateUTC"] == "2014-01-20 06:51:00"


@pytest.mark.parametrize("files", [[], None])
def test_empty_file_list(files):
    assert coldest_across_files(files) is None
    assert coldest_record_across_files(files) is None
    assert lowest_humidity_across_files(files) is None


def test_across_files_first_file_wins_ties(tmp_path):
    a = write_csv(tmp_path / "a.csv", "1:00 AM,-5,50,2014-01-01 06:00:00")
    b = write_csv(tmp_path / "b.csv", "1:00 AM,-5,50,2014-01-02 06:00:00")
    assert coldest_across_files([a, b]).path == a
    assert coldest_across_files([b, a]).path == b


def test_across_files_skips_files_without_valid_rows(tmp_path, caplog):
    empty = write_csv(tmp_path / "empty.csv", "1:00 AM,-9999,N/A,2014-01-01 06:00:00")
    with caplog.at_level(logging.INFO, logger="weatherscan.service"):
        best = coldest_across_files([empty, JAN_20])
    assert best.path == JAN_20
    assert "No valid temperature data found in file: empty.csv" in caplog.text


def test_across_files_continues_after_unreadable_file(tmp_path, caplog):
    missing = tmp_path / "missing.csv"
    with caplog.at_level(logging.ERROR, logger="weatherscan.service"):
        best = coldest_across_files([missing, JAN_20])
    assert best.path == JAN_20
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "missing.csv" in errors[0].getMessage()


def test_across_files_all_invalid(tmp_path):
    empty = write_csv(tmp_path / "empty.csv", "1:00 AM,-9999,N/A,2014-01-01 06:00:00")
    assert coldest_across_files([empty]) is None
    assert lowest_humidity_across_files([empty]) is None
