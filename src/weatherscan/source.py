# OOP boundary for external i/o
# all file access lives here, so the scanning code is pure and testable
# every call to rows() opens the file again, a row sequence can only be consumed once

from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterator, List, Union

from .models import Row

PathLike = Union[str, Path]


class WeatherDataError(RuntimeError):
    # single error type used to propagate clear messages from this layer
    pass


class CSVRowSource:
    # this class encapsulates how observation files are opened and tokenized

    DEFAULT_ENCODING = "utf-8"

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self.encoding = encoding

    def rows(self, path: PathLike) -> Iterator[Row]:
        path = Path(path)
        try:
            with path.open("r", encoding=self.encoding, newline="") as fh:
                # DictReader takes the header line as the column names
                yield from csv.DictReader(fh)
        except OSError as exc:
            # wrap with the path so the caller can report which file failed
            raise WeatherDataError(f"Cannot read {path}: {exc}") from exc
        except (csv.Error, UnicodeDecodeError) as exc:
            raise WeatherDataError(f"Malformed CSV in {path}: {exc}") from exc


def select_files(directory: PathLike, pattern: str = "*.csv") -> List[Path]:
    # stands in for the interactive file picker, sorted so runs are deterministic
    directory = Path(directory).expanduser()
    if not directory.is_dir():
        raise WeatherDataError(f"Not a directory: {directory}")
    return sorted(p for p in directory.glob(pattern) if p.is_file())
