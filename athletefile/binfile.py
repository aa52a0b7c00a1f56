"""Random access, editing, sorting and searching on binary athlete files."""

from __future__ import annotations

import csv
import dataclasses
import os
import struct
import tempfile
from enum import Enum
from pathlib import Path
from typing import Iterator, Union

from athletefile.records import (
    CSV_HEADER,
    RECORD_SIZE,
    Athlete,
    PathLike,
    is_bin_name,
    iter_records,
    write_records,
)

DEFAULT_RECORDS_PER_BLOCK = 25536
DEFAULT_SORT_CHECK_LIMIT = 1000


class Field(Enum):
    """The editable fields of a record, in menu order."""

    MEASURE = "measure"
    QUANTILE = "quantile"
    AREA = "area"
    SEX = "sex"
    AGE = "age"
    GEOGRAPHY = "geography"
    ETHNIC = "ethnic"
    VALUE = "value"


def _as_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", float(value)))[0]


class RecordFile:
    """A binary file of fixed-size athlete records addressed by position."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"RecordFile({str(self.path)!r})"

    def count(self) -> int:
        """Number of whole records in the file."""
        return self.path.stat().st_size // RECORD_SIZE

    def _check_position(self, position: int, upper: int) -> None:
        if not 0 <= position < upper:
            raise IndexError(f"position {position} is out of range")

    def _read_at(self, stream, position: int) -> Athlete:
        stream.seek(position * RECORD_SIZE)
        return Athlete.from_bytes(stream.read(RECORD_SIZE))

    def _write_at(self, stream, position: int, athlete: Athlete) -> None:
        stream.seek(position * RECORD_SIZE)
        stream.write(athlete.to_bytes())

    def read(self, position: int) -> Athlete:
        """Return the record at a position."""
        self._check_position(position, self.count())
        with open(self.path, "rb") as stream:
            return self._read_at(stream, position)

    def read_range(self, start: int, end: int) -> Iterator[Athlete]:
        """Yield the records from start to end, both included."""
        total = self.count()
        if start < 0 or end >= total or start > end:
            raise IndexError(f"invalid range {start}..{end}")
        return self._iter_range(start, end)

    def _iter_range(self, start: int, end: int) -> Iterator[Athlete]:
        with open(self.path, "rb") as stream:
            stream.seek(start * RECORD_SIZE)
            for _ in range(start, end + 1):
                yield Athlete.from_bytes(stream.read(RECORD_SIZE))

    def swap(self, pos1: int, pos2: int) -> None:
        """Exchange the records at two positions."""
        total = self.count()
        self._check_position(pos1, total)
        self._check_position(pos2, total)
        with open(self.path, "r+b") as stream:
            first = self._read_at(stream, pos1)
            second = self._read_at(stream, pos2)
            self._write_at(stream, pos2, first)
            self._write_at(stream, pos1, second)

    def update(
        self, position: int, field: Field, value: Union[str, float]
    ) -> Athlete:
        """Change one field of the record at a position and return the new record."""
        field = Field(field)
        self._check_position(position, self.count())
        new_value: Union[str, float]
        if field is Field.VALUE:
            new_value = float(value)
        elif isinstance(value, str):
            new_value = value
        else:
            raise TypeError(f"field {field.value!r} takes text")
        with open(self.path, "r+b") as stream:
            current = self._read_at(stream, position)
            updated = dataclasses.replace(current, **{field.value: new_value})
            self._write_at(stream, position, updated)
        return self.read(position)

    def insert(self, position: int, athlete: Athlete) -> None:
        """Insert a record before a position; the record count is a valid position."""
        self._check_position(position, self.count() + 1)
        payload = athlete.to_bytes()
        handle, temp_name = tempfile.mkstemp(
            suffix=".bin", dir=self.path.parent
        )
        try:
            with os.fdopen(handle, "wb") as out:
                with open(self.path, "rb") as src:
                    out.write(src.read(position * RECORD_SIZE))
                    out.write(payload)
                    while chunk := src.read(RECORD_SIZE * 1024):
                        out.write(chunk)
            os.replace(temp_name, self.path)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise

    def is_sorted(self, limit: int = DEFAULT_SORT_CHECK_LIMIT) -> bool:
        """True if values do not decrease over the first limit + 1 records."""
        previous = None
        for index, athlete in enumerate(iter_records(self.path)):
            if index > limit:
                break
            if previous is not None and previous > athlete.value:
                return False
            previous = athlete.value
        return True

    def binary_search(self, value: float) -> int | None:
        """Return the position of a record with the given value, or None."""
        if not self.is_sorted():
            raise ValueError("the file must be sorted before searching")
        target = _as_float32(value)
        low, high = 0, self.count() - 1
        with open(self.path, "rb") as stream:
            while low <= high:
                middle = (low + high) // 2
                current = self._read_at(stream, middle).value
                if current == target:
                    return middle
                if current < target:
                    low = middle + 1
                else:
                    high = middle - 1
        return None

    def split(
        self,
        records_per_block: int = DEFAULT_RECORDS_PER_BLOCK,
        prefix: str = "temp",
    ) -> list[Path]:
        """Write the records in blocks to files named <prefix><n>.bin."""
        if records_per_block <= 0:
            raise ValueError("records_per_block must be positive")
        paths: list[Path] = []
        block_bytes = records_per_block * RECORD_SIZE
        whole = self.count() * RECORD_SIZE
        with open(self.path, "rb") as stream:
            remaining = whole
            while remaining > 0:
                chunk = stream.read(min(block_bytes, remaining))
                remaining -= len(chunk)
                target = Path(f"{prefix}{len(paths)}.bin")
                target.write_bytes(chunk)
                paths.append(target)
        return paths

    def split_and_sort(
        self,
        records_per_block: int = DEFAULT_RECORDS_PER_BLOCK,
        prefix: str = "temp",
    ) -> list[Path]:
        """Split the file into blocks and sort each block by value."""
        paths = self.split(records_per_block, prefix)
        for path in paths:
            sort_file(path)
        return paths


def sort_file(path: PathLike) -> int:
    """Sort a binary file in place by value, keeping ties in order; return the count."""
    records = sorted(iter_records(path), key=lambda athlete: athlete.value)
    return write_records(path, records)


def import_csv(csv_path: PathLike, bin_path: PathLike) -> int:
    """Read a CSV file with a header line into a binary file; return the count."""
    if not is_bin_name(str(bin_path)):
        raise ValueError(f"binary file name must end in '.bin': {bin_path}")
    with open(csv_path, newline="", encoding="utf-8") as source:
        reader = csv.reader(source)
        next(reader, None)
        records = [Athlete.from_csv_fields(row) for row in reader if row]
    return write_records(bin_path, records)


def export_csv(bin_path: PathLike, csv_path: PathLike) -> int:
    """Write every record of a binary file to a CSV file; return the count."""
    count = 0
    with open(csv_path, "w", newline="", encoding="utf-8") as target:
        writer = csv.writer(target, lineterminator="\n")
        writer.writerow(CSV_HEADER.split(","))
        for athlete in iter_records(bin_path):
            writer.writerow(athlete.to_csv_row())
            count += 1
    return count