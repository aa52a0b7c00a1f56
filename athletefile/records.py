"""Athlete records and their fixed-size binary layout."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence, Union

PathLike = Union[str, Path]

# Text fields with the size of their NUL-terminated slot in a record.
TEXT_FIELDS: tuple[tuple[str, int], ...] = (
    ("measure", 10),
    ("quantile", 80),
    ("area", 50),
    ("sex", 15),
    ("age", 20),
    ("geography", 90),
    ("ethnic", 60),
)

# 325 bytes of text, 3 bytes of padding to align the float, then the value.
_STRUCT = struct.Struct("<10s80s50s15s20s90s60s3xf")
RECORD_SIZE = _STRUCT.size

CSV_HEADER = "measure,quantile,area,sex,age,geography,ethnic,value"
CSV_COLUMNS = tuple(CSV_HEADER.split(","))


def _encode_text(name: str, text: str, size: int) -> bytes:
    raw = text.encode("utf-8")
    if len(raw) > size - 1:
        raise ValueError(
            f"field {name!r} takes at most {size - 1} bytes, got {len(raw)}"
        )
    return raw


def _decode_text(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass
class Athlete:
    """One record: seven text fields and a numeric value."""

    measure: str = ""
    quantile: str = ""
    area: str = ""
    sex: str = ""
    age: str = ""
    geography: str = ""
    ethnic: str = ""
    value: float = 0.0

    def to_bytes(self) -> bytes:
        """Pack the record into its fixed-size binary form."""
        texts = [
            _encode_text(name, getattr(self, name), size)
            for name, size in TEXT_FIELDS
        ]
        return _STRUCT.pack(*texts, float(self.value))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Athlete":
        """Unpack a record from exactly RECORD_SIZE bytes."""
        if len(data) != RECORD_SIZE:
            raise ValueError(
                f"a record is {RECORD_SIZE} bytes, got {len(data)}"
            )
        *texts, value = _STRUCT.unpack(data)
        return cls(*(_decode_text(raw) for raw in texts), value=value)

    @classmethod
    def from_csv_fields(cls, fields: Sequence[str]) -> "Athlete":
        """Build a record from the eight columns of a CSV row."""
        if len(fields) != len(CSV_COLUMNS):
            raise ValueError(
                f"expected {len(CSV_COLUMNS)} columns, got {len(fields)}"
            )
        *texts, raw_value = fields
        try:
            value = float(raw_value)
        except ValueError:
            raise ValueError(f"invalid value {raw_value!r}") from None
        athlete = cls(*texts, value=value)
        for name, size in TEXT_FIELDS:
            _encode_text(name, getattr(athlete, name), size)
        return athlete

    def to_csv_row(self) -> list[str]:
        """Return the record as the eight columns of a CSV row."""
        return [getattr(self, name) for name, _ in TEXT_FIELDS] + [
            f"{self.value:g}"
        ]

    def __str__(self) -> str:
        return (
            f"Measure: {self.measure}"
            f", Quantile: {self.quantile}"
            f", Area: {self.area}"
            f", Sex: {self.sex}"
            f", Age: {self.age}"
            f", Geography: {self.geography}"
            f", Ethnic: {self.ethnic}"
            f", Value: {self.value:g}"
        )


def iter_records(path: PathLike) -> Iterator[Athlete]:
    """Yield every whole record in a binary file; a trailing fragment is ignored."""
    with open(path, "rb") as stream:
        while chunk := stream.read(RECORD_SIZE):
            if len(chunk) < RECORD_SIZE:
                return
            yield Athlete.from_bytes(chunk)


def write_records(path: PathLike, records: Iterable[Athlete]) -> int:
    """Write records to a binary file, replacing it; return how many were written."""
    count = 0
    with open(path, "wb") as stream:
        for record in records:
            stream.write(record.to_bytes())
            count += 1
    return count


def _has_extension(name: str, extension: str) -> bool:
    return len(name) >= 5 and name.endswith(extension)


def is_bin_name(name: str) -> bool:
    """True if the name has at least five characters and ends in '.bin'."""
    return _has_extension(name, ".bin")


def is_csv_name(name: str) -> bool:
    """True if the name has at least five characters and ends in '.csv'."""
    return _has_extension(name, ".csv")