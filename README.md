# athletefile

Tools for storing athlete statistics as fixed-width binary records. Each
record holds seven text fields and a floating-point value. The text fields are
measure, quantile, area, sex, age, geography and ethnic. Each one has a fixed
byte limit. The value is stored as a 32-bit float. A record takes 328 bytes.

## Installation

```
pip install .
```

To run the test suite as well, install the `test` extra:

```
pip install .[test]
```

## Commands

### `athletefile`

This is the interactive manager, and it takes no arguments. It first asks for
a CSV file whose first line is a header. Then it asks for the name of a `.bin`
file, and it asks again until the name ends in `.bin`. It reads the CSV rows
into that file. Finally it offers to write a copy back out as CSV so that you
can check the result.

The menu then offers:

- `1` insert a record at a position. The record count is also a valid
  position, which appends the record.
- `2` change one field of a record, and optionally show the record afterwards.
- `3` print the records between two positions, both included.
- `6` export the binary file to `<name>.csv`.
- `7` split the file into blocks of 25536 records named `temp0.bin`,
  `temp1.bin`, … next to the binary file, and sort each block by value.
- `8` binary-search the file for a value. The search first checks that the
  values do not decrease over the first 1001 records. If they do, it refuses.
- `9` exit.

After each action the manager asks whether to return to the menu. Answer `S`
or `s` for yes and `N` or `n` for no.

### `athletefile-split`

```
athletefile-split [path] [--records-per-block N]
```

This command splits a binary file into `temp0.bin`, `temp1.bin`, … in the
current directory. Each block holds `N` records, 10000 by default. It expects
records of 340 bytes, whose value is held as a 15-byte text slot, and it drops
any trailing partial record. If you leave out the path, it asks for one.

### `athletefile-preview`

```
athletefile-preview [path] [--limit N]
```

This command prints the records at even positions below `N`, which is 1000 by
default. Use it to check an ordering at a glance. If you leave out the path, it
asks for one.

## Library use

```python
from athletefile.binfile import Field, RecordFile, export_csv, import_csv, sort_file

import_csv("data.csv", "data.bin")          # returns the number of records
records = RecordFile("data.bin")
print(records.count())
records.update(0, Field.VALUE, "42.5")      # returns the updated Athlete
for athlete in records.read_range(0, 4):
    print(athlete)
records.swap(0, 1)
sort_file("data.bin")                       # sorts the whole file in place by value
print(records.binary_search(42.5))          # position, or None
records.split_and_sort(25536, "temp")       # list of block paths
export_csv("data.bin", "copy.csv")
```

`RecordFile` also has the following methods:

- `read(position)` returns one record.
- `insert(position, athlete)` inserts a record before a position.
- `is_sorted(limit)` checks the ordering.
- `split(records_per_block, prefix)` writes the blocks without sorting them.

A position outside the file raises `IndexError`. Searching a file that is not
sorted raises `ValueError`.

`athletefile.records` defines the `Athlete` dataclass and its methods:

- `to_bytes` and `from_bytes` give the binary form.
- `from_csv_fields` and `to_csv_row` give the CSV form.
- `str()` gives the printed form.

The module also provides `iter_records`, `write_records`, `is_bin_name` and
`is_csv_name`.

`athletefile.split.split_file` is the block splitter behind
`athletefile-split`. `athletefile.preview.preview` yields the records that
`athletefile-preview` prints.

`athletefile.minheap.MinHeap` is a fixed-capacity min-heap that orders
athletes by value:

- `push` raises `OverflowError` when the heap is full.
- `pop` raises `IndexError` when the heap is empty.

## What it does not do

- Records cannot be deleted.
- Records can only be looked up by value, not by any other field.
- Menu option 7 sorts each block file but does not merge the blocks back into
  one sorted file. It also leaves the main binary file unsorted. To search the
  main file from the menu, sort it first with `sort_file`.