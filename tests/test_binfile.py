from pathlib import Path

import pytest

from athletefile.binfile import (
    Field,
    RecordFile,
    export_csv,
    import_csv,
    sort_file,
)
from athletefile.records import (
    CSV_HEADER,
    RECORD_SIZE,
    Athlete,
    iter_records,
    write_records,
)


def _athlete(tag: str, value: float) -> Athlete:
    return Athlete(
        measure="m" + tag,
        quantile="q",
        area="a",
        sex="s",
        age="20",
        geography="g",
        ethnic="e",
        value=value,
    )


@pytest.fixture
def unsorted(tmp_path) -> Path:
    path = tmp_path / "data.bin"
    write_records(
        path,
        [_athlete("0", 3.0), _athlete("1", 1.0), _athlete("2", 2.5),
         _athlete("3", 0.5), _athlete("4", 4.0)],
    )
    return path


@pytest.fixture
def ordered(tmp_path) -> Path:
    path = tmp_path / "sorted.bin"
    write_records(path, [_athlete(str(i), float(i)) for i in range(7)])
    return path


def test_count_matches_file_size(unsorted):
    rf = RecordFile(unsorted)
    assert rf.count() == 5
    assert unsorted.stat().st_size == 5 * RECORD_SIZE


def test_read_returns_written_record(unsorted):
    assert RecordFile(unsorted).read(2) == _athlete("2", 2.5)


@pytest.mark.parametrize("position", [-1, 5, 100])
def test_read_out_of_range(unsorted, position):
    with pytest.raises(IndexError):
        RecordFile(unsorted).read(position)


def test_read_range_inclusive(unsorted):
    records = list(RecordFile(unsorted).read_range(1, 3))
    assert [r.measure for r in records] == ["m1", "m2", "m3"]


@pytest.mark.parametrize("start,end", [(-1, 2), (3, 1), (0, 5)])
def test_read_range_invalid(unsorted, start, end):
    with pytest.raises(IndexError):
        RecordFile(unsorted).read_range(start, end)


def test_swap_exchanges_records(unsorted):
    rf = RecordFile(unsorted)
    rf.swap(0, 4)
    assert rf.read(0) == _athlete("4", 4.0)
    assert rf.read(4) == _athlete("0", 3.0)
    assert rf.count() == 5


def test_swap_invalid_position(unsorted):
    with pytest.raises(IndexError):
        RecordFile(unsorted).swap(0, 9)


def test_update_text_field(unsorted):
    rf = RecordFile(unsorted)
    updated = rf.update(1, Field.AREA, "north")
    assert updated.area == "north"
    assert rf.read(1).area == "north"
    assert rf.read(1).measure == "m1"


def test_update_value_field(unsorted):
    rf = RecordFile(unsorted)
    rf.update(0, Field.VALUE, "7.25")
    assert rf.read(0).value == 7.25


def test_update_too_long_text_leaves_record(unsorted):
    rf = RecordFile(unsorted)
    with pytest.raises(ValueError):
        rf.update(0, Field.MEASURE, "x" * 10)
    assert rf.read(0) == _athlete("0", 3.0)


def test_update_invalid_position(unsorted):
    with pytest.raises(IndexError):
        RecordFile(unsorted).update(5, Field.SEX, "f")


@pytest.mark.parametrize("position", [0, 2, 5])
def test_insert_places_record(unsorted, position):
    rf = RecordFile(unsorted)
    before = list(iter_records(unsorted))
    new = _athlete("new", 9.0)
    rf.insert(position, new)
    after = list(iter_records(unsorted))
    assert after == before[:position] + [new] + before[position:]
    assert rf.count() == 6


def test_insert_invalid_position(unsorted):
    with pytest.raises(IndexError):
        RecordFile(unsorted).insert(6, _athlete("x", 1.0))
    assert RecordFile(unsorted).count() == 5


def test_is_sorted(unsorted, ordered):
    assert RecordFile(ordered).is_sorted() is True
    assert RecordFile(unsorted).is_sorted() is False


def test_is_sorted_respects_limit(unsorted):
    # Only the first two records are compared: 3.0 then 1.0 is out of order.
    assert RecordFile(unsorted).is_sorted(limit=0) is True
    assert RecordFile(unsorted).is_sorted(limit=1) is False


@pytest.mark.parametrize("value", [0.0, 3.0, 6.0])
def test_binary_search_finds(ordered, value):
    rf = RecordFile(ordered)
    position = rf.binary_search(value)
    assert rf.read(position).value == value


def test_binary_search_missing(ordered):
    assert RecordFile(ordered).binary_search(2.5) is None


def test_binary_search_requires_sorted(unsorted):
    with pytest.raises(ValueError):
        RecordFile(unsorted).binary_search(1.0)


def test_split_blocks(ordered, tmp_path):
    prefix = str(tmp_path / "part")
    paths = RecordFile(ordered).split(3, prefix)
    assert [p.name for p in paths] == ["part0.bin", "part1.bin", "part2.bin"]
    assert [RecordFile(p).count() for p in paths] == [3, 3, 1]
    joined = [r for p in paths for r in iter_records(p)]
    assert joined == list(iter_records(ordered))


def test_split_rejects_bad_block_size(ordered, tmp_path):
    with pytest.raises(ValueError):
        RecordFile(ordered).split(0, str(tmp_path / "p"))


def test_split_and_sort(unsorted, tmp_path):
    paths = RecordFile(unsorted).split_and_sort(2, str(tmp_path / "blk"))
    assert len(paths) == 3
    for path in paths:
        values = [r.value for r in iter_records(path)]
        assert values == sorted(values)
    assert RecordFile(paths[0]).read(0) == _athlete("1", 1.0)


def test_sort_file(unsorted):
    before = list(iter_records(unsorted))
    assert sort_file(unsorted) == 5
    after = list(iter_records(unsorted))
    assert [r.value for r in after] == sorted(r.value for r in before)
    assert sorted(after, key=lambda r: r.measure) == sorted(
        before, key=lambda r: r.measure
    )


def test_csv_round_trip(unsorted, tmp_path):
    csv_path = tmp_path / "out.csv"
    assert export_csv(unsorted, csv_path) == 5
    assert csv_path.read_text(encoding="utf-8").splitlines()[0] == CSV_HEADER
    back = tmp_path / "back.bin"
    assert import_csv(csv_path, back) == 5
    assert list(iter_records(back)) == list(iter_records(unsorted))


def test_import_requires_bin_name(tmp_path):
    csv_path = tmp_path / "in.csv"
    csv_path.write_text(CSV_HEADER + "\nm,q,a,s,20,g,e,1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        import_csv(csv_path, tmp_path / "out.dat")


def test_import_missing_csv(tmp_path):
    with pytest.raises(FileNotFoundError):
        import_csv(tmp_path / "none.csv", tmp_path / "out.bin")