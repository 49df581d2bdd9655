import pytest

from distwt.binary_io import FileReader, FileWriter


def test_size_t_is_little_endian(tmp_path):
    path = tmp_path / "v.bin"
    with FileWriter(str(path)) as w:
        w.write(1, "Q")
    assert path.read_bytes() == b"\x01" + b"\x00" * 7


def test_round_trip_mixed_formats(tmp_path):
    path = str(tmp_path / "m.bin")
    values = [(7, "Q"), (200, "B"), (65000, "H"), (2**39 + 5, 5), (1.5, "d")]
    with FileWriter(path) as w:
        for value, fmt in values:
            w.write(value, fmt)
    with FileReader(path) as r:
        got = [r.read(fmt) for _, fmt in values]
    assert got == [v for v, _ in values]


def test_integer_width_byte_count(tmp_path):
    path = tmp_path / "w.bin"
    with FileWriter(str(path)) as w:
        w.write(3, 5)
        w.write(4, 2)
    assert len(path.read_bytes()) == 7


def test_read_past_end_raises(tmp_path):
    path = str(tmp_path / "short.bin")
    with FileWriter(path) as w:
        w.write(9, "B")
    with FileReader(path) as r:
        assert r.read("B") == 9
        with pytest.raises(EOFError):
            r.read("Q")


def test_invalid_width_raises(tmp_path):
    path = str(tmp_path / "bad.bin")
    with FileWriter(path) as w:
        with pytest.raises(ValueError):
            w.write(1, 0)