import struct
from dataclasses import dataclass

import pytest

from apigen.binpack import BinpackError, User, binpack, main, skip, unpack

SAMPLE = bytes(
    [128, 36, 17, 0, 9, 0, 0, 0, 118, 46, 114, 111, 109, 97, 110, 111, 118, 16, 0, 0, 0]
)


@binpack
@dataclass
class Record:
    code: int = 0
    note: str = skip()
    label: str = ""
    hidden: int = skip()


def pack_record(code, label):
    raw = label.encode("utf-8")
    return struct.pack("<I", code) + struct.pack("<I", len(raw)) + raw


def test_sample_user():
    assert unpack(User, SAMPLE) == User(id=1123456, real_name="", login="v.romanov", flags=16)


@pytest.mark.parametrize("label", ["", "x", "v.romanov", "ünïcode"])
def test_round_trip(label):
    record = unpack(Record, pack_record(77, label))
    assert (record.code, record.label) == (77, label)


def test_skipped_fields_get_zero_values():
    record = unpack(Record, pack_record(1, "a"))
    assert (record.note, record.hidden) == ("", 0)


def test_trailing_bytes_are_ignored():
    assert unpack(Record, pack_record(5, "ab") + b"\x01\x02") == unpack(Record, pack_record(5, "ab"))


@pytest.mark.parametrize("cut", [0, 3, 4, 7, 9])
def test_truncated_data_raises(cut):
    with pytest.raises(BinpackError):
        unpack(Record, pack_record(5, "abc")[:cut])


def test_invalid_utf8_raises():
    with pytest.raises(BinpackError):
        unpack(Record, struct.pack("<II", 1, 1) + b"\xff")


def test_unsupported_type_rejected():
    @dataclass
    class Bad:
        ratio: float = 0.0

    with pytest.raises(BinpackError, match="ratio"):
        binpack(Bad)


def test_unmarked_class_rejected():
    @dataclass
    class Unmarked:
        code: int = 0

    with pytest.raises(BinpackError):
        unpack(Unmarked, struct.pack("<I", 1))


def test_binpack_requires_dataclass():
    with pytest.raises(TypeError):
        binpack(int)


def test_main_prints_sample(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Unpacked user ")
    assert "login='v.romanov'" in out
    assert "id=1123456" in out


def test_main_reads_file(tmp_path, capsys):
    path = tmp_path / "user.bin"
    path.write_bytes(SAMPLE)
    assert main([str(path)]) == 0
    assert "flags=16" in capsys.readouterr().out


def test_main_reports_truncated_file(tmp_path, capsys):
    path = tmp_path / "short.bin"
    path.write_bytes(SAMPLE[:6])
    assert main([str(path)]) == 1
    assert "error:" in capsys.readouterr().err