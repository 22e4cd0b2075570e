from __future__ import annotations

from dataclasses import replace

import pytest

from iesrescale.export.ies_writer import SerializeError, format_float, serialize_record
from iesrescale.models.photometry import FileFormat, FileMeta
from iesrescale.parser.ies_parser import parse_ies_bytes, parse_ies_text

MINIMAL = """IESNA:LM-63-2002
[TEST] T1
[MANUFAC] Acme
TILT=NONE
1 1000 1 3 2 1 2 0.45 0.45 0.10
1 1 20
0 45 90
0 180
100 80 60
90 70 0
"""


@pytest.mark.parametrize(
    "value,expected",
    [
        (12.5, "12.5"),
        (12.0, "12"),
        (0.0, "0"),
        (100.0, "100"),
        (1000.1, "1000.1"),
        (3.14159, "3.14"),
        (0.999, "1"),
        (-0.5, "-0.5"),
        (0.05, "0.05"),
    ],
)
def test_format_float(value: float, expected: str) -> None:
    assert format_float(value) == expected


def test_serialize_minimal_is_canonical() -> None:
    out = serialize_record(parse_ies_text(MINIMAL))
    assert out == (
        b"IESNA:LM-63-2002\n"
        b"[TEST] T1\n"
        b"[MANUFAC] Acme\n"
        b"TILT=NONE\n"
        b"1 1000 1 3 2 1 2 0.45 0.45 0.1\n"
        b"1 1 20\n"
        b"0 45 90\n"
        b"0 180\n"
        b"100 80 60\n"
        b"90 70 0\n"
    )


def test_label_bytes_are_written_back_verbatim() -> None:
    src = MINIMAL.encode("utf-8").replace(b"[MANUFAC] Acme", b"[LUMINAIRE] 30\xb0 beam \xe9clairage")
    out = serialize_record(parse_ies_bytes(src))
    assert out.splitlines()[2] == b"[LUMINAIRE] 30\xb0 beam \xe9clairage"
    assert out == src.replace(b"0.10\n", b"0.1\n")


@pytest.mark.parametrize(
    "tag,written",
    [
        ("IESNA:LM-63-1995", "IESNA:LM-63-1995"),
        ("IESNA91", "IESNA91"),
        ("Untagged first label", "IESNA86"),
    ],
)
def test_dialect_tag_line(tag: str, written: str) -> None:
    rec = parse_ies_text(MINIMAL.replace("IESNA:LM-63-2002", tag))
    assert serialize_record(rec).decode().splitlines()[0] == written


def test_oldest_dialect_tag_reads_back_as_label() -> None:
    rec = parse_ies_text(MINIMAL.replace("IESNA:LM-63-2002\n", ""))
    assert rec.file_meta.format is FileFormat.LM63_1986
    again = parse_ies_bytes(serialize_record(rec))
    assert again.file_meta.format is FileFormat.LM63_1986
    assert again.labels == ("IESNA86",) + rec.labels


def test_include_tilt_is_written_inline() -> None:
    text = MINIMAL.replace("TILT=NONE\n", "TILT=INCLUDE\n1\n3\n0 15 30\n1.0 0.9 0.8\n")
    lines = serialize_record(parse_ies_text(text)).decode().splitlines()
    assert lines[3:8] == ["TILT=INCLUDE", "1", "3", "0 15 30", "1 0.9 0.8"]


def test_external_tilt_is_normalised_to_include() -> None:
    src = {"lamp.tlt": b"2\n2\n0 90\n1 0.25\n"}
    rec = parse_ies_text(MINIMAL.replace("TILT=NONE", "TILT=lamp.tlt"), source=src.get)
    lines = serialize_record(rec).decode().splitlines()
    assert "TILT=lamp.tlt" not in lines
    assert lines[3:8] == ["TILT=INCLUDE", "2", "2", "0 90", "1 0.25"]

    again = parse_ies_bytes(serialize_record(rec))
    assert again.lamp.tilt_ref == "INCLUDE"
    assert again.lamp.tilt == rec.lamp.tilt


def test_zero_pair_tilt_writes_no_array_lines() -> None:
    rec = parse_ies_text(MINIMAL.replace("TILT=NONE\n", "TILT=INCLUDE\n3\n0\n"))
    lines = serialize_record(rec).decode().splitlines()
    assert lines[3:6] == ["TILT=INCLUDE", "3", "0"]
    assert lines[6].startswith("1 1000 1 3 2")
    assert parse_ies_bytes(serialize_record(rec)) == rec


def test_unknown_format_cannot_be_serialized() -> None:
    rec = parse_ies_text(MINIMAL)
    bogus = replace(rec, file_meta=FileMeta(format="LM-63-2019"))  # type: ignore[arg-type]
    with pytest.raises(SerializeError):
        serialize_record(bogus)
