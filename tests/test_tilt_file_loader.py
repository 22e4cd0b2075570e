from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pytest

from iesrescale.io.cursor import ByteCursor
from iesrescale.models.tilt import Orientation, TiltData
from iesrescale.parser.errors import ParseError
from iesrescale.parser.ies_parser import parse_ies_file, parse_ies_text
from iesrescale.parser.tilt_file import TiltFileError, read_tilt, resolve_tilt

BODY = """1 1000 1 3 1 1 2 0 0 0
1 1 10
0 45 90
0
100 80 60
"""


def _doc(tilt_block: str, tag: str = "IESNA:LM-63-1995") -> str:
    return f"{tag}\n[TEST] tilt\n{tilt_block}{BODY}"


def _source(files: Dict[str, bytes]):
    def fetch(name: str) -> Optional[bytes]:
        return files.get(name)
    return fetch


def test_read_tilt_block() -> None:
    tilt = read_tilt(ByteCursor(b"1\n3\n0 15 30\n1.0 0.9 0.8\n"))
    assert tilt.orientation is Orientation.VERTICAL
    assert tilt.num_pairs == 3
    assert tilt.angles == (0.0, 15.0, 30.0)
    assert tilt.mult_factors == (1.0, 0.9, 0.8)


def test_read_tilt_wrapped_arrays() -> None:
    tilt = read_tilt(ByteCursor(b"3\n4\n0 15\n30 45\n1 0.9\n0.8, 0.7\n"))
    assert tilt.orientation is Orientation.TILTED
    assert tilt.angles == (0.0, 15.0, 30.0, 45.0)
    assert tilt.mult_factors == (1.0, 0.9, 0.8, 0.7)


@pytest.mark.parametrize("count", ["0", "-2"])
def test_read_tilt_non_positive_count_has_empty_arrays(count: str) -> None:
    tilt = read_tilt(ByteCursor(f"2\n{count}\n".encode()))
    assert tilt.orientation is Orientation.HORIZONTAL
    assert tilt.num_pairs == int(count)
    assert tilt.angles == ()
    assert tilt.mult_factors == ()


@pytest.mark.parametrize(
    "payload",
    [
        b"4\n1\n0\n1\n",          # unknown orientation
        b"1\n",                   # missing count
        b"1\n3\n0 15 30\n",       # missing multiplying factors
        b"1\n3\n0 15\n1 1 1\n",   # short angle array swallows the factor line
        b"x\n1\n0\n1\n",
    ],
)
def test_read_tilt_failures(payload: bytes) -> None:
    with pytest.raises(ParseError):
        read_tilt(ByteCursor(payload))


def test_tilt_data_invariants() -> None:
    with pytest.raises(ValueError):
        TiltData(orientation=Orientation.VERTICAL, num_pairs=2, angles=(0.0,), mult_factors=(1.0, 1.0))
    with pytest.raises(ValueError):
        TiltData(orientation=Orientation.VERTICAL, num_pairs=0, angles=(0.0,), mult_factors=(1.0,))


def test_tilt_none_has_no_tilt_data() -> None:
    rec = parse_ies_text(_doc("TILT=NONE\n"))
    assert rec.lamp.tilt_ref == "NONE"
    assert rec.lamp.tilt is None


def test_tilt_include_is_read_from_same_stream() -> None:
    rec = parse_ies_text(_doc("TILT=INCLUDE\n1\n3\n0 15 30\n1.0 0.9 0.8\n"))
    assert rec.lamp.tilt_ref == "INCLUDE"
    assert rec.lamp.tilt is not None
    assert rec.lamp.tilt.angles == (0.0, 15.0, 30.0)
    assert rec.lamp.tilt.mult_factors == (1.0, 0.9, 0.8)
    assert rec.photometry.candelas == ((100.0, 80.0, 60.0),)


def test_tilt_include_zero_pairs() -> None:
    rec = parse_ies_text(_doc("TILT=INCLUDE\n1\n0\n"))
    assert rec.lamp.tilt is not None
    assert rec.lamp.tilt.num_pairs == 0
    assert rec.lamp.tilt.angles == ()


def test_tilt_include_truncated_fails() -> None:
    with pytest.raises(ParseError):
        parse_ies_text(_doc("TILT=INCLUDE\n1\n"))


def test_external_tilt_through_injected_source() -> None:
    src = _source({"lamp.tlt": b"3\n2\n0 90\n1 0.5\n"})
    rec = parse_ies_text(_doc("TILT=lamp.tlt\n"), source=src)
    assert rec.lamp.tilt_ref == "lamp.tlt"
    assert rec.lamp.tilt is not None
    assert rec.lamp.tilt.orientation is Orientation.TILTED
    assert rec.lamp.tilt.angles == (0.0, 90.0)
    assert rec.lamp.tilt.mult_factors == (1.0, 0.5)


def test_external_tilt_next_to_document(tmp_path: Path) -> None:
    (tmp_path / "lamp.tlt").write_text("1\n3\n0 30 60\n1.0 0.5 0.2\n", encoding="utf-8")
    ies = tmp_path / "fixture.ies"
    ies.write_text(_doc("TILT=lamp.tlt\n"), encoding="utf-8")
    rec = parse_ies_file(ies)
    assert rec.lamp.tilt is not None
    assert rec.lamp.tilt.mult_factors == (1.0, 0.5, 0.2)


def test_external_tilt_missing_fails() -> None:
    with pytest.raises(TiltFileError) as exc:
        parse_ies_text(_doc("TILT=missing.tlt\n"), source=_source({}))
    assert isinstance(exc.value, ParseError)
    assert "missing.tlt" in str(exc.value)


def test_external_tilt_malformed_names_the_tilt_file() -> None:
    src = _source({"bad.tlt": b"1\n3\n0 20\n"})
    with pytest.raises(TiltFileError) as exc:
        parse_ies_text(_doc("TILT=bad.tlt\n"), source=src)
    assert exc.value.filename == "bad.tlt"


def test_resolve_tilt_none_does_not_consume() -> None:
    c = ByteCursor(b"1 2 3\n")
    assert resolve_tilt("NONE", c) is None
    assert c.next_line() == "1 2 3"
