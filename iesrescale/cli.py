from __future__ import annotations

import argparse
import logging
from pathlib import Path

from iesrescale.export.ies_writer import SerializeError, serialize_record
from iesrescale.io.files import persist
from iesrescale.parser.errors import ParseError
from iesrescale.parser.ies_parser import parse_ies_bytes, parse_ies_file
from iesrescale.photometry.rescale import RescaleError, rescale_record
from iesrescale.testing.compare import compare_records


_DEMO_IES_TEXT = """IESNA:LM-63-2002
[TEST] DEMO-001
[MANUFAC] iesrescale demo
TILT=NONE
1 1000 1 5 2 1 2 0.2 0.2 0
1 1 20
0 22.5 45 67.5 90
0 180
1000 900 700 400 100
1000 850 650 350 50
"""

EXIT_OK = 0
EXIT_MISSING = 2
EXIT_PARSE = 3
EXIT_RESCALE = 4
EXIT_WRITE = 5
EXIT_MISMATCH = 6


def _printable(label: str) -> str:
    # Labels keep undecodable bytes as surrogate escapes; show them as U+FFFD.
    return label.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")


def _check_input(path: Path) -> bool:
    if not path.exists():
        print(f"[ERROR] File not found: {path}")
        print("        Provide a valid path to a .ies file.")
        return False
    if not path.is_file():
        print(f"[ERROR] Not a file: {path}")
        return False
    return True


def _cmd_demo(args: argparse.Namespace) -> int:
    outpath = Path(args.out).expanduser().resolve()
    outpath.parent.mkdir(parents=True, exist_ok=True)
    outpath.write_text(_DEMO_IES_TEXT, encoding="utf-8")
    print(f"Saved demo IES to: {outpath}")
    return EXIT_OK


def _cmd_info(args: argparse.Namespace) -> int:
    ies_path = Path(args.file).expanduser().resolve()
    if not _check_input(ies_path):
        return EXIT_MISSING
    try:
        record = parse_ies_file(ies_path)
    except ParseError as e:
        print(f"[ERROR] {e}")
        return EXIT_PARSE

    photo = record.photometry
    print("IES profile")
    print(f"  File: {ies_path}")
    print(f"  Format: {record.file_meta.format.value}")
    print(f"  Labels: {len(record.labels)}")
    for label in record.labels:
        print(f"    {_printable(label)}")
    tilt = record.lamp.tilt
    if tilt is None:
        print(f"  Tilt: {record.lamp.tilt_ref}")
    else:
        print(f"  Tilt: {record.lamp.tilt_ref} ({tilt.orientation.name.lower()}, {tilt.num_pairs} pair(s))")
    print(f"  Photometric type: {photo.gonio_type.name}, units: {record.units.name.lower()}")
    print(f"  Angles: {photo.num_vert_angles} vertical x {photo.num_horz_angles} horizontal")
    print(f"  Peak candela: {record.peak_candela:g}")
    return EXIT_OK


def _cmd_rescale(args: argparse.Namespace) -> int:
    ies_path = Path(args.file).expanduser().resolve()
    out_path = Path(args.out).expanduser().resolve()
    if not _check_input(ies_path):
        return EXIT_MISSING
    try:
        record = parse_ies_file(ies_path)
    except ParseError as e:
        print(f"[ERROR] {e}")
        return EXIT_PARSE
    try:
        rescaled = rescale_record(record, args.angle, preserve_intensity=args.preserve_intensity)
    except RescaleError as e:
        print(f"[ERROR] {e}")
        return EXIT_RESCALE
    try:
        buffer = serialize_record(rescaled)
    except SerializeError as e:
        print(f"[ERROR] {e}")
        return EXIT_WRITE
    if not persist(out_path, buffer):
        print(f"[ERROR] Could not write: {out_path}")
        return EXIT_WRITE

    mode = "preserve intensity" if args.preserve_intensity else "default"
    print("IES rescale")
    print(f"  File: {ies_path}")
    print(f"  Cone angle: {args.angle:g}° ({mode})")
    print(f"  Saved: {out_path}")

    if args.plot_dir:
        # Import here so rescaling works without a plotting stack configured
        from iesrescale.plotting.plots import save_comparison_plots

        paths = save_comparison_plots(record, rescaled, Path(args.plot_dir).expanduser().resolve(), stem=out_path.stem)
        print(f"  Saved: {paths.intensity_png}")
        print(f"  Saved: {paths.polar_png}")
    return EXIT_OK


def _cmd_roundtrip(args: argparse.Namespace) -> int:
    ies_path = Path(args.file).expanduser().resolve()
    out_path = Path(args.out).expanduser().resolve()
    if not _check_input(ies_path):
        return EXIT_MISSING
    try:
        record = parse_ies_file(ies_path)
        buffer = serialize_record(record)
    except ParseError as e:
        print(f"[ERROR] {e}")
        return EXIT_PARSE
    except SerializeError as e:
        print(f"[ERROR] {e}")
        return EXIT_WRITE
    if not persist(out_path, buffer):
        print(f"[ERROR] Could not write: {out_path}")
        return EXIT_WRITE

    try:
        again = parse_ies_bytes(buffer, name=str(out_path))
    except ParseError as e:
        print(f"[ERROR] Written file does not parse back: {e}")
        return EXIT_MISMATCH
    result = compare_records(record, again)
    print(f"  Saved: {out_path}")
    print(f"  Max abs difference: {result.max_abs_diff:g}")
    if not result.equal:
        for d in result.diffs:
            print(f"  [DIFF] {d.field}: {d.expected!r} != {d.actual!r}")
        return EXIT_MISMATCH
    print("  Round trip OK")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="iesrescale")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    demo = sub.add_parser("demo", help="Write a small demo .ies file to disk.")
    demo.add_argument("--out", default="data/ies_samples/demo.ies", help="Output .ies path")
    demo.set_defaults(func=_cmd_demo)

    info = sub.add_parser("info", help="Parse an IES file and print a summary.")
    info.add_argument("file", help="Path to .ies file")
    info.set_defaults(func=_cmd_info)

    r = sub.add_parser("rescale", help="Fit the vertical distribution into a cone and write a new IES file.")
    r.add_argument("file", help="Path to input .ies file")
    r.add_argument("out", help="Path to output .ies file")
    r.add_argument("--angle", type=float, required=True, help="Target cone angle in degrees, 0..180")
    r.add_argument(
        "--preserve-intensity",
        action="store_true",
        help="Keep the original candela magnitudes instead of recomputing them",
    )
    r.add_argument("--plot-dir", default=None, help="Also save before/after plots (PNG) here")
    r.set_defaults(func=_cmd_rescale)

    rt = sub.add_parser("roundtrip", help="Parse, rewrite and re-parse an IES file, reporting differences.")
    rt.add_argument("file", help="Path to input .ies file")
    rt.add_argument("out", help="Path to output .ies file")
    rt.set_defaults(func=_cmd_roundtrip)

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
