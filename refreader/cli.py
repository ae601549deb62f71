"""Command-line interface for the reference reader."""

from __future__ import annotations

import argparse
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Callable

from . import __version__
from .config import READER_DEFAULTS, load_reader_config
from .export import write_tables
from .io import ensure_dir, now_iso, write_json
from .logging_utils import configure_logging, get_logger
from .reader import ReadRequest, ReferenceReaderError, read_reference

Handler = Callable[[argparse.Namespace], int]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refreader",
        description="Read a genome reference and tabulate its CpG sites.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    _add_scan_parser(subparsers)
    return parser


def _add_scan_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("scan", help="Read a FASTA reference and export CpG tables.")
    parser.add_argument(
        "--reference",
        type=Path,
        required=True,
        help="Reference FASTA file (optionally gzip-compressed).",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=READER_DEFAULTS.out_dir,
        help=f"Directory for CSV and manifest outputs (default: {READER_DEFAULTS.out_dir}).",
    )
    parser.add_argument(
        "--primary-only",
        action="store_true",
        default=None,
        help="Keep only chr1-22, chrX, chrY, chrM, chrMT, lambda and pUC19 records.",
    )
    parser.add_argument(
        "--strict-headers",
        action="store_true",
        default=None,
        help="Fail on header lines without an identifier instead of skipping them.",
    )
    parser.add_argument(
        "--expected-records",
        type=_non_negative_int,
        help=f"Sizing hint for the number of records (default: {READER_DEFAULTS.expected_records}).",
    )
    parser.add_argument(
        "--expected-record-length",
        type=_non_negative_int,
        help=f"Sizing hint for the longest record (default: {READER_DEFAULTS.expected_record_length}).",
    )
    parser.add_argument(
        "--expected-cpgs",
        type=_non_negative_int,
        help=f"Sizing hint for the CpG count (default: {READER_DEFAULTS.expected_cpgs}).",
    )
    parser.set_defaults(handler=_handle_scan)


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def _handle_scan(args: argparse.Namespace) -> int:
    _require_input(args.reference)
    logger = get_logger()
    config = load_reader_config()
    request = ReadRequest(
        reference=args.reference,
        primary_only=_pick(args.primary_only, config.primary_only),
        strict_headers=_pick(args.strict_headers, config.strict_headers),
        expected_records=_pick(args.expected_records, config.expected_records),
        expected_record_length=_pick(args.expected_record_length, config.expected_record_length),
        expected_cpgs=_pick(args.expected_cpgs, config.expected_cpgs),
    )

    out_dir = ensure_dir(args.out_dir)
    started_at = now_iso()
    data = read_reference(request, logger)
    paths = write_tables(data, out_dir)

    manifest_path = out_dir / "scan_manifest.json"
    params = {key: str(value) if isinstance(value, Path) else value for key, value in asdict(request).items()}
    params["out_dir"] = str(out_dir)
    write_json(
        manifest_path,
        {
            "params": params,
            "counts": {
                "records": data.record_count,
                "cpgs": len(data.cpgs),
                "boundary_cpgs": len(data.boundary_cpgs),
                "rejected_records": data.rejected_records,
                "skipped_headers": data.skipped_headers,
            },
            "chromosomes": {str(index): name for index, name in data.chromosomes.items()},
            "renames": [asdict(event) for event in data.renames],
            "outputs": {key: str(value) for key, value in asdict(paths).items()},
            "timestamps": {"started_at": started_at, "finished_at": now_iso()},
            "version": __version__,
        },
    )
    logger.info("Scan manifest -> %s", manifest_path)
    return 0


def _pick(value, fallback):
    return fallback if value is None else value


def _require_input(path: Path) -> None:
    if not Path(path).exists():
        raise FileNotFoundError(f"Input file not found: {path}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)
    logger = get_logger()
    handler: Handler = args.handler

    try:
        return handler(args)
    except (FileNotFoundError, ValueError, ReferenceReaderError) as exc:
        logger.error(str(exc))
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted, no output written for the current reference")
        return 130
    except Exception:  # pragma: no cover - safety net
        logger.exception("Unexpected error")
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
