"""Defaults and environment configuration for reference reading."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from dotenv import load_dotenv

DEFAULT_OUT_DIR = Path("data") / "reference"

ENV_PRIMARY_ONLY = "REFREADER_PRIMARY_ONLY"
ENV_STRICT_HEADERS = "REFREADER_STRICT_HEADERS"
ENV_EXPECTED_RECORDS = "REFREADER_EXPECTED_RECORDS"
ENV_EXPECTED_RECORD_LENGTH = "REFREADER_EXPECTED_RECORD_LENGTH"
ENV_EXPECTED_CPGS = "REFREADER_EXPECTED_CPGS"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}

PathLike = Union[str, Path]


@dataclass(slots=True)
class ReaderDefaults:
    """Options surfaced on the CLI scan command.

    The three ``expected_*`` values are sizing hints only; a wrong hint never
    changes what is read.
    """

    primary_only: bool = False
    strict_headers: bool = False
    expected_records: int = 64
    expected_record_length: int = 250_000_000
    expected_cpgs: int = 30_000_000
    out_dir: Path = DEFAULT_OUT_DIR


READER_DEFAULTS = ReaderDefaults()


def find_env_file(start_path: Optional[PathLike] = None) -> Optional[Path]:
    """Search for the closest .env file starting from start_path or CWD."""
    search_root = Path(start_path).resolve() if start_path else Path.cwd().resolve()
    for candidate_dir in _walk_upwards(search_root):
        candidate = candidate_dir / ".env"
        if candidate.exists():
            return candidate
    return None


def load_reader_config(
    start_path: Optional[PathLike] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ReaderDefaults:
    """Source the nearest .env file and overlay REFREADER_* variables on the defaults.

    Variables already present in the environment win over the .env file.
    """
    if environ is None:
        env_path = find_env_file(start_path)
        if env_path:
            load_dotenv(env_path, override=False)
        environ = os.environ

    config = replace(READER_DEFAULTS)
    if ENV_PRIMARY_ONLY in environ:
        config.primary_only = _parse_bool(ENV_PRIMARY_ONLY, environ[ENV_PRIMARY_ONLY])
    if ENV_STRICT_HEADERS in environ:
        config.strict_headers = _parse_bool(ENV_STRICT_HEADERS, environ[ENV_STRICT_HEADERS])
    if ENV_EXPECTED_RECORDS in environ:
        config.expected_records = _parse_count(ENV_EXPECTED_RECORDS, environ[ENV_EXPECTED_RECORDS])
    if ENV_EXPECTED_RECORD_LENGTH in environ:
        config.expected_record_length = _parse_count(ENV_EXPECTED_RECORD_LENGTH, environ[ENV_EXPECTED_RECORD_LENGTH])
    if ENV_EXPECTED_CPGS in environ:
        config.expected_cpgs = _parse_count(ENV_EXPECTED_CPGS, environ[ENV_EXPECTED_CPGS])
    return config


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def _parse_count(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _walk_upwards(start: Path) -> Iterable[Path]:
    current = start
    last = None
    while last != current:
        yield current
        last = current
        current = current.parent
