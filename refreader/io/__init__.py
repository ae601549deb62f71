"""IO helpers for the reference reader."""

from .csv_utils import write_csv
from .fasta import HEADER_MARKER, is_header, split_header
from .paths import ensure_dir, now_iso, open_reference, write_json

__all__ = [
    "HEADER_MARKER",
    "ensure_dir",
    "is_header",
    "now_iso",
    "open_reference",
    "split_header",
    "write_csv",
    "write_json",
]
