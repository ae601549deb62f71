"""Single-pass genome reference reader with CpG site tables."""

from .identifiers import PRIMARY_CHROMOSOMES, IdentifierResolver, RenameEvent, Resolution, is_primary_chromosome
from .reader import (
    CpG,
    MalformedHeaderError,
    ParseCancelled,
    ReadRequest,
    ReferenceData,
    ReferenceParser,
    ReferenceReadError,
    ReferenceReaderError,
    parse_reference,
    read_reference,
)
from .scanner import LineScan, scan_line

__version__ = "0.1.0"

__all__ = [
    "CpG",
    "IdentifierResolver",
    "LineScan",
    "MalformedHeaderError",
    "PRIMARY_CHROMOSOMES",
    "ParseCancelled",
    "ReadRequest",
    "ReferenceData",
    "ReferenceParser",
    "ReferenceReadError",
    "ReferenceReaderError",
    "RenameEvent",
    "Resolution",
    "is_primary_chromosome",
    "parse_reference",
    "read_reference",
    "scan_line",
]
