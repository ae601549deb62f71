"""FASTA header helpers."""

from __future__ import annotations

import re
from typing import Tuple

HEADER_MARKER = b">"

_ID_DELIMITERS = re.compile(r"[ \t]")


def is_header(line: bytes) -> bool:
    """True for any line opening with the record marker, including a lone marker."""

    return line[:1] == HEADER_MARKER


def split_header(header: str) -> Tuple[str, str]:
    """Split header text (without the marker) into identifier and description.

    The identifier runs up to the first space or tab; the description is the
    remainder with surrounding whitespace removed. Either part may be empty.
    """

    match = _ID_DELIMITERS.search(header)
    if match is None:
        return header, ""
    return header[: match.start()], header[match.end() :].strip()
