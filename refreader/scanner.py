"""CpG detection for one physical line of reference sequence."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, List

CPG_PATTERN = re.compile(rb"[Cc][Gg]")
_C_BYTES = frozenset(b"Cc")
_G_BYTES = frozenset(b"Gg")


@dataclass(slots=True)
class LineScan:
    """CpG offsets found in one line plus the carry state for the next one."""

    last_c: bool
    cpgs: List[int] = field(default_factory=list)
    boundary_cpgs: List[int] = field(default_factory=list)


LineScanner = Callable[[bytes, bool, int], LineScan]


def scan_line(line: bytes, last_c: bool, start: int) -> LineScan:
    """Report CpG sites touching ``line``.

    ``start`` is the offset the line's first character will have inside the
    record sequence and ``last_c`` tells whether the sequence so far ends in
    an unpaired ``C``. Offsets are absolute and point at the ``C``.
    """

    if not line:
        return LineScan(last_c=last_c)

    scan = LineScan(last_c=line[-1] in _C_BYTES)
    if last_c and line[0] in _G_BYTES:
        scan.cpgs.append(start - 1)
        scan.boundary_cpgs.append(start - 1)
    scan.cpgs.extend(start + match.start() for match in CPG_PATTERN.finditer(line))
    return scan
