"""Single-pass reference reader collecting sequences and CpG positions."""

from __future__ import annotations

import logging
import threading
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .config import READER_DEFAULTS
from .identifiers import IdentifierResolver, RenameEvent
from .io.fasta import is_header, split_header
from .io.paths import open_reference
from .logging_utils import get_logger
from .scanner import LineScanner, scan_line

Line = Union[bytes, str]


class ReferenceReaderError(RuntimeError):
    """Base class for errors raised while reading a reference."""


class ReferenceReadError(ReferenceReaderError):
    """The reference could not be opened or read."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Reading genome reference file {path} was unsuccessful: {cause}")
        self.path = path


class MalformedHeaderError(ReferenceReaderError):
    """A header line carries no record identifier (strict mode only)."""

    def __init__(self, line_number: int, text: str) -> None:
        super().__init__(f"Header on line {line_number} has no identifier: {text!r}")
        self.line_number = line_number
        self.text = text


class ParseCancelled(ReferenceReaderError):
    """The read was cancelled before the end of the input."""


@dataclass(slots=True)
class ReadRequest:
    reference: Path
    primary_only: bool = READER_DEFAULTS.primary_only
    strict_headers: bool = READER_DEFAULTS.strict_headers
    expected_records: int = READER_DEFAULTS.expected_records
    expected_record_length: int = READER_DEFAULTS.expected_record_length
    expected_cpgs: int = READER_DEFAULTS.expected_cpgs


@dataclass(frozen=True, slots=True)
class CpG:
    chrom: int
    pos: int


@dataclass(slots=True)
class ReferenceData:
    """Everything collected from one reference.

    ``sequences[i]`` belongs to ``chromosomes[i]``; CpG entries point into
    those sequences through ``chrom`` and the 0-based ``pos`` of the C.
    """

    sequences: List[bytearray] = field(default_factory=list)
    cpgs: List[CpG] = field(default_factory=list)
    boundary_cpgs: List[CpG] = field(default_factory=list)
    chromosomes: Dict[int, str] = field(default_factory=dict)
    renames: List[RenameEvent] = field(default_factory=list)
    skipped_headers: int = 0
    rejected_records: int = 0

    @property
    def record_count(self) -> int:
        return len(self.sequences)

    def index_of(self, identifier: str) -> int:
        for index, name in self.chromosomes.items():
            if name == identifier:
                return index
        raise KeyError(identifier)

    def sequence_of(self, identifier: str) -> bytearray:
        return self.sequences[self.index_of(identifier)]


class ReferenceParser:
    """Line-driven state machine for one reference.

    Feed every physical line in file order, then call :meth:`finish`. Only one
    record is open at a time; its buffer is handed over to the result, without
    copying, as soon as the next header (or the end of input) is seen. Lines following a rejected header
    are dropped until the next accepted one.
    """

    def __init__(
        self,
        primary_only: bool = False,
        strict_headers: bool = False,
        *,
        expected_records: int = READER_DEFAULTS.expected_records,
        expected_record_length: int = READER_DEFAULTS.expected_record_length,
        expected_cpgs: int = READER_DEFAULTS.expected_cpgs,
        resolver: Optional[IdentifierResolver] = None,
        line_scanner: LineScanner = scan_line,
        logger: Optional[logging.Logger] = None,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        self.logger = logger or get_logger()
        self.resolver = resolver or IdentifierResolver(primary_only=primary_only, logger=self.logger)
        self.strict_headers = strict_headers
        self.expected_records = expected_records
        self.expected_record_length = expected_record_length
        self.expected_cpgs = expected_cpgs
        self.line_scanner = line_scanner
        self.cancel = cancel

        self._data = ReferenceData()
        self._live: Optional[bytearray] = None
        self._live_index = -1
        self._last_c = False
        self._line_number = 0
        self._finished = False

    def feed(self, line: Line) -> None:
        if self._finished:
            raise RuntimeError("Parser already finished")
        if self.cancel is not None and self.cancel.is_set():
            raise ParseCancelled(f"Reference read cancelled at line {self._line_number}")

        self._line_number += 1
        if isinstance(line, str):
            line = line.encode("utf-8")
        line = line.rstrip(b"\r\n")

        if is_header(line):
            self._start_record(line)
        elif self._live is not None:
            self._read_sequence(line)

    def finish(self) -> ReferenceData:
        if self._finished:
            raise RuntimeError("Parser already finished")
        self._flush()
        self._finished = True

        data = self._data
        data.renames = list(self.resolver.renames)
        if data.record_count > self.expected_records:
            self.logger.debug("Read %d records, more than the expected %d", data.record_count, self.expected_records)
        if len(data.cpgs) > self.expected_cpgs:
            self.logger.debug("Found %d CpGs, more than the expected %d", len(data.cpgs), self.expected_cpgs)
        return data

    def _start_record(self, line: bytes) -> None:
        header = line[1:].decode("utf-8", errors="replace")
        identifier, _ = split_header(header)
        if not identifier:
            self._skip_header(line)
            return

        self._flush()
        index = len(self._data.chromosomes)
        resolution = self.resolver.resolve(identifier, header)
        if not resolution.accepted:
            self._data.rejected_records += 1
            self.logger.debug("Skipping record %s: not a primary chromosome", identifier)
            return

        self._data.chromosomes[index] = resolution.identifier
        self._live = bytearray()
        self._live_index = index

    def _skip_header(self, line: bytes) -> None:
        text = line.decode("utf-8", errors="replace")
        if self.strict_headers:
            raise MalformedHeaderError(self._line_number, text)
        self._data.skipped_headers += 1
        self.logger.warning("Ignoring header without identifier on line %d: %r", self._line_number, text)

    def _read_sequence(self, line: bytes) -> None:
        scan = self.line_scanner(line, self._last_c, len(self._live))
        self._live += line
        self._last_c = scan.last_c
        chrom = self._live_index
        self._data.cpgs.extend(CpG(chrom, pos) for pos in scan.cpgs)
        self._data.boundary_cpgs.extend(CpG(chrom, pos) for pos in scan.boundary_cpgs)

    def _flush(self) -> None:
        self._last_c = False
        if self._live is None:
            return
        sequence = self._live
        self._data.sequences.append(sequence)
        self._live = None
        name = self._data.chromosomes[self._live_index]
        self.logger.debug("Finished record %s (%d bp)", name, len(sequence))
        if len(sequence) > self.expected_record_length:
            self.logger.debug(
                "Record %s is longer than the expected %d bp", name, self.expected_record_length
            )


def parse_reference(
    lines: Iterable[Line],
    primary_only: bool = False,
    strict_headers: bool = False,
    **options,
) -> ReferenceData:
    """Run a fresh :class:`ReferenceParser` over ``lines``."""

    parser = ReferenceParser(primary_only, strict_headers, **options)
    for line in lines:
        parser.feed(line)
    return parser.finish()


def read_reference(
    request: ReadRequest,
    logger: Optional[logging.Logger] = None,
    cancel: Optional[threading.Event] = None,
    line_scanner: LineScanner = scan_line,
) -> ReferenceData:
    """Read ``request.reference`` in one pass.

    Plain and gzip-compressed files are accepted. The file handle is closed
    whether the read succeeds, fails or is cancelled; on failure nothing is
    returned.
    """

    logger = logger or get_logger()
    path = Path(request.reference)
    parser = ReferenceParser(
        request.primary_only,
        request.strict_headers,
        expected_records=request.expected_records,
        expected_record_length=request.expected_record_length,
        expected_cpgs=request.expected_cpgs,
        line_scanner=line_scanner,
        logger=logger,
        cancel=cancel,
    )

    logger.info("Start reading reference file %s", path)
    try:
        with open_reference(path) as handle:
            for line in handle:
                parser.feed(line)
    except (OSError, EOFError, zlib.error) as exc:
        raise ReferenceReadError(path, exc) from exc

    data = parser.finish()
    logger.info(
        "Done reading reference file %s: %d records, %d CpGs (%d across line breaks)",
        path,
        data.record_count,
        len(data.cpgs),
        len(data.boundary_cpgs),
    )
    return data
