"""Record identifier filtering and de-duplication."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, List, Optional

from .logging_utils import get_logger

PRIMARY_CHROMOSOMES = frozenset(
    [f"chr{number}" for number in range(1, 23)]
    + ["chrX", "chrY", "chrM", "chrMT", "lambda", "pUC19"]
)


def is_primary_chromosome(identifier: str) -> bool:
    """Exact, case-sensitive membership test against the primary assembly set."""

    return identifier in PRIMARY_CHROMOSOMES


@dataclass(frozen=True, slots=True)
class RenameEvent:
    header: str
    original: str
    replacement: str


@dataclass(frozen=True, slots=True)
class Resolution:
    accepted: bool
    identifier: Optional[str] = None

    @classmethod
    def rejected(cls) -> "Resolution":
        return cls(accepted=False)


class IdentifierResolver:
    """Decide whether a record is kept and under which unique identifier.

    One resolver belongs to one parse: it remembers the identifiers it has
    accepted and owns the suffix counter used for renaming, so repeated
    parses never share numbering.
    """

    def __init__(
        self,
        primary_only: bool = False,
        whitelist: AbstractSet[str] = PRIMARY_CHROMOSOMES,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.primary_only = primary_only
        self.whitelist = whitelist
        self.logger = logger or get_logger()
        self.accepted: set[str] = set()
        self.renames: List[RenameEvent] = []
        self._suffix = 1

    def resolve(self, candidate: str, header: str = "") -> Resolution:
        if self.primary_only and candidate not in self.whitelist:
            return Resolution.rejected()

        identifier = candidate
        while identifier in self.accepted:
            identifier = f"{candidate}_{self._suffix}"
            self._suffix += 1

        if identifier != candidate:
            event = RenameEvent(header=header or candidate, original=candidate, replacement=identifier)
            self.renames.append(event)
            self.logger.warning(
                "Chromosome identifier %s found in header '%s' is not unique. Renaming to %s",
                candidate,
                event.header,
                identifier,
            )

        self.accepted.add(identifier)
        return Resolution(accepted=True, identifier=identifier)
