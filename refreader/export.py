"""Tabular views and CSV exports of a parsed reference."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

import pandas as pd

from .io import ensure_dir, write_csv
from .logging_utils import get_logger
from .reader import CpG, ReferenceData

logger = get_logger("export")

CHROMOSOME_COLUMNS = ["index", "identifier", "length"]
CPG_COLUMNS = ["chrom", "identifier", "pos"]


@dataclass
class ExportPaths:
    chromosomes_csv: Path
    cpgs_csv: Path
    boundary_cpgs_csv: Path


def chromosome_frame(data: ReferenceData) -> pd.DataFrame:
    """One row per accepted record, in index order."""
    rows = [
        (index, data.chromosomes[index], len(sequence))
        for index, sequence in enumerate(data.sequences)
    ]
    frame = pd.DataFrame(rows, columns=CHROMOSOME_COLUMNS)
    return frame.astype({"index": "int64", "length": "int64"})


def cpg_frame(data: ReferenceData, boundary: bool = False) -> pd.DataFrame:
    """CpG table as a DataFrame; ``boundary`` selects the line-spanning subset."""
    table = data.boundary_cpgs if boundary else data.cpgs
    frame = pd.DataFrame(
        {
            "chrom": pd.Series([cpg.chrom for cpg in table], dtype="int64"),
            "pos": pd.Series([cpg.pos for cpg in table], dtype="int64"),
        }
    )
    frame.insert(1, "identifier", frame["chrom"].map(data.chromosomes).astype("object"))
    return frame


def write_tables(data: ReferenceData, out_dir: Path) -> ExportPaths:
    """Write chromosome and CpG tables as CSV files into ``out_dir``.

    CpG tables are streamed row by row; a human reference has tens of
    millions of sites.
    """
    out_dir = ensure_dir(out_dir)
    paths = ExportPaths(
        chromosomes_csv=out_dir / "chromosomes.csv",
        cpgs_csv=out_dir / "cpgs.csv",
        boundary_cpgs_csv=out_dir / "boundary_cpgs.csv",
    )

    chromosome_frame(data).to_csv(paths.chromosomes_csv, index=False)
    total = write_csv(paths.cpgs_csv, CPG_COLUMNS, _cpg_rows(data, data.cpgs))
    boundary = write_csv(paths.boundary_cpgs_csv, CPG_COLUMNS, _cpg_rows(data, data.boundary_cpgs))
    logger.info("Wrote %d CpGs (%d across line breaks) to %s", total, boundary, out_dir)
    return paths


def _cpg_rows(data: ReferenceData, table: Iterable[CpG]) -> Iterator[Tuple[int, str, int]]:
    names: List[str] = [data.chromosomes[index] for index in range(len(data.chromosomes))]
    for cpg in table:
        yield cpg.chrom, names[cpg.chrom], cpg.pos
