"""Tests for primary chromosome filtering and identifier de-duplication."""

from __future__ import annotations

import logging

import pytest

from refreader.identifiers import IdentifierResolver, is_primary_chromosome


@pytest.mark.parametrize(
    "identifier",
    ["chr1", "chr9", "chr22", "chrX", "chrY", "chrM", "chrMT", "lambda", "pUC19"],
)
def test_primary_chromosomes_are_accepted(identifier: str) -> None:
    assert is_primary_chromosome(identifier)


@pytest.mark.parametrize(
    "identifier",
    ["chr0", "chr23", "chr01", "Chr1", "chrx", "chr1_random", "chrUn_random", "chrEBV", "1", "puc19", ""],
)
def test_other_identifiers_are_rejected(identifier: str) -> None:
    assert not is_primary_chromosome(identifier)


def test_resolver_rejects_non_primary_when_filtering() -> None:
    resolver = IdentifierResolver(primary_only=True)
    assert resolver.resolve("chrUn_random").accepted is False
    assert resolver.resolve("chr1").identifier == "chr1"
    assert resolver.accepted == {"chr1"}


def test_resolver_accepts_anything_without_filtering() -> None:
    resolver = IdentifierResolver()
    resolution = resolver.resolve("scaffold_42")
    assert resolution.accepted
    assert resolution.identifier == "scaffold_42"


def test_duplicates_get_increasing_suffixes(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="refreader")
    resolver = IdentifierResolver()
    names = [resolver.resolve("chr1", "chr1 extra text").identifier for _ in range(3)]
    assert names == ["chr1", "chr1_1", "chr1_2"]
    assert [event.replacement for event in resolver.renames] == ["chr1_1", "chr1_2"]
    assert resolver.renames[0].header == "chr1 extra text"
    assert resolver.renames[0].original == "chr1"
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert "chr1 extra text" in warnings[0].getMessage()
    assert "chr1_1" in warnings[0].getMessage()


def test_suffix_counter_is_shared_across_identifiers() -> None:
    resolver = IdentifierResolver()
    resolver.resolve("chr1")
    resolver.resolve("chr2")
    assert resolver.resolve("chr2").identifier == "chr2_1"
    assert resolver.resolve("chr1").identifier == "chr1_2"


def test_renamed_identifier_never_collides() -> None:
    resolver = IdentifierResolver()
    resolver.resolve("chr1_1")
    resolver.resolve("chr1")
    assert resolver.resolve("chr1").identifier == "chr1_2"
    assert len(resolver.renames) == 1
    assert len(resolver.accepted) == 3


def test_renamed_identifier_skips_whitelist_check() -> None:
    resolver = IdentifierResolver(primary_only=True)
    resolver.resolve("chrX")
    resolution = resolver.resolve("chrX")
    assert resolution.accepted
    assert resolution.identifier == "chrX_1"


def test_resolvers_do_not_share_counters() -> None:
    first = IdentifierResolver()
    first.resolve("chr1")
    first.resolve("chr1")
    second = IdentifierResolver()
    second.resolve("chr1")
    assert second.resolve("chr1").identifier == "chr1_1"
