#!/usr/bin/env python3
"""Validate ferro-variantkey against a reference corpus of variant keys.

Each corpus line holds five space-separated fields::

    <hex variant key> <chrom> <pos> <ref> <alt>

For every line the variant is encoded and compared with the expected key, then
the expected key is decoded and compared with the variant: exact alleles for
compact-eligible pairs, unknown alleles otherwise. Files ending in ``.gz`` are
decompressed on the fly.

Usage:
    python scripts/validate_corpus.py testfiles/vk-test.txt.gz
    python scripts/validate_corpus.py corpus.txt --max-failures 5
"""

import argparse
import gzip
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

import ferro_variantkey
from ferro_variantkey.alleles import is_compact_eligible


@dataclass
class CorpusFailure:
    """A corpus line that did not round-trip."""

    line_number: int
    line: str
    reason: str


@dataclass
class ValidationSummary:
    """Result of validating a corpus."""

    total: int = 0
    compact: int = 0
    hashed: int = 0
    failures: list[CorpusFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def validate_line(line: str) -> tuple[bool, str | None]:
    """Validate one corpus line.

    Returns:
        Tuple of (compact-eligible, failure reason or None)
    """
    elements = line.split()
    if len(elements) != 5:
        return False, f"expected 5 fields, got {len(elements)}"
    hex_key, chrom, pos_text, ref, alt = elements

    try:
        expected = int(hex_key, 16)
        pos = int(pos_text)
    except ValueError as e:
        return False, f"malformed line: {e}"

    compact = is_compact_eligible(ref, alt)

    try:
        actual = ferro_variantkey.encode(chrom, pos, ref, alt)
    except ferro_variantkey.VariantKeyError as e:
        return compact, f"encode failed: {e}"
    if actual != expected:
        return compact, f"encode mismatch: expected {expected:016x}, got {actual:016x}"

    try:
        decoded = ferro_variantkey.decode(expected)
    except ferro_variantkey.VariantKeyError as e:
        return compact, f"decode failed: {e}"

    if compact:
        wanted = ferro_variantkey.Variant(chrom.encode(), pos, ref.encode(), alt.encode())
    else:
        wanted = ferro_variantkey.Variant(chrom.encode(), pos, None, None)
    if decoded != wanted:
        return compact, f"decode mismatch: expected {wanted}, got {decoded}"

    return compact, None


def iter_corpus_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield (line number, stripped line), skipping blanks and ``#`` comments."""
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if line and not line.startswith("#"):
            yield line_number, line


def validate_corpus(lines: Iterable[str], max_failures: int = 0) -> ValidationSummary:
    """Validate every line of a corpus.

    Args:
        lines: Corpus lines
        max_failures: Stop after this many failures (0 = never stop early)

    Returns:
        A ValidationSummary
    """
    summary = ValidationSummary()
    for line_number, line in iter_corpus_lines(lines):
        summary.total += 1
        compact, reason = validate_line(line)
        if compact:
            summary.compact += 1
        else:
            summary.hashed += 1
        if reason is not None:
            summary.failures.append(CorpusFailure(line_number, line, reason))
            if max_failures and len(summary.failures) >= max_failures:
                break
    return summary


def open_corpus(path: Path) -> TextIO:
    """Open a corpus file, transparently decompressing ``.gz``."""
    if path.suffix == ".gz":
        return gzip.open(path, "rt", encoding="ascii")
    return open(path, encoding="ascii")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Validate ferro-variantkey against a variant key corpus"
    )
    parser.add_argument(
        "corpus",
        type=Path,
        help="Corpus file (<hexkey> <chrom> <pos> <ref> <alt> per line, optionally gzipped)",
    )
    parser.add_argument(
        "--max-failures",
        type=int,
        default=0,
        help="Stop after this many failures (0 = check every line)",
    )

    args = parser.parse_args()

    with open_corpus(args.corpus) as f:
        summary = validate_corpus(f, args.max_failures)

    for failure in summary.failures:
        print(f"line {failure.line_number}: {failure.reason}")
        print(f"  {failure.line}")

    print(f"\nChecked {summary.total} variants ({summary.compact} compact, {summary.hashed} hashed)")
    print(f"Failures: {len(summary.failures)}")

    if not summary.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
