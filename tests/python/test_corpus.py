"""Tests for bulk corpus validation."""

import gzip
from pathlib import Path

import pytest

import ferro_variantkey
from validate_corpus import open_corpus, validate_corpus, validate_line

VARIANTS = [
    ("1", 976157, "T", "C"),
    ("1", 879311, "TTTC", "T"),
    ("X", 155270560, "G", "GATTACAGATTACA"),
    ("MT", 3243, "N", "G"),
    ("22", 51304566, "ACGTACGTAC", "A"),
]

# Keys produced by the reference VariantKey implementation
KNOWN_LINES = [
    "0807728e88e80000 1 976157 T C",
    "0806b567a0fee000 1 879311 TTTC T",
    "68f68e16b7a68e47 13 32316461 CTTAAATTAAGATA C",
    "080000323445ff97 1 100 CX C",
]


def _corpus_line(chrom: str, pos: int, ref: str, alt: str) -> str:
    key = ferro_variantkey.encode(chrom, pos, ref, alt)
    return f"{key:016x} {chrom} {pos} {ref} {alt}"


@pytest.fixture
def corpus_lines() -> list[str]:
    return [_corpus_line(*v) for v in VARIANTS]


class TestValidateLine:
    """Tests for single-line validation."""

    def test_known_key(self) -> None:
        compact, reason = validate_line("0807728e88e80000 1 976157 T C")
        assert compact
        assert reason is None

    def test_hashed_line(self) -> None:
        compact, reason = validate_line(_corpus_line("MT", 3243, "N", "G"))
        assert not compact
        assert reason is None

    def test_encode_mismatch(self) -> None:
        compact, reason = validate_line("0807728e88e80000 1 976158 T C")
        assert reason is not None
        assert "encode mismatch" in reason

    def test_wrong_field_count(self) -> None:
        _, reason = validate_line("0807728e88e80000 1 976157 T")
        assert reason == "expected 5 fields, got 4"

    def test_malformed_key(self) -> None:
        _, reason = validate_line("zzzz 1 976157 T C")
        assert reason is not None
        assert "malformed" in reason

    def test_invalid_chromosome(self) -> None:
        _, reason = validate_line("0807728e88e80000 chrUn 976157 T C")
        assert reason is not None
        assert "encode failed" in reason

    def test_prefixed_chromosome_fails_decode_comparison(self) -> None:
        # Decoding never restores the "chr" prefix
        _, reason = validate_line(_corpus_line("chr1", 976157, "T", "C"))
        assert reason is not None
        assert "decode mismatch" in reason


class TestValidateCorpus:
    """Tests for whole-corpus validation."""

    def test_all_pass(self, corpus_lines: list[str]) -> None:
        summary = validate_corpus(corpus_lines)
        assert summary.ok
        assert summary.total == 5
        assert summary.compact == 3
        assert summary.hashed == 2

    def test_comments_and_blank_lines_skipped(self, corpus_lines: list[str]) -> None:
        summary = validate_corpus(["# header", ""] + corpus_lines + ["   "])
        assert summary.total == 5

    def test_failure_reported_with_line_number(self, corpus_lines: list[str]) -> None:
        lines = corpus_lines + ["0000000000000000 1 976157 T C"]
        summary = validate_corpus(lines)
        assert not summary.ok
        assert len(summary.failures) == 1
        assert summary.failures[0].line_number == 6

    def test_max_failures(self) -> None:
        lines = ["0000000000000000 1 976157 T C"] * 10
        summary = validate_corpus(lines, max_failures=3)
        assert len(summary.failures) == 3
        assert summary.total == 3

    def test_gzip_corpus(self, tmp_path: Path, corpus_lines: list[str]) -> None:
        path = tmp_path / "vk-test.txt.gz"
        with gzip.open(path, "wt", encoding="ascii") as f:
            f.write("\n".join(corpus_lines) + "\n")
        with open_corpus(path) as f:
            summary = validate_corpus(f)
        assert summary.ok
        assert summary.total == len(VARIANTS)

    def test_plain_corpus(self, tmp_path: Path, corpus_lines: list[str]) -> None:
        path = tmp_path / "vk-test.txt"
        path.write_text("\n".join(corpus_lines) + "\n", encoding="ascii")
        with open_corpus(path) as f:
            summary = validate_corpus(f)
        assert summary.ok

    def test_known_keys(self) -> None:
        summary = validate_corpus(KNOWN_LINES)
        assert summary.ok
        assert summary.compact == 2
        assert summary.hashed == 2
