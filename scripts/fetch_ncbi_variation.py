#!/usr/bin/env python3
"""Build a variant key corpus from NCBI Variation Services rsID lookups.

For each rsID the GRCh38 chromosome placement is fetched, every non-reference
SPDI allele is converted to VCF fields, and each becomes one corpus line::

    <hex variant key> <chrom> <pos> <ref> <alt>

Position and alleles are the VCF ones, so insertions and deletions carry their
anchor base. Keys are produced by ferro-variantkey, so the output is a
regression fixture for ``scripts/validate_corpus.py``.

API Documentation: https://api.ncbi.nlm.nih.gov/variation/v0/

Key endpoints:
- /refsnp/{rsid} - Get variant info by rsID
- /spdi/{spdi}/vcf_fields - Convert SPDI to VCF CHROM, POS, REF and ALT

Rate Limit: 3 requests/second

Usage:
    python scripts/fetch_ncbi_variation.py [--output OUTPUT_PATH]
"""

import argparse
import json
import re
import time
import urllib.parse
from pathlib import Path
from typing import Any

import requests

import ferro_variantkey

NCBI_API = "https://api.ncbi.nlm.nih.gov/variation/v0"
RATE_LIMIT_DELAY = 0.5  # seconds between requests

ASSEMBLY_PREFIX = "GRCh38"

# RefSeq chromosome accessions: NC_000001-NC_000022 autosomes, 23 = X, 24 = Y
REFSEQ_CHROMOSOME = re.compile(r"^NC_0000(\d\d)\.\d+$")
REFSEQ_MITOCHONDRION = "NC_012920.1"

# Known rsIDs covering SNVs, deletions, insertions and multi-base substitutions
TEST_RSIDS = [
    "rs121913529",  # BRAF V600E
    "rs80357906",  # BRCA1 185delAG
    "rs113993960",  # CFTR F508del
    "rs28934578",  # TP53 R175H
    "rs63750447",  # BRCA2 6174delT
    "rs121913527",  # BRAF V600K
    "rs121913530",  # BRAF K601E
    "rs121912651",  # KRAS G12D
    "rs121913535",  # KRAS G12V
    "rs121913237",  # EGFR L858R
    "rs121908120",  # TP53 R248Q
    "rs121912666",  # TP53 R273H
    "rs121913279",  # PIK3CA H1047R
    "rs121913273",  # PIK3CA E545K
    "rs587776544",  # BRCA1 C61G
    "rs80358550",  # BRCA2 S1982Rfs*22
    "rs11571833",  # BRCA2 K3326*
    "rs1042522",  # TP53 P72R (common polymorphism)
    "rs334",  # HBB sickle cell
    "rs6025",  # F5 Leiden
]


def refseq_to_chrom(seq_id: str) -> str | None:
    """Map a RefSeq chromosome accession to a bare chromosome label.

    Returns:
        The label (e.g. "1", "X", "MT") or None for non-chromosome sequences
    """
    if seq_id == REFSEQ_MITOCHONDRION:
        return "MT"
    match = REFSEQ_CHROMOSOME.match(seq_id)
    if match is None:
        return None
    number = int(match.group(1))
    if number == 23:
        return "X"
    if number == 24:
        return "Y"
    if 1 <= number <= 22:
        return str(number)
    return None


def get_rsid_info(rsid: str) -> dict[str, Any]:
    """Get variant info by rsID.

    Args:
        rsid: dbSNP rsID (e.g., rs121913529)

    Returns:
        API response dict, or a dict with an "error" key on failure
    """
    rsid_num = rsid.replace("rs", "")
    url = f"{NCBI_API}/refsnp/{rsid_num}"

    try:
        response = requests.get(url, timeout=30)
    except requests.RequestException as e:
        return {"error": str(e), "input": rsid}
    if response.status_code != 200:
        return {"error": f"HTTP {response.status_code}", "input": rsid}
    return response.json()


def _is_assembly_placement(placement: dict[str, Any]) -> bool:
    annot = placement.get("placement_annot", {})
    for traits in annot.get("seq_id_traits_by_assembly", []):
        if traits.get("assembly_name", "").startswith(ASSEMBLY_PREFIX):
            return True
    return False


def extract_spdi_alleles(info: dict[str, Any]) -> list[dict[str, Any]]:
    """Extract the GRCh38 chromosome SPDI alleles from a refsnp record.

    Reference alleles (deleted == inserted) are skipped.
    """
    spdis = []
    snapshot = info.get("primary_snapshot_data", {})
    for placement in snapshot.get("placements_with_allele", []):
        if not _is_assembly_placement(placement):
            continue
        for allele in placement.get("alleles", []):
            spdi = allele.get("allele", {}).get("spdi")
            if not spdi or spdi["deleted_sequence"] == spdi["inserted_sequence"]:
                continue
            spdis.append(spdi)
    return spdis


def spdi_string(spdi: dict[str, Any]) -> str:
    """Format a refsnp SPDI object as ``seq_id:position:deleted:inserted``."""
    return (
        f"{spdi['seq_id']}:{spdi['position']}:"
        f"{spdi['deleted_sequence']}:{spdi['inserted_sequence']}"
    )


def spdi_to_vcf(spdi: str) -> dict[str, Any]:
    """Convert SPDI to VCF fields using NCBI API.

    Args:
        spdi: SPDI variant representation

    Returns:
        API response dict, or a dict with an "error" key on failure
    """
    encoded = urllib.parse.quote(spdi, safe="")
    url = f"{NCBI_API}/spdi/{encoded}/vcf_fields"

    try:
        response = requests.get(url, timeout=30)
    except requests.RequestException as e:
        return {"error": str(e), "input": spdi}
    if response.status_code != 200:
        return {"error": f"HTTP {response.status_code}", "input": spdi}
    return response.json()


def vcf_to_corpus_line(chrom: str, vcf: dict[str, Any]) -> str | None:
    """Encode one VCF fields response as a corpus line, or None if it cannot be keyed.

    ``chrom`` is the bare label of the SPDI sequence; the response's own CHROM
    is a RefSeq accession.
    """
    fields = vcf.get("data", {})
    try:
        pos = int(fields["pos"])
        ref = fields["ref"]
        alt = fields["alt"]
    except (KeyError, TypeError, ValueError):
        print(f"  Skipping malformed VCF fields: {vcf}")
        return None
    # The corpus format is whitespace-separated, so empty alleles cannot be written
    if not ref or not alt:
        return None
    try:
        key = ferro_variantkey.encode(chrom, pos, ref, alt)
    except ferro_variantkey.VariantKeyError as e:
        print(f"  Skipping {chrom}:{pos}:{ref}:{alt}: {e}")
        return None
    return f"{key:016x} {chrom} {pos} {ref} {alt}"


def fetch_corpus_lines(rsids: list[str]) -> tuple[list[str], list[dict[str, Any]]]:
    """Fetch rsIDs and convert their alleles to corpus lines.

    Returns:
        Tuple of (corpus lines, error records)
    """
    lines: list[str] = []
    errors: list[dict[str, Any]] = []

    for i, rsid in enumerate(rsids):
        print(f"[{i + 1}/{len(rsids)}] rsID: {rsid}")

        info = get_rsid_info(rsid)
        if "error" in info:
            print(f"  Error: {info['error']}")
            errors.append(info)
        else:
            for spdi in extract_spdi_alleles(info):
                chrom = refseq_to_chrom(spdi["seq_id"])
                if chrom is None:
                    continue

                time.sleep(RATE_LIMIT_DELAY)
                vcf = spdi_to_vcf(spdi_string(spdi))
                if "error" in vcf:
                    print(f"  Error: {vcf['error']}")
                    errors.append(vcf)
                    continue

                line = vcf_to_corpus_line(chrom, vcf)
                if line is not None:
                    lines.append(line)

        time.sleep(RATE_LIMIT_DELAY)

        if (i + 1) % 10 == 0:
            print(f"  Progress: {i + 1}/{len(rsids)} complete")

    return lines, errors


def write_corpus(lines: list[str], errors: list[dict[str, Any]], output_path: Path) -> None:
    """Write the corpus file, and an error report next to it if needed."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(f"# source: NCBI Variation Services API ({NCBI_API})\n")
        f.write(f"# generated: {time.strftime('%Y-%m-%d %H:%M:%S UTC', time.gmtime())}\n")
        for line in sorted(set(lines)):
            f.write(line + "\n")

    print(f"\nGenerated corpus: {output_path} ({len(set(lines))} variants)")

    if errors:
        error_path = output_path.with_suffix(".errors.json")
        with open(error_path, "w") as f:
            json.dump(errors, f, indent=2)
        print(f"Failed lookups: {len(errors)} (see {error_path})")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Build a variant key corpus from NCBI Variation Services"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("tests/fixtures/ncbi_variation.txt"),
        help="Output corpus path",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=0,
        help="Limit number of rsIDs (0 = all)",
    )

    args = parser.parse_args()

    rsids = TEST_RSIDS
    if args.limit > 0:
        rsids = rsids[: args.limit]

    print("NCBI Variation Services API")
    print(f"Rate limit: {RATE_LIMIT_DELAY}s between requests\n")

    print(f"=== rsID Lookups ({len(rsids)} IDs) ===")
    lines, errors = fetch_corpus_lines(rsids)
    write_corpus(lines, errors, args.output)


if __name__ == "__main__":
    main()
