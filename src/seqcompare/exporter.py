"""Export helpers for FASTA, CSV, and JSONL outputs of an analysis run."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Iterable, Sequence

import pandas as pd

from .consensus import alignment_rows
from .mutations import aggregate_mutations
from .pipeline import ComparisonResult, protein_report
from .utils_seq import SequenceEntry, SequenceType

LOGGER = logging.getLogger(__name__)

FASTA_LINE_WIDTH = 80


def write_fasta(entries: Sequence[SequenceEntry], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        for entry in entries:
            handle.write(f">{entry.header}\n")
            for i in range(0, len(entry.sequence), FASTA_LINE_WIDTH):
                handle.write(entry.sequence[i : i + FASTA_LINE_WIDTH] + "\n")
    return path


def write_csv(rows: Iterable[dict], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    frame = pd.DataFrame(list(rows))
    frame.to_csv(path, index=False)
    return path


def write_jsonl(rows: Iterable[dict], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        for row in rows:
            handle.write(json.dumps(row, ensure_ascii=False))
            handle.write("\n")
    return path


def difference_rows(result: ComparisonResult) -> list[dict]:
    return [
        {
            "header": variant.header,
            "length": len(variant.sequence),
            "identity": round(variant.identity, 4),
            "difference_count": len(variant.differences),
            "differences": " ".join(variant.differences),
        }
        for variant in result.variants
    ]


def nucleotide_stat_rows(result: ComparisonResult) -> tuple[list[dict], list[dict]]:
    summary = result.nucleotide_summary
    if summary is None:
        return [], []
    stats_rows = []
    for stats in summary.sequences:
        row = {
            "header": stats.header,
            "length": stats.length,
            "gc_content": round(stats.gc_content, 4),
            "at_content": round(stats.at_content, 4),
            "gc_skew": round(stats.gc_skew, 5),
            "n_count": stats.n_count,
        }
        row.update({f"count_{base}": count for base, count in stats.base_counts.items()})
        stats_rows.append(row)
    comparison_rows = [asdict(comparison) for comparison in summary.comparisons]
    return stats_rows, comparison_rows


def protein_rows(result: ComparisonResult) -> list[dict]:
    rows = []
    for entry, properties, structure in protein_report(result):
        rows.append(
            {
                "header": entry.header,
                "length": len(entry.sequence),
                **asdict(properties),
                "helix": structure.helix,
                "sheet": structure.sheet,
                "coil": structure.coil,
            }
        )
    return rows


def export_result(result: ComparisonResult, out_dir: Path) -> Dict[str, str]:
    """Write every table that applies to the run and return their paths by label."""
    outputs: Dict[str, Path] = {
        "alignment": write_fasta(alignment_rows(result), out_dir / "alignment.fasta"),
    }

    if not result.no_reference_mode:
        outputs["differences"] = write_csv(
            difference_rows(result), out_dir / "differences.csv"
        )

    if result.sequence_type is SequenceType.NUCLEOTIDE:
        stats_rows, comparison_rows = nucleotide_stat_rows(result)
        outputs["nucleotide_stats"] = write_csv(stats_rows, out_dir / "nucleotide_stats.csv")
        if comparison_rows:
            outputs["nucleotide_comparisons"] = write_csv(
                comparison_rows, out_dir / "nucleotide_comparisons.csv"
            )
    else:
        outputs["protein_properties"] = write_csv(
            protein_rows(result), out_dir / "protein_properties.csv"
        )
        if not result.no_reference_mode:
            mutations = aggregate_mutations(result.reference, result.variants)
            outputs["mutations"] = write_jsonl(
                (item.as_row() for item in mutations), out_dir / "mutations.jsonl"
            )

    LOGGER.info("Wrote %s output file(s) to %s", len(outputs), out_dir)
    return {label: str(path) for label, path in outputs.items()}
