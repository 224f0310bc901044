"""Command line interface for seqcompare."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from .blast_client import BlastClient, BlastClientConfig, build_blast_request, local_blast_command
from .consensus import alignment_rows
from .errors import ConfigurationError, InvalidReferenceError, SeqCompareError
from .exporter import export_result
from .featurizer import calculate_nucleotide_sequence_stats
from .mutations import aggregate_mutations, build_pymol_script
from .pipeline import AnalysisConfig, ComparisonResult, run_analysis
from .protein import calculate_protein_properties, predict_secondary_structure
from .translation import translate_frames, translate_nucleotide_sequence
from .utils_seq import SequenceType, load_fasta_entries, suggested_filename

LOGGER = logging.getLogger(__name__)

TYPE_CHOICES = [member.value for member in SequenceType]


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--type",
        choices=TYPE_CHOICES,
        help="Sequence type (default: from config, else protein).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to an optional YAML configuration file.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seqcompare",
        description="Compare protein or nucleotide FASTA sequences against a reference.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Diff variants position by position against a reference sequence.",
    )
    compare_parser.add_argument(
        "--reference",
        type=Path,
        required=True,
        help="FASTA file holding the reference (and optionally the variants).",
    )
    compare_parser.add_argument(
        "--variants",
        type=Path,
        help="FASTA file holding the variant sequences.",
    )
    compare_parser.add_argument(
        "--reference-index",
        type=int,
        default=0,
        help="0-based index of the reference among all parsed sequences.",
    )
    compare_parser.add_argument("--out-dir", type=Path, help="Directory for result files.")
    compare_parser.add_argument(
        "--pymol",
        action="store_true",
        help="Print a PyMOL macro coloring mutation frequency (protein only).",
    )
    _add_common(compare_parser)

    align_parser = subparsers.add_parser(
        "align",
        help="Pad every sequence to a common length and print the consensus.",
    )
    align_parser.add_argument("--input", type=Path, required=True, help="FASTA input file.")
    align_parser.add_argument("--out-dir", type=Path, help="Directory for result files.")
    _add_common(align_parser)

    translate_parser = subparsers.add_parser(
        "translate",
        help="Translate nucleotide sequences with the standard genetic code.",
    )
    translate_parser.add_argument("--input", type=Path, required=True, help="FASTA input file.")
    frame_group = translate_parser.add_mutually_exclusive_group()
    frame_group.add_argument(
        "--frame",
        type=int,
        default=0,
        help="Reading frame offset (0, 1 or 2).",
    )
    frame_group.add_argument(
        "--all-frames",
        action="store_true",
        help="Translate all three forward frames.",
    )

    stats_parser = subparsers.add_parser(
        "stats",
        help="Print per-sequence composition or physicochemical estimates.",
    )
    stats_parser.add_argument("--input", type=Path, required=True, help="FASTA input file.")
    _add_common(stats_parser)

    blast_parser = subparsers.add_parser(
        "blast",
        help="Prepare (or submit) an NCBI BLAST search for one sequence.",
    )
    blast_parser.add_argument("--input", type=Path, required=True, help="FASTA input file.")
    blast_parser.add_argument(
        "--index",
        type=int,
        default=0,
        help="0-based index of the sequence to search.",
    )
    blast_parser.add_argument(
        "--submit",
        action="store_true",
        help="Submit to NCBI web BLAST instead of printing a local BLAST+ command.",
    )
    _add_common(blast_parser)
    return parser


def _load_config(path: Path | None) -> dict:
    if path is None:
        return {}
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _resolve_path(value: str | Path | None) -> Path | None:
    if value is None:
        return None
    return Path(value).expanduser()


def _resolve_type(args: argparse.Namespace, raw_config: dict) -> SequenceType:
    value = getattr(args, "type", None) or raw_config.get("sequence_type") or "protein"
    return SequenceType(str(value).strip().lower())


def _finish_run(result: ComparisonResult, out_dir: Path | None) -> None:
    if out_dir is None:
        return
    paths = export_result(result, out_dir)
    lines = ["Outputs:"]
    for label, path in paths.items():
        lines.append(f"  - {label}: {path}")
    print("\n".join(lines))


def _compare_command(args: argparse.Namespace) -> int:
    raw_config = _load_config(args.config)
    sequence_type = _resolve_type(args, raw_config)
    reference_text = args.reference.read_text(encoding="utf-8")
    variant_text = args.variants.read_text(encoding="utf-8") if args.variants else ""

    result = run_analysis(
        reference_text,
        variant_text,
        AnalysisConfig(
            sequence_type=sequence_type,
            no_reference_mode=False,
            reference_index=args.reference_index,
        ),
    )
    _print_comparison(result)
    if args.pymol:
        if sequence_type is SequenceType.PROTEIN:
            print(build_pymol_script(aggregate_mutations(result.reference, result.variants)))
        else:
            LOGGER.warning("PyMOL scripts are only generated for protein comparisons.")
    _finish_run(result, _resolve_path(args.out_dir or raw_config.get("out_dir")))
    return 0


def _align_command(args: argparse.Namespace) -> int:
    raw_config = _load_config(args.config)
    sequence_type = _resolve_type(args, raw_config)
    result = run_analysis(
        args.input.read_text(encoding="utf-8"),
        "",
        AnalysisConfig(sequence_type=sequence_type, no_reference_mode=True),
    )
    rows = alignment_rows(result)
    width = max(len(entry.header) for entry in rows)
    for entry in rows:
        print(f"{entry.header.ljust(width)}  {entry.sequence}")
    _finish_run(result, _resolve_path(args.out_dir or raw_config.get("out_dir")))
    return 0


def _translate_command(args: argparse.Namespace) -> int:
    entries = load_fasta_entries(args.input, SequenceType.NUCLEOTIDE)
    for entry in entries:
        if args.all_frames:
            for frame, protein in translate_frames(entry.sequence).items():
                print(f">{entry.header} frame={frame}\n{protein}")
        else:
            protein = translate_nucleotide_sequence(entry.sequence, args.frame)
            print(f">{entry.header} frame={args.frame}\n{protein}")
    return 0


def _stats_command(args: argparse.Namespace) -> int:
    raw_config = _load_config(args.config)
    sequence_type = _resolve_type(args, raw_config)
    entries = load_fasta_entries(args.input, sequence_type)
    if sequence_type is SequenceType.NUCLEOTIDE:
        for entry in entries:
            stats = calculate_nucleotide_sequence_stats(entry.sequence, entry.header)
            print(
                f"{stats.header}: length={stats.length} GC={stats.gc_content:.2f}% "
                f"AT={stats.at_content:.2f}% skew={stats.gc_skew:.3f} N={stats.n_count}"
            )
        return 0

    for entry in entries:
        props = calculate_protein_properties(entry.sequence)
        structure = predict_secondary_structure(entry.sequence)
        print(
            f"{entry.header}: MW={props.molecular_weight:.2f} pI~{props.isoelectric_point:.2f} "
            f"GRAVY={props.gravy:.3f} instability={props.instability_index:.1f} "
            f"charge={props.net_charge:+.1f} helix={structure.helix}% "
            f"sheet={structure.sheet}% coil={structure.coil}%"
        )
    return 0


def _blast_command(args: argparse.Namespace) -> int:
    raw_config = _load_config(args.config)
    sequence_type = None
    if args.type or raw_config.get("sequence_type"):
        sequence_type = _resolve_type(args, raw_config)
    entries = load_fasta_entries(args.input, sequence_type or SequenceType.PROTEIN)
    if not 0 <= args.index < len(entries):
        raise InvalidReferenceError(
            f"Sequence index {args.index} out of range ({len(entries)} parsed)."
        )
    entry = entries[args.index]
    request = build_blast_request(entry, sequence_type)

    if not args.submit:
        query_path = suggested_filename(entry)
        print(request.query, end="")
        print(f"# Save as {query_path} and run: {local_blast_command(request, query_path)}")
        return 0

    blast_cfg = raw_config.get("blast") or {}
    email = (blast_cfg.get("email") or "").strip()
    tool = (blast_cfg.get("tool") or "").strip()
    if not email:
        raise ConfigurationError("`blast.email` must be set in the configuration file.")
    if not tool:
        raise ConfigurationError("`blast.tool` must be set in the configuration file.")

    client = BlastClient(
        BlastClientConfig(
            email=email,
            tool=tool,
            rate_limit_sec=float(blast_cfg.get("rate_limit_sec", 10.0)),
            cache_dir=_resolve_path(raw_config.get("cache_dir")),
        )
    )
    rid = client.submit(request)
    print(f"Submitted {entry.header} to NCBI {request.program.upper()} (RID {rid})")
    return 0


def _print_comparison(result: ComparisonResult) -> None:
    lines = [f"Reference: {result.reference.header} ({len(result.reference.sequence)} residues)"]
    for variant in result.variants:
        lines.append(
            f"{variant.header}: identity={variant.identity:.1f}% "
            f"differences={len(variant.differences)}"
        )
        if variant.differences:
            lines.append(f"  {' '.join(variant.differences)}")

    summary = result.nucleotide_summary
    if summary is not None:
        for comparison in summary.comparisons:
            ratio = comparison.transition_transversion_ratio
            lines.append(
                f"{comparison.variant_header}: transitions={comparison.transitions} "
                f"transversions={comparison.transversions} gaps={comparison.gaps} "
                f"ambiguous={comparison.ambiguous} "
                f"Ts/Tv={'n/a' if ratio is None else f'{ratio:.2f}'} "
                f"GC delta={comparison.gc_delta:+.2f}"
            )
    print("\n".join(lines))


COMMANDS = {
    "compare": _compare_command,
    "align": _align_command,
    "translate": _translate_command,
    "stats": _stats_command,
    "blast": _blast_command,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    try:
        return handler(args)
    except SeqCompareError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
