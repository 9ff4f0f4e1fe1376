"""
Command-line interface.

Usage:
    scribefix correct page.txt
    scribefix correct page.txt --demo --format json -o page.json
    scribefix compare draft.txt final.txt --mode lines
    scribefix stats page.txt
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from tabulate import tabulate

from scribefix.compare import diff, diff_stats, format_report, format_stats_table, report_to_dict
from scribefix.config import CorrectionConfig
from scribefix.correction import TextCorrector, group_by_category, load_rule_table
from scribefix.exceptions import ScribeFixError
from scribefix.models import CorrectionResult, DiffMode
from scribefix.statistics import DocumentStatistics, compute_statistics

logger = logging.getLogger(__name__)


def _read(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ScribeFixError(f"Cannot read {path}: {e}") from e


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        logger.info("Wrote %s", output)
    else:
        print(text, end="" if text.endswith("\n") else "\n")


# =============================================================================
# FORMATTERS
# =============================================================================


def format_correction_summary(result: CorrectionResult) -> str:
    """Corrected text followed by a per-category summary table."""
    lines = [result.text, ""]
    if not result.corrections:
        lines.append("No corrections.")
        return "\n".join(lines) + "\n"

    lines.append("=" * 60)
    lines.append(f"Corrections: {result.change_count}")
    lines.append("=" * 60)
    rows = [
        [c.offset if c.offset is not None else "-", c.category, c.original, c.corrected, c.message]
        for c in result.corrections
    ]
    lines.append(tabulate(rows, headers=["Offset", "Category", "Original", "Corrected", "Message"]))
    lines.append("")
    summary = [[category, len(items)] for category, items in group_by_category(result.corrections).items()]
    lines.append(tabulate(summary, headers=["Category", "Count"], tablefmt="simple"))
    return "\n".join(lines) + "\n"


def format_statistics(stats: DocumentStatistics) -> str:
    """Terminal table of document statistics."""
    rows = [
        ["Characters", stats.char_count],
        ["Characters (no spaces)", stats.char_count_no_spaces],
        ["Words", stats.word_count],
        ["Unique words", f"{stats.unique_word_count} ({stats.unique_word_percentage}%)"],
        ["Lines", stats.line_count],
        ["Paragraphs", stats.paragraph_count],
        ["Sentences", stats.sentence_count],
        ["Reading time (min)", stats.reading_time_minutes],
    ]
    lines = [tabulate(rows, headers=["Metric", "Value"], tablefmt="simple"), ""]
    frequent = stats.most_frequent()
    if frequent:
        lines.append(tabulate(frequent, headers=["Word", "Count"], tablefmt="simple"))
        lines.append("")
    return "\n".join(lines)


# =============================================================================
# COMMANDS
# =============================================================================


def cmd_correct(args: argparse.Namespace) -> str:
    config = CorrectionConfig.demo() if args.demo else CorrectionConfig()
    config.order = args.order
    config.validate()

    rules = load_rule_table(args.rules) if args.rules else None
    contextual = load_rule_table(args.contextual_rules, contextual=True) if args.contextual_rules else None

    result = TextCorrector(config=config, rules=rules, contextual_rules=contextual).correct(_read(args.file))
    if args.format == "json":
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n"
    return format_correction_summary(result)


def cmd_compare(args: argparse.Namespace) -> str:
    a = _read(args.file_a)
    b = _read(args.file_b)
    segments = diff(a, b, args.mode)

    if args.format == "json":
        report = report_to_dict(segments, args.mode, diff_stats(a, b, segments), args.file_a, args.file_b)
        return json.dumps(report, indent=2, ensure_ascii=False) + "\n"
    if args.format == "cli":
        return format_stats_table(diff_stats(a, b, segments), title=f"{args.file_a} vs {args.file_b}")
    return format_report(segments, args.mode, args.file_a, args.file_b)


def cmd_stats(args: argparse.Namespace) -> str:
    stats = compute_statistics(_read(args.file))
    if args.format == "json":
        return json.dumps(stats.to_dict(), indent=2, ensure_ascii=False) + "\n"
    return format_statistics(stats)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scribefix",
        description="Rule-based text correction and document comparison",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    correct = sub.add_parser("correct", help="Correct a text file")
    correct.add_argument("file", help="Text file to correct")
    correct.add_argument("--demo", action="store_true", help="Always suggest something")
    correct.add_argument("--order", choices=["rule", "offset"], default="rule", help="Correction order")
    correct.add_argument("--rules", help="YAML base rule table")
    correct.add_argument("--contextual-rules", help="YAML contextual rule table")
    correct.add_argument("--format", choices=["cli", "json"], default="cli")
    correct.add_argument("-o", "--output", help="Write to file instead of stdout")
    correct.set_defaults(func=cmd_correct)

    compare = sub.add_parser("compare", help="Compare two text files")
    compare.add_argument("file_a", help="Original document")
    compare.add_argument("file_b", help="New document")
    compare.add_argument("--mode", choices=[m.value for m in DiffMode], default="words")
    compare.add_argument("--format", choices=["text", "json", "cli"], default="text")
    compare.add_argument("-o", "--output", help="Write to file instead of stdout")
    compare.set_defaults(func=cmd_compare)

    stats = sub.add_parser("stats", help="Show document statistics")
    stats.add_argument("file", help="Text file")
    stats.add_argument("--format", choices=["cli", "json"], default="cli")
    stats.set_defaults(func=cmd_stats, output=None)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        _emit(args.func(args), args.output)
    except ScribeFixError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
