#!/usr/bin/env python3
"""
DI Graph Analysis CLI

Static analysis of dependency-injection component facts.  Reads the JSON
facts document produced by a front end and reports circular dependencies,
ambiguous providers, singleton violations, qualifier mismatches and
unresolved dependencies, followed by the accuracy report.

Pipeline:
    1. Graph Construction   → component nodes, dependency edges
    2. Issue Detection      → detectors in priority order, deduplicated
    3. Issue Validation     → confidence scores, true/false positives
    4. Accuracy Metrics     → precision / recall / F1 and report

Usage:
    python bin/analyze_components.py facts.json
    python bin/analyze_components.py facts.json --threshold 0.5 --json
    python bin/analyze_components.py facts.json --no-validation --fail-on-error
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

import argparse
import json
import logging
from dataclasses import replace

from mittens.analysis.models import AnalysisResult
from mittens.analysis.service import AnalysisService
from mittens.cli.display import Colors, colored, display_analysis_result
from mittens.cli.loader import ComponentFactsError, load_components
from mittens.config.settings import AnalysisSettings


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="analyze_components",
        description="Static analysis of dependency-injection component facts.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s facts.json                       Analyze and print a report
  %(prog)s facts.json --json                Print the result as JSON
  %(prog)s facts.json --threshold 0.5       Stricter validation threshold
  %(prog)s facts.json --expected 12         Use a known issue count for recall
""",
    )
    parser.add_argument("facts", metavar="FACTS", help="Component facts JSON file")

    analysis = parser.add_argument_group("Analysis")
    analysis.add_argument(
        "--threshold", "-t", type=float, default=None,
        help="Minimum confidence for a true positive (default: MITTENS_CONFIDENCE_THRESHOLD or 0.3)",
    )
    analysis.add_argument("--no-validation", action="store_true", help="Skip issue validation")
    analysis.add_argument(
        "--expected", "-e", type=int, default=None,
        help="Known number of real issues (default: structural estimate)",
    )
    analysis.add_argument(
        "--fail-on-error", action="store_true",
        help="Exit with status 2 when ERROR issues are found",
    )

    output = parser.add_argument_group("Output")
    output.add_argument("--json", action="store_true", help="Print results as JSON to stdout")
    output.add_argument("--quiet", "-q", action="store_true", help="Suppress console display")
    output.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


# ---------------------------------------------------------------------------
# Analysis Logic
# ---------------------------------------------------------------------------

def resolve_settings(args: argparse.Namespace) -> AnalysisSettings:
    """Environment settings overridden by explicit command line flags."""
    settings = AnalysisSettings.from_env()
    if args.threshold is not None:
        settings = replace(settings, confidence_threshold=args.threshold)
    if args.no_validation:
        settings = replace(settings, validation_enabled=False)
    return settings


def run_analysis(args: argparse.Namespace) -> AnalysisResult:
    project_name, components = load_components(args.facts)
    service = AnalysisService(settings=resolve_settings(args))
    return service.analyze(components, project_name=project_name, expected_issues=args.expected)


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    log_level = (
        logging.DEBUG if args.verbose or AnalysisSettings.from_env().detailed_logging
        else logging.WARNING if args.quiet or args.json
        else logging.INFO
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        result = run_analysis(args)
    except (OSError, ComponentFactsError) as exc:
        print(colored(f"Error: {exc}", Colors.RED), file=sys.stderr)
        if args.verbose:
            logging.exception("Analysis failed")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    elif not args.quiet:
        display_analysis_result(result)

    if args.fail_on_error and result.has_errors():
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
