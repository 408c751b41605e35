"""
Display Module

Terminal display formatting and colorized output for analysis results.
"""

from __future__ import annotations

from typing import List

from mittens.analysis.models import AnalysisResult
from mittens.core.models import Issue, Severity, ValidationStatus


# =============================================================================
# Terminal Colors
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: str, bold: bool = False) -> str:
    """Apply color to text."""
    style = Colors.BOLD if bold else ""
    return f"{style}{color}{text}{Colors.RESET}"


def severity_color(severity: Severity) -> str:
    return {
        Severity.ERROR: Colors.RED,
        Severity.WARNING: Colors.YELLOW,
        Severity.INFO: Colors.BLUE,
    }.get(severity, Colors.RESET)


def print_header(title: str, char: str = "=") -> None:
    width = 70
    print(f"\n{colored(char * width, Colors.CYAN)}")
    print(colored(f" {title}", Colors.CYAN, bold=True))
    print(colored(char * width, Colors.CYAN))


# =============================================================================
# Result Display
# =============================================================================

def format_issue(issue: Issue, index: int) -> List[str]:
    color = severity_color(issue.severity)
    lines = [
        f"{index}. {colored(issue.severity.value, color, bold=True)} {issue.type.value}",
        f"   Component: {issue.component_name}",
        f"   Issue: {issue.message}",
    ]
    if issue.validation_status != ValidationStatus.NOT_VALIDATED:
        lines.append(
            f"   Confidence: {issue.confidence_score:.2f} ({issue.validation_status.value})"
        )
    if issue.suggested_fix:
        fix_lines = issue.suggested_fix.splitlines()
        lines.append(f"   Suggested Fix: {fix_lines[0]}")
        lines.extend(f"      {line}" for line in fix_lines[1:])
    return lines


def display_analysis_result(result: AnalysisResult) -> None:
    summary = result.summary()
    print_header(f"DI Analysis: {result.project_name}")
    print(f"  Components:    {summary.total_components}")
    print(f"  Dependencies:  {summary.total_dependencies}")
    print(f"  Cycles:        {'Yes' if summary.has_cycles else 'No'}")
    print(
        f"  Issues:        {summary.total_issues} "
        f"({colored(str(summary.error_count) + ' errors', Colors.RED)}, "
        f"{colored(str(summary.warning_count) + ' warnings', Colors.YELLOW)}, "
        f"{summary.info_count} info)"
    )

    if result.issues:
        print_header("Issues", "-")
        for i, issue in enumerate(result.issues, start=1):
            for line in format_issue(issue, i):
                print(line)
            print()
    else:
        print(colored("\n  ✓ No issues found", Colors.GREEN))

    if result.report:
        print_header("Accuracy", "-")
        print(result.report)
    if result.trend is not None and result.trend.has_comparison:
        print(f"\n  Trend: {result.trend.trend.value}")
