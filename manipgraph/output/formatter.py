"""Output formatting for validation results."""

import json
from typing import Literal

from ..path_validation.reports import PathValidationReport
from ..paths.path import Path
from ..validators.base import Severity, ValidationIssue, ValidationResult


def format_validation_result(
    result: ValidationResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a structural validation result for output.

    Args:
        result: The validation result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(result)
    return _format_text(result)


def _format_text(result: ValidationResult) -> str:
    """Format result as human-readable text."""
    lines: list[str] = []

    errors = result.errors
    warnings = result.warnings

    lines.append("ERRORS:")
    if errors:
        for issue in errors:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")

    lines.append("WARNINGS:")
    if warnings:
        for issue in warnings:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    # Summary
    lines.append("")
    if result.is_valid:
        if warnings:
            lines.append(f"Validation passed with {len(warnings)} warning(s)")
        else:
            lines.append("Validation passed")
    else:
        lines.append(
            f"Validation failed: {len(errors)} error(s), {len(warnings)} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    """Format a single issue as text."""
    location = ""
    if issue.edge:
        location = f"[{issue.edge}] "
    elif issue.state:
        location = f"[{issue.state}] "

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code}: {location}{issue.message}"


def _format_json(result: ValidationResult) -> str:
    """Format result as JSON."""
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "state": issue.state,
                "edge": issue.edge,
                "details": issue.details,
            }
            for issue in result.issues
        ],
    }
    return json.dumps(data, indent=2)


def _report_data(report: PathValidationReport | None) -> dict | None:
    if report is None:
        return None
    return {
        "code": report.code.value,
        "message": report.message,
        "parameter": report.parameter,
        "edge": report.edge,
        "state": report.state,
        "details": report.details,
        "cause": _report_data(report.cause),
    }


def format_path_validation(
    path: Path,
    success: bool,
    valid_part: Path,
    report: PathValidationReport | None,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format the outcome of validating a path.

    Args:
        path: The validated path.
        success: Whether the whole path is valid.
        valid_part: The longest valid part.
        report: Why the path was cut, if it was.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        data = {
            "valid": success,
            "time_range": list(path.time_range),
            "valid_time_range": list(valid_part.time_range),
            "report": _report_data(report),
        }
        return json.dumps(data, indent=2)

    start, end = valid_part.time_range
    lines = [f"Valid part: [{start:g}, {end:g}] of [{path.time_range[0]:g}, {path.time_range[1]:g}]"]
    while report is not None:
        lines.append(f"  ✘ {report}")
        report = report.cause
    lines.append("")
    lines.append("Path is valid" if success else "Path is not valid")
    return "\n".join(lines)
