"""
Result line formatting for the console.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""

from rich.markup import escape

from pwnedaudit.hibp.models import AuditResult, CheckStatus

STATUS_COLORS = {
    CheckStatus.SKIP: "white",
    CheckStatus.VULN: "red",
    CheckStatus.SAFE: "green",
    CheckStatus.ERROR: "yellow",
}


def status_color(status: CheckStatus) -> str:
    """Get color for a check status."""
    return STATUS_COLORS.get(status, "white")


def format_status(
    status: CheckStatus,
    name: str,
    content: str | None,
    index: int,
    total: int,
) -> str:
    """Build a rich-markup result line.

    Example:
        [red][VULN][/red] admin.txt (hunter2) (2 of 7)
    """
    color = status_color(status)
    parts = [f"[{color}]{escape(status.label)}[/{color}]", escape(name)]
    if content is not None:
        parts.append(f"({escape(content)})")
    parts.append(f"({index} of {total})")
    return " ".join(parts)


def format_result(result: AuditResult, show_content: bool = True) -> str:
    """Format an AuditResult, optionally hiding the secret text."""
    content = result.display if show_content else None
    if result.status in (CheckStatus.SKIP, CheckStatus.ERROR) and result.error:
        content = result.error
    return format_status(result.status, result.name, content, result.index, result.total)
