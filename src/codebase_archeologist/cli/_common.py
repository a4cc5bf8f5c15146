"""Shared CLI helpers."""

from rich.console import Console

from ..models import Severity

console = Console()
# Status and errors go to stderr so --json output stays parseable.
err_console = Console(stderr=True)

SEVERITY_STYLES = {
    Severity.CRITICAL: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


def severity_label(severity: Severity) -> str:
    style = SEVERITY_STYLES[severity]
    return f"[{style}]{severity.value}[/{style}]"
