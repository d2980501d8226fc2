"""Rich console utilities for styled terminal output.

This module provides a consistent interface for all user-facing output.
Messages go to stderr so generated manifests on stdout stay pipeable.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from gateway_secrets.models import ORIGIN_SECRET_NAME_LABEL_KEY, ORIGIN_SECRET_NAMESPACE_LABEL_KEY, Credential

# Custom theme with consistent colors
_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "highlight": "cyan bold",
        "muted": "dim",
    }
)

# Shared console instance, writing to stderr
console = Console(theme=_THEME, stderr=True)


def info(message: str) -> None:
    """Print an informational message.

    Args:
        message: The message to display.

    """
    console.print(f"[info]ℹ[/info] {message}")


def success(message: str) -> None:
    """Print a success message.

    Args:
        message: The message to display.

    """
    console.print(f"[success]✓[/success] {message}")


def warning(message: str) -> None:
    """Print a warning message.

    Args:
        message: The message to display.

    """
    console.print(f"[warning]⚠[/warning] {message}")


def error(message: str) -> None:
    """Print an error message.

    Args:
        message: The message to display.

    """
    console.print(f"[error]✗[/error] {message}")


def action(message: str) -> None:
    """Print an action/progress message.

    Args:
        message: The action being performed.

    """
    console.print(f"[info]→[/info] {message}")


def step(message: str) -> None:
    """Print a sub-step message.

    Args:
        message: The step description.

    """
    console.print(f"[muted]•[/muted] {message}")


def highlight(text: str) -> str:
    """Return text wrapped in highlight markup.

    Args:
        text: The text to highlight.

    Returns:
        Text wrapped in Rich markup for highlighting.

    """
    return f"[highlight]{text}[/highlight]"


def summary_panel(title: str, items: dict[str, str]) -> None:
    """Print a summary panel with key-value pairs.

    Args:
        title: Title for the panel.
        items: Dictionary of label -> value pairs to display.

    """
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column(style="cyan")

    for label, value in items.items():
        table.add_row(f"{label}:", value)

    console.print(Panel(table, title=f"[bold]{title}[/bold]", border_style="green"))


def secret_table(title: str, secrets: list[Credential]) -> None:
    """Print a table of secrets with their origin.

    Secrets without origin labels are shared wildcard copies.

    Args:
        title: Title for the table.
        secrets: Secrets to list, one row each.

    """
    table = Table(title=title, title_style="bold", border_style="muted")
    table.add_column("Namespace", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Origin")
    table.add_column("Keys", style="muted")

    for secret in secrets:
        origin_name = secret.labels.get(ORIGIN_SECRET_NAME_LABEL_KEY)
        origin_namespace = secret.labels.get(ORIGIN_SECRET_NAMESPACE_LABEL_KEY)
        origin = f"{origin_namespace}/{origin_name}" if origin_name and origin_namespace else "shared"
        table.add_row(secret.namespace, secret.name, origin, ", ".join(sorted(secret.data)))

    console.print(table)
