"""Rich-based console output utilities.

Messages carry a bracketed level tag ([ERROR], [INFO], ...) so they stay
readable when colors are stripped, as in CI logs. Errors go to stderr;
everything else goes to stdout. Every tagged message is also logged.
"""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from toolgate import __version__
from toolgate.utils.logging import log_message

custom_theme = Theme(
    {
        "error": "bold red",
        "success": "bold green",
        "warning": "bold yellow",
        "info": "bold blue",
        "header": "bold magenta",
        "step": "bold cyan",
    }
)

console = Console(theme=custom_theme)
console_err = Console(theme=custom_theme, stderr=True)

# style -> (tag, message color)
_LEVELS: dict[str, tuple[str, str]] = {
    "error": ("ERROR", "red"),
    "success": ("SUCCESS", "green"),
    "warning": ("WARNING", "yellow"),
    "info": ("INFO", "cyan"),
}


def _print_tagged(style: str, message: str, target: Console) -> None:
    tag, color = _LEVELS[style]
    # Tool output and user input may contain [brackets]
    target.print(f"[{style}]\\[{tag}][/{style}] [{color}]{escape(message)}[/{color}]")
    log_message(f"{tag}: {message}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    _print_tagged("error", message, console_err)


def print_success(message: str) -> None:
    _print_tagged("success", message, console)


def print_warning(message: str) -> None:
    _print_tagged("warning", message, console)


def print_info(message: str) -> None:
    _print_tagged("info", message, console)


def print_header(title: str) -> None:
    """Print a section header between blank lines."""
    console.print()
    console.print(f"[header]=== {escape(title)} ===[/header]")
    console.print()


def print_step(message: str) -> None:
    console.print(f"[step]➜[/step] {escape(message)}")


def show_version() -> None:
    """Display the version and every catalog tool that has a default minimum."""
    from toolgate.config.settings import Settings
    from toolgate.integrations.tools import build_catalog

    console.print(f"[bold]TOOLGATE[/bold] v{__version__}")
    console.print()
    console.print("Default minimum versions:")
    for requirement in build_catalog(Settings()):
        if requirement.required is not None:
            console.print(f"  - {requirement.name}: >= {requirement.required}")
    console.print()


__all__ = [
    "console",
    "console_err",
    "custom_theme",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    "print_step",
    "show_version",
]
