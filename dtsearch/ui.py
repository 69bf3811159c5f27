# dtsearch/ui.py
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from dtsearch.exceptions import SearchClientError

console = Console()
err_console = Console(stderr=True)


def configure_logging(debug: bool = False):
    """Route the package's loggers to stderr through rich."""
    logger = logging.getLogger("dtsearch")
    logger.handlers[:] = [RichHandler(console=err_console, show_path=False, markup=False)]
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False
    return logger


def print_info(msg: str):
    console.print(f"[cyan]ℹ[/] {msg}")


def print_warn(msg: str):
    console.print(f"[yellow]⚠[/] {msg}")


def print_error(msg: str):
    err_console.print(Panel.fit(Text(msg, style="bold red"), title="Error", border_style="red"))


def search_error_to_str(err: Exception) -> str:
    """Short message for a failed search, with the HTTP status when there is one."""
    msg = str(err).strip() or err.__class__.__name__
    status = err.status if isinstance(err, SearchClientError) else None
    if status == 403:
        return f"{msg}\nCheck DTSEARCH_APP_ID and DTSEARCH_API_KEY."
    if status:
        return f"{msg} (HTTP {status})"
    return msg
