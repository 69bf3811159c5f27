# dtsearch/cli.py
import logging
import sys
from typing import List, Optional

import typer

from dtsearch import __version__
from dtsearch.columns import apply_overrides, build_catalog, importance_overrides
from dtsearch.config import RunOptions, load_settings
from dtsearch.exceptions import ConfigError, SearchClientError
from dtsearch.formatting import term_width
from dtsearch.search_client import SearchClient
from dtsearch.ui import configure_logging, console, print_error, print_info, print_warn, search_error_to_str
from dtsearch.views import build_table, print_table

logger = logging.getLogger(__name__)

app = typer.Typer(help="Search npm for packages with TypeScript types.", add_completion=False)

UNTYPED_HINT = "Try dtsearch -u to include packages without types."


def _version_callback(value: bool):
    if value:
        console.print(f"dtsearch {__version__}")
        raise typer.Exit()


@app.command()
def search(
    query: List[str] = typer.Argument(..., help="Search terms"),
    npm: bool = typer.Option(False, "--npm", help="Output npm install commands"),
    yarn: bool = typer.Option(False, "--yarn", "-y", help="Output yarn add commands"),
    num: Optional[int] = typer.Option(None, "--num", "-n", min=1, help="Maximum number of results to show [default: 10]"),
    exact: bool = typer.Option(False, "--exact", "-e", help="Save exact version"),
    repo: bool = typer.Option(False, "--repo", help="Show repo URL, even if package specifies a homepage"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    bundled: bool = typer.Option(False, "--bundled", help="Only show packages with bundled types"),
    dt: bool = typer.Option(False, "--dt", help="Only show packages with types on DefinitelyTyped (@types)"),
    untyped: bool = typer.Option(False, "--untyped", "-u", help="Search all packages, even those without type declarations"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
):
    """
    Search npm for QUERY and print the best-fitting table for this terminal.
    """
    configure_logging(debug)
    options = RunOptions(
        npm=npm, yarn=yarn, exact=exact, repo=repo, debug=debug,
        bundled=bundled, dt=dt, untyped=untyped,
    )

    try:
        options.validate()
        settings = load_settings()
        settings.require_credentials()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=e.exit_code)

    catalog = apply_overrides(build_catalog(exact=exact), importance_overrides(options))
    limit = num or settings.default_num

    try:
        client = SearchClient(settings.app_id, settings.api_key, settings.index_name)
        hits = client.search(" ".join(query), num=limit, type_filter=options.type_filter)
    except SearchClientError as e:
        print_error(search_error_to_str(e))
        raise typer.Exit(code=e.exit_code)

    if not hits:
        print_warn(f"No results. {UNTYPED_HINT}")
        return

    width = term_width()
    logger.debug("Rendering %d hits for a %d column terminal", len(hits), width)
    print_table(console, build_table(catalog, hits, width))

    if len(hits) < limit:
        console.print()
        print_info(f"Only {len(hits)} result{'s' if len(hits) > 1 else ''}. {UNTYPED_HINT}")


def main():
    # Show help when no query provided
    if len(sys.argv) == 1:
        sys.argv.append("--help")
    app()


if __name__ == "__main__":
    main()
