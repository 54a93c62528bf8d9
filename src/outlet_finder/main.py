# ==============================================================================
#  Copyright 2025 Matthew Pounsett <matt@conundrum.com>
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
# ==============================================================================
"""CLI entry point for outlet-finder."""

import argparse
import logging
import sys

import yaml
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.text import Text

from outlet_finder import __version__
from outlet_finder.exceptions import FeedUnavailable
from outlet_finder.feed import DEFAULT_SOURCE, DEFAULT_TIMEOUT
from outlet_finder.models import QueryResult
from outlet_finder.resolver import TOKEN_SEPARATOR
from outlet_finder.service import OutletFinder

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="outlet-finder",
        description="Find the fewest outlets that stock a list of catalog products.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "query",
        nargs="*",
        metavar="PRODUCT",
        help=(
            "Product ID, slug or URL. Several may be given as separate "
            "arguments or separated by ';'."
        ),
    )
    parser.add_argument(
        "-s",
        "--source",
        default=DEFAULT_SOURCE,
        metavar="FILE_OR_URL",
        help=f"Catalog feed file or HTTP(S) URL (default: {DEFAULT_SOURCE}).",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help=f"Timeout for fetching a remote feed (default: {DEFAULT_TIMEOUT:g}).",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        dest="list_products",
        help="List the products in the catalog.",
    )
    parser.add_argument(
        "-p",
        "--print",
        action="store_true",
        dest="print_table",
        help="Print a table of outlets to stdout.",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Output YAML file path. Use '-' for stdout.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity. Use -vv for debug output.",
    )

    return parser.parse_args(args)


def setup_logging(verbosity: int) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbosity: Verbosity level (0=warning, 1=info, 2+=debug).
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def print_catalog_table(finder: OutletFinder, console: Console) -> None:
    """Print a Rich table of the catalog's products."""
    table = Table(title="Catalog")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Outlets", style="yellow", justify="right")

    for product_id in finder.product_ids:
        product = finder.catalog[product_id]
        table.add_row(
            Text(product.id.upper()),
            Text(product.name),
            str(len(product.stores)) if product.stores else "Out of stock",
        )

    console.print(table)


def plural(count: int, noun: str) -> str:
    """Return e.g. ``1 product`` or ``2 products``."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def print_messages(result: QueryResult, console: Console) -> None:
    """Print a query's errors and warnings."""
    for message in result.errors:
        console.print(message, style="red", markup=False)
    for message in result.warnings:
        console.print(message, style="yellow", markup=False)
    if not result.errors and not result.warnings:
        if result.outlets:
            console.print(f"Found {plural(len(result.outlets), 'matching outlet')}.", style="green")
        else:
            console.print("No outlet stocks the selected products.")


def print_results_table(result: QueryResult, console: Console) -> None:
    """Print a Rich table with one row per selected outlet.

    Args:
        result: The query result.
        console: Rich console for output.
    """
    table = Table(title="Outlets")
    table.add_column("Outlet", style="cyan")
    table.add_column("Coverage", style="yellow")
    table.add_column("New", justify="right")
    table.add_column("Products", style="green")

    for outlet in result.outlets:
        count = plural(len(outlet.products), "product")
        if result.covers_all(outlet):
            coverage = Text(f"All {count}", style="bold")
        else:
            coverage = Text(count)
        table.add_row(
            Text(outlet.name),
            coverage,
            str(outlet.introduces),
            Text("\n".join(result.products[pid].label for pid in outlet.products)),
        )

    console.print(table)


def output_yaml(result: QueryResult, output_path: str) -> None:
    """Output the query result as YAML.

    Args:
        result: The query result.
        output_path: File path or '-' for stdout.
    """
    data = result.model_dump(mode="json")

    if output_path == "-":
        yaml.dump(data, sys.stdout, default_flow_style=False, sort_keys=False, allow_unicode=True)
    else:
        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        logger.info("Output written to: %s", output_path)


def main(args: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, 1 for an unanswerable query, 2 if the
        catalog feed is unavailable).
    """
    parsed_args = parse_args(args)
    setup_logging(parsed_args.verbose)

    raw_query = TOKEN_SEPARATOR.join(parsed_args.query)
    if not raw_query.strip() and not parsed_args.list_products:
        logger.error("No products specified. Give at least one product ID, slug or URL.")
        return 1

    console = Console()
    finder = OutletFinder()

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

    with progress:
        task = progress.add_task(f"Loading catalog from {parsed_args.source}...", total=1)
        try:
            finder.load(parsed_args.source, timeout=parsed_args.timeout)
        except FeedUnavailable as e:
            logger.error("%s", e)
            return 2
        progress.update(task, completed=1)

    if parsed_args.list_products:
        print_catalog_table(finder, console)
        if not raw_query.strip():
            return 0

    result = finder.query(raw_query)
    print_messages(result, console)

    if parsed_args.print_table and result.outlets:
        print_results_table(result, console)

    if parsed_args.output:
        output_yaml(result, parsed_args.output)

    if result.errors and not result.outlets:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
