"""CLI interface for Order Search."""

import json
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ....config.logging import setup_logging
from ....config.settings import get_settings
from ....core.domain import (
    Assignment,
    DateRange,
    OrderFilters,
    OrderStatus,
    SearchResult,
    SortOrder,
)
from ....core.domain.utils import clean_text
from ....core.services import OrderSearch, QueryParser, order_search_configuration
from ...common.exception_handler import format_exception_json, get_error_code, log_exception
from ...outbound.json_records import JsonRecordSource

app = typer.Typer(
    name="order-search",
    help="Search and filter exported transportation orders",
    add_completion=False,
)

console = Console()

# Determine if we're in debug mode (shows full error details)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"


def handle_cli_error(exc: Exception) -> None:
    """Handle and display errors in CLI with structured format.

    In debug mode, shows full JSON error details.
    In normal mode, shows a user-friendly message with error code.

    Args:
        exc: The exception to handle.
    """
    log_exception(exc, level=logging.DEBUG)
    error_data = format_exception_json(exc, include_trace=DEBUG_MODE)

    if DEBUG_MODE:
        console.print_json(json.dumps(error_data, default=str))
        return

    error_code = get_error_code(exc)
    console.print(
        f"[red]Error {escape(f'[{error_code}]')}:[/] {escape(error_data['error']['message'])}"
    )
    console.print(f"[dim]Type: {error_data['error']['type']}[/]")
    console.print("[dim]Set DEBUG=true for full details[/]")


def parse_where(expressions: list[str]) -> dict[str, Any]:
    """Turn FIELD=VALUE expressions into a custom filter mapping.

    Values are read as JSON when possible so numbers and booleans compare
    equal to the values stored in records; anything else stays a string.
    """
    filters: dict[str, Any] = {}
    for expression in expressions:
        field, separator, raw_value = expression.partition("=")
        if not separator or not field.strip():
            raise typer.BadParameter(f"Expected FIELD=VALUE, got '{expression}'")
        try:
            value = json.loads(raw_value)
        except json.JSONDecodeError:
            value = raw_value
        filters[field.strip()] = value
    return filters


def _best_match_markup(result: SearchResult, open_tag: str, close_tag: str) -> str:
    if not result.matches:
        return ""
    best = max(result.matches, key=lambda match: match.score)
    text = best.highlighted or best.value
    return escape(text).replace(open_tag, "[bold yellow]").replace(close_tag, "[/]")


def _result_to_dict(result: SearchResult) -> dict[str, Any]:
    return {
        "score": round(result.score, 6),
        "record": result.record,
        "matches": [asdict(match) for match in result.matches],
    }


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    settings = get_settings()
    setup_logging(settings.log_level, log_file=settings.log_file, json_format=settings.log_json)


@app.command()
def search(
    records_file: Path = typer.Argument(..., help="JSON export of orders"),
    query: str = typer.Argument("", help="Search text; quote phrases with double quotes"),
    status: list[OrderStatus] = typer.Option([], "--status", "-s", help="Keep these statuses"),
    date_from: str | None = typer.Option(None, "--from", help="Created on or after (YYYY-MM-DD)"),
    date_to: str | None = typer.Option(None, "--to", help="Created on or before (YYYY-MM-DD)"),
    assignment: Assignment | None = typer.Option(None, "--assignment", "-a"),
    where: list[str] = typer.Option([], "--where", "-w", help="Extra FIELD=VALUE filter"),
    sort_by: str | None = typer.Option(None, "--sort-by", help="Sort by a record field"),
    descending: bool = typer.Option(True, "--desc/--asc", help="Direction for --sort-by"),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Maximum results"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Search an order export and print ranked results."""
    settings = get_settings()
    custom_filters = parse_where(where)

    try:
        orders = JsonRecordSource(records_file).load()
        configuration = order_search_configuration(**settings.search_options())
        filters = OrderFilters(
            search=clean_text(query),
            statuses=[item.value for item in status],
            date_range=DateRange(date_from, date_to) if date_from or date_to else None,
            assignment=assignment,
            custom_filters=custom_filters,
            sort_by=sort_by,
            sort_order=SortOrder.DESC if descending else SortOrder.ASC,
        )
        results = OrderSearch(configuration).apply(orders, filters)
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    shown = results[: limit or settings.result_limit]

    if as_json:
        typer.echo(json.dumps([_result_to_dict(result) for result in shown], default=str))
        return

    if not shown:
        console.print("[yellow]No matching orders.[/]")
        return

    table = Table(title=f"{len(results)} matching order(s)")
    table.add_column("#", justify="right")
    table.add_column("Order")
    table.add_column("Status")
    table.add_column("Score", justify="right")
    table.add_column("Matched fields")
    table.add_column("Best match")

    for rank, result in enumerate(shown, start=1):
        record = result.record
        table.add_row(
            str(rank),
            escape(str(record.get("order_number") or record.get(configuration.id_field, ""))),
            escape(str(record.get("status", ""))),
            f"{result.score:.3f}",
            ", ".join(result.matched_fields),
            _best_match_markup(
                result, configuration.highlight_open_tag, configuration.highlight_close_tag
            ),
        )

    console.print(table)
    if len(results) > len(shown):
        console.print(f"[dim]Showing {len(shown)} of {len(results)}; use --limit to see more[/]")


@app.command()
def fields() -> None:
    """Show the order search field configuration."""
    configuration = order_search_configuration(**get_settings().search_options())

    table = Table(title="Order search fields")
    table.add_column("Field")
    table.add_column("Weight", justify="right")
    table.add_column("Type")
    table.add_column("Searchable")
    table.add_column("Filterable")

    for spec in sorted(configuration.fields, key=lambda spec: spec.weight, reverse=True):
        table.add_row(
            spec.key,
            f"{spec.weight:.1f}",
            spec.type.value,
            "yes" if spec.searchable else "no",
            "yes" if spec.filterable else "no",
        )

    console.print(table)
    console.print(f"[dim]Fuzzy threshold: {configuration.fuzzy_threshold}[/]")


@app.command()
def parse(query: str = typer.Argument(..., help="Query to tokenize")) -> None:
    """Show how a query is split into search terms."""
    for term in QueryParser().parse(clean_text(query)):
        typer.echo(term)


if __name__ == "__main__":
    app()
