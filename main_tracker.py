"""Mini README: Entry point CLI for the Tallybook finance tracker.

This script exposes a Typer CLI that starts the web tracker and also lets
users record, edit, delete, and reset entries straight from the terminal.
Every command works against the JSON store named in settings unless
``--store`` points somewhere else.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional

import typer
import uvicorn

from tallybook.configuration import get_settings
from tallybook.finance import (
    EMPTY_HISTORY_MESSAGE,
    INVALID_INPUT_MESSAGE,
    Ledger,
    LedgerError,
    TransactionType,
    build_rows,
    format_totals,
)
from tallybook.logging_utils import configure_root_logger
from tallybook.storage import JsonFileBlobStore

cli = typer.Typer(help="Track income and expenses from the terminal or the browser.")

STORE_OPTION = typer.Option(None, "--store", help="JSON store file to use instead of the configured one.")


def _open_ledger(store: Optional[Path]) -> Ledger:
    settings = get_settings()
    configure_root_logger(settings.log_level)
    return Ledger.load(JsonFileBlobStore(store or settings.store_path), key=settings.storage_key)


def _fail(error: LedgerError) -> NoReturn:
    typer.echo(INVALID_INPUT_MESSAGE, err=True)
    raise typer.Exit(code=1) from error


def _echo_summary(ledger: Ledger) -> None:
    totals = format_totals(ledger.totals())
    typer.echo(f"Balance: {totals['balance']}")
    typer.echo(f"Income: {totals['income']}  Expense: {totals['expense']}")
    rows = build_rows(ledger.transactions)
    if not rows:
        typer.echo(EMPTY_HISTORY_MESSAGE)
        return
    for row in rows:
        typer.echo(f"[{row.index}] {row.name} {row.sign}${row.display_amount}")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the web tracker using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 / :: wildcard addresses.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Tallybook on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "tallybook.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def add(
    name: str = typer.Argument(..., help="Label for the entry."),
    amount: str = typer.Argument(..., help="Amount; the sign is taken from --kind."),
    kind: str = typer.Option(TransactionType.INCOME.value, help="income or expense."),
    store: Optional[Path] = STORE_OPTION,
) -> None:
    """Record a new income or expense entry."""

    ledger = _open_ledger(store)
    try:
        transaction = ledger.add(name, amount, kind)
    except LedgerError as error:
        _fail(error)
    typer.echo(f"Added {transaction.name} ({transaction.amount:.2f})")
    _echo_summary(ledger)


@cli.command()
def edit(
    index: int = typer.Argument(..., help="Position shown by the summary command."),
    name: str = typer.Argument(..., help="New label."),
    amount: str = typer.Argument(..., help="New amount; the entry keeps its sign."),
    store: Optional[Path] = STORE_OPTION,
) -> None:
    """Rename an entry and replace its amount."""

    ledger = _open_ledger(store)
    try:
        ledger.update(index, name, amount)
    except LedgerError as error:
        _fail(error)
    _echo_summary(ledger)


@cli.command()
def delete(
    index: int = typer.Argument(..., help="Position shown by the summary command."),
    store: Optional[Path] = STORE_OPTION,
) -> None:
    """Remove an entry; later positions shift down by one."""

    ledger = _open_ledger(store)
    try:
        ledger.remove(index)
    except LedgerError as error:
        _fail(error)
    _echo_summary(ledger)


@cli.command()
def reset(
    yes: bool = typer.Option(False, "--yes", help="Skip the confirmation prompt."),
    store: Optional[Path] = STORE_OPTION,
) -> None:
    """Delete every entry."""

    ledger = _open_ledger(store)
    if not yes:
        typer.confirm("Delete every transaction?", abort=True)
    ledger.clear()
    _echo_summary(ledger)


@cli.command()
def summary(store: Optional[Path] = STORE_OPTION) -> None:
    """Show totals and the numbered history."""

    _echo_summary(_open_ledger(store))


if __name__ == "__main__":
    cli()
