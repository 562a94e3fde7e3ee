from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Optional

import orjson
import typer
import yaml
from pydantic import BaseModel

from .client import InvoiceClient
from .config.settings import settings
from .errors import InvoiceClientError
from .logs import get_log_manager, read_logs

app = typer.Typer(add_completion=False)


def _client() -> InvoiceClient:
    get_log_manager(settings)
    return InvoiceClient.from_settings(settings)


def _load_file(path: Path) -> Any:
    # JSON is a subset of YAML, so one loader covers both
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        typer.echo(f"{path} must contain a mapping")
        raise typer.Exit(code=1)
    return data


def _echo(result: BaseModel) -> None:
    raw = result.model_dump(mode="json", exclude_none=True)
    typer.echo(orjson.dumps(raw, option=orjson.OPT_INDENT_2).decode())


def _run(coro: Awaitable[BaseModel]) -> None:
    try:
        result = asyncio.run(coro)
    except InvoiceClientError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)
    _echo(result)


@app.command("create")
def create(file: Path = typer.Option(..., "--file", "-f", exists=True, help="Invoice draft (YAML or JSON)")):
    """Create an invoice from a draft file."""
    draft = _load_file(file)
    _run(_client().invoices.create(draft))


@app.command("list")
def list_invoices(
    from_: Optional[str] = typer.Option(None, "--from", help="Start date (epoch or ISO-8601)"),
    to: Optional[str] = typer.Option(None, "--to", help="End date (epoch or ISO-8601)"),
    count: Optional[str] = typer.Option(None, "--count", help="Page size (default 10)"),
    skip: Optional[str] = typer.Option(None, "--skip", help="Records to skip (default 0)"),
    customer_id: Optional[str] = typer.Option(None, "--customer-id"),
):
    """List invoices."""
    query = {"from": from_, "to": to, "count": count, "skip": skip, "customer_id": customer_id}
    _run(_client().invoices.fetch_all({k: v for k, v in query.items() if v is not None}))


@app.command("fetch")
def fetch(invoice_id: str = typer.Argument(...)):
    """Fetch an invoice by id."""
    _run(_client().invoices.fetch(invoice_id))


@app.command("cancel")
def cancel(invoice_id: str = typer.Argument(...)):
    """Cancel an issued invoice."""
    _run(_client().invoices.cancel(invoice_id))


@app.command("edit")
def edit(
    invoice_id: str = typer.Argument(...),
    file: Path = typer.Option(..., "--file", "-f", exists=True, help="Fields to update (YAML or JSON)"),
):
    """Update a draft invoice."""
    params = _load_file(file)
    _run(_client().invoices.edit(invoice_id, params))


@app.command("notify")
def notify(invoice_id: str = typer.Argument(...), medium: str = typer.Argument(..., help="sms or email")):
    """Resend the invoice notification."""
    _run(_client().invoices.notify(invoice_id, medium))


@app.command("logs")
def logs(
    log_type: str = typer.Argument("api", help="system, api or error"),
    lines: int = typer.Option(50, "--lines", "-n"),
    search: Optional[str] = typer.Option(None, "--search"),
    level: Optional[str] = typer.Option(None, "--level"),
):
    """Show recent log entries, newest first."""
    entries = read_logs(log_type, max_lines=lines, search_text=search, level_filter=level)
    if not entries:
        typer.echo(f"No {log_type} logs.")
        return
    for e in entries:
        typer.echo(f"{e['timestamp']} {e['level']:<8} {e['message']}")


if __name__ == "__main__":
    app()
