"""CLI entry point for the portfolio ledger."""

from __future__ import annotations

import asyncio
import json
import uuid
from collections.abc import Awaitable, Callable
from decimal import Decimal, InvalidOperation
from typing import Any

import click

from .application.commands import (
    CreateTransactionCommand,
    DeleteTransactionCommand,
    UpdateTransactionCommand,
)
from .application.results import describe_result
from .core.enums import Currency, TransactionType

_EXIT_CODES = {"success": 0, "error": 1, "publish_error": 2, "not_found": 3}

_TYPES = click.Choice([t.value for t in TransactionType], case_sensitive=False)
_CURRENCIES = click.Choice([c.value for c in Currency], case_sensitive=False)
_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _decimal(ctx: click.Context, param: click.Parameter, value: str | None) -> Decimal | None:
    if value is None:
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        raise click.BadParameter(f"{value!r} is not a decimal number")


def _run(ctx: click.Context, call: Callable[[Any], Awaitable[Any]]) -> None:
    from .main import bootstrap, open_ledger
    from .observability.logger import new_trace_id

    settings = bootstrap(config_path=ctx.obj["config"])

    async def _go() -> Any:
        new_trace_id()
        async with open_ledger(settings) as services:
            return await call(services)

    view = describe_result(asyncio.run(_go()))
    click.echo(json.dumps(view, indent=2, default=str))
    ctx.exit(_EXIT_CODES[view["status"]])


@click.group()
@click.option("--config", default=None, help="TOML config file path")
@click.pass_context
def main(ctx: click.Context, config: str | None) -> None:
    """Portfolio transaction ledger."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command()
@click.option("--ticker", required=True)
@click.option("--type", "transaction_type", type=_TYPES, required=True)
@click.option("--quantity", required=True, callback=_decimal)
@click.option("--price", required=True, callback=_decimal)
@click.option("--fees", default=None, callback=_decimal)
@click.option("--currency", type=_CURRENCIES, default=Currency.USD.value)
@click.option("--date", "transaction_date", type=_DATE, default=None)
@click.option("--notes", default=None)
@click.option("--fractional/--no-fractional", default=False)
@click.option("--multiplier", default=None, callback=_decimal, help="Fractional multiplier")
@click.option("--commission-currency", type=_CURRENCIES, default=None)
@click.option("--exchange", default=None)
@click.option("--country", default=None)
@click.option("--company", "company_name", default=None)
@click.pass_context
def create(ctx: click.Context, **opts: Any) -> None:
    """Record a new transaction."""
    command = CreateTransactionCommand(
        ticker=opts["ticker"],
        transaction_type=TransactionType(opts["transaction_type"].upper()),
        quantity=opts["quantity"],
        price=opts["price"],
        fees=opts["fees"],
        currency=Currency(opts["currency"].upper()),
        transaction_date=opts["transaction_date"].date() if opts["transaction_date"] else None,
        notes=opts["notes"],
        is_fractional=opts["fractional"],
        fractional_multiplier=opts["multiplier"],
        commission_currency=(
            Currency(opts["commission_currency"].upper())
            if opts["commission_currency"] else None
        ),
        exchange=opts["exchange"],
        country=opts["country"],
        company_name=opts["company_name"],
    )
    _run(ctx, lambda services: services.create.execute(command))


@main.command()
@click.option("--id", "transaction_id", type=click.UUID, required=True)
@click.option("--ticker", default=None)
@click.option("--type", "transaction_type", type=_TYPES, default=None)
@click.option("--quantity", default=None, callback=_decimal)
@click.option("--price", default=None, callback=_decimal)
@click.option("--fees", default=None, callback=_decimal)
@click.option("--currency", type=_CURRENCIES, default=None)
@click.option("--date", "transaction_date", type=_DATE, default=None)
@click.option("--notes", default=None)
@click.option("--fractional/--no-fractional", default=None)
@click.option("--multiplier", default=None, callback=_decimal, help="Fractional multiplier")
@click.option("--commission-currency", type=_CURRENCIES, default=None)
@click.option("--exchange", default=None)
@click.option("--country", default=None)
@click.option("--company", "company_name", default=None)
@click.pass_context
def update(ctx: click.Context, transaction_id: uuid.UUID, **opts: Any) -> None:
    """Apply a partial update; omitted options are left unchanged."""
    command = UpdateTransactionCommand(
        transaction_id=transaction_id,
        ticker=opts["ticker"],
        transaction_type=(
            TransactionType(opts["transaction_type"].upper())
            if opts["transaction_type"] else None
        ),
        quantity=opts["quantity"],
        price=opts["price"],
        fees=opts["fees"],
        currency=Currency(opts["currency"].upper()) if opts["currency"] else None,
        transaction_date=opts["transaction_date"].date() if opts["transaction_date"] else None,
        notes=opts["notes"],
        is_fractional=opts["fractional"],
        fractional_multiplier=opts["multiplier"],
        commission_currency=(
            Currency(opts["commission_currency"].upper())
            if opts["commission_currency"] else None
        ),
        exchange=opts["exchange"],
        country=opts["country"],
        company_name=opts["company_name"],
    )
    _run(ctx, lambda services: services.update.execute(command))


@main.command()
@click.option("--id", "transaction_id", type=click.UUID, required=True)
@click.pass_context
def delete(ctx: click.Context, transaction_id: uuid.UUID) -> None:
    """Delete a transaction."""
    command = DeleteTransactionCommand(transaction_id)
    _run(ctx, lambda services: services.delete.execute(command))


@main.command()
@click.option("--id", "transaction_id", type=click.UUID, required=True)
@click.pass_context
def get(ctx: click.Context, transaction_id: uuid.UUID) -> None:
    """Show one transaction."""
    _run(ctx, lambda services: services.get.execute(transaction_id))


@main.command("list")
@click.option("--ticker", required=True)
@click.option("--limit", type=int, default=None)
@click.pass_context
def list_(ctx: click.Context, ticker: str, limit: int | None) -> None:
    """List transactions for a ticker, most recent first."""
    _run(ctx, lambda services: services.list_by_ticker.execute(ticker, limit))


if __name__ == "__main__":
    main()
