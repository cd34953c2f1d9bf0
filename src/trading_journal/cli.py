"""CLI entry point for the trading journal."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

import click

from .core.enums import AssetClass, TradeDirection, TradeStatus
from .core.errors import ConfigError, LedgerError, StorageError, TradeValidationError
from .journal.calculators import OptionType, calculate_option_pnl, calculate_pips
from .journal.stats import format_money, format_percent, format_profit_factor


def _open_service(ctx: click.Context) -> Any:
    """Build the JournalService for this invocation (cached on ctx)."""
    from .core.config import load_settings
    from .observability.logger import new_trace_id, setup_logging
    from .service import JournalService

    obj = ctx.ensure_object(dict)
    if "service" in obj:
        return obj["service"]

    overrides: dict[str, Any] = {}
    if obj.get("data_dir"):
        overrides["storage"] = {"data_dir": obj["data_dir"]}
    try:
        settings = load_settings(config_path=obj.get("config"), overrides=overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )
    new_trace_id()

    try:
        obj["service"] = JournalService.open(settings)
    except (StorageError, LedgerError) as exc:
        raise click.ClickException(str(exc)) from exc
    return obj["service"]


def _journal_errors(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Report validation and storage failures as CLI errors."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except TradeValidationError as exc:
            raise click.BadParameter(str(exc), param_hint=exc.field) from exc
        except (StorageError, LedgerError) as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


def _choices(enum_cls: Any) -> click.Choice:
    return click.Choice([m.value for m in enum_cls], case_sensitive=False)


@click.group()
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--data-dir", default=None, help="Journal data directory override")
@click.pass_context
def main(ctx: click.Context, config: str | None, data_dir: str | None) -> None:
    """Chart Decoders trading journal."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["data_dir"] = data_dir


# ---------------------------------------------------------------------------
# Journal commands
# ---------------------------------------------------------------------------


@main.command()
@click.option("--date", "date_", required=True, help="Trade date (YYYY-MM-DD)")
@click.option("--asset-class", type=_choices(AssetClass), default=AssetClass.FOREX.value,
              show_default=True, help="Asset class")
@click.option("--symbol", required=True, help="Instrument, e.g. EURUSD")
@click.option("--direction", type=_choices(TradeDirection), default=TradeDirection.LONG.value,
              show_default=True, help="Long or Short")
@click.option("--quantity", required=True, help="Size (lots / contracts / units)")
@click.option("--entry", "entry_price", required=True, help="Entry price")
@click.option("--exit", "exit_price", default=None, help="Exit price (optional if open)")
@click.option("--status", type=_choices(TradeStatus), default=TradeStatus.CLOSED.value,
              show_default=True, help="Open or Closed")
@click.option("--fees", default=None, help="Fees paid (stored, not netted into PnL)")
@click.option("--notes", default=None, help="Notes / analysis")
@click.pass_context
@_journal_errors
def add(ctx: click.Context, date_: str, asset_class: str, symbol: str, direction: str,
        quantity: str, entry_price: str, exit_price: str | None, status: str,
        fees: str | None, notes: str | None) -> None:
    """Log a new trade."""
    service = _open_service(ctx)
    trade = service.log_trade({
        "date": date_,
        "assetClass": asset_class,
        "symbol": symbol,
        "direction": direction,
        "quantity": quantity,
        "entryPrice": entry_price,
        "exitPrice": exit_price,
        "status": status,
        "fees": fees,
        "notes": notes,
    })
    click.echo(f"Logged {trade.symbol} {trade.direction.value} ({trade.status.value})  id={trade.id}")
    click.echo(f"  PnL:      {format_money(trade.pnl, signed=True)}")
    click.echo(f"  Balance:  {format_money(service.account.current_balance)}")


@main.command()
@click.argument("trade_id")
@click.pass_context
@_journal_errors
def remove(ctx: click.Context, trade_id: str) -> None:
    """Delete a trade by id."""
    service = _open_service(ctx)
    if service.delete_trade(trade_id):
        click.echo(f"Deleted trade {trade_id}.")
    else:
        click.echo(f"No trade with id {trade_id}.")


@main.command("list")
@click.pass_context
@_journal_errors
def list_trades(ctx: click.Context) -> None:
    """List logged trades in log order."""
    service = _open_service(ctx)
    trades = service.trades
    if not trades:
        click.echo("No trades logged yet.")
        return

    click.echo(
        f"\n{'Date':10s}  {'Symbol':10s} {'Class':9s} {'Dir':5s} {'Status':6s} "
        f"{'Entry':>12s} {'Exit':>12s} {'Qty':>10s} {'PnL':>12s}  ID"
    )
    click.echo("-" * 110)
    for t in trades:
        pnl = format_money(t.pnl) if t.pnl != 0 else "-"
        click.echo(
            f"{t.date.isoformat():10s}  {t.symbol:10s} {t.asset_class.value:9s} "
            f"{t.direction.value:5s} {t.status.value:6s} {t.entry_price:>12g} "
            f"{t.exit_price:>12g} {t.quantity:>10g} {pnl:>12s}  {t.id}"
        )
    click.echo()


@main.command()
@click.pass_context
@_journal_errors
def stats(ctx: click.Context) -> None:
    """Show account balance and performance statistics."""
    service = _open_service(ctx)
    account = service.account
    s = service.stats()

    click.echo(f"\n{'=' * 50}")
    click.echo("PERFORMANCE")
    click.echo(f"{'=' * 50}")
    click.echo(f"  Balance:        {format_money(account.current_balance)}")
    click.echo(f"  Starting:       {format_money(account.initial_balance)}")
    click.echo(f"  Net PnL:        {format_money(s.total_pnl, signed=True)}")
    click.echo(f"  Win Rate:       {format_percent(s.win_rate)}  ({s.wins}W - {s.losses}L)")
    click.echo(f"  Profit Factor:  {format_profit_factor(s.profit_factor)}")
    click.echo(f"  Closed Trades:  {s.total_trades}")
    click.echo(f"  Open Trades:    {s.open_trades}")
    if s.total_trades:
        click.echo(f"  Avg Win:        {format_money(s.average_win)}")
        click.echo(f"  Avg Loss:       {format_money(s.average_loss)}")
        click.echo(f"  Expectancy:     {format_money(s.expectancy, signed=True)}")
    click.echo()


@main.command()
@click.pass_context
@_journal_errors
def curve(ctx: click.Context) -> None:
    """Print the equity curve (closed trades by date)."""
    from .journal.equity import max_drawdown

    service = _open_service(ctx)
    points = service.equity_curve()
    click.echo(f"\n{'Point':6s} {'Balance':>14s} {'PnL':>12s}")
    click.echo("-" * 34)
    for p in points:
        click.echo(f"{p.label:6s} {format_money(p.balance):>14s} {format_money(p.pnl, signed=True):>12s}")
    click.echo(f"\n  Max drawdown: {format_money(max_drawdown(points))}\n")


@main.command()
@click.argument("value", type=float)
@click.pass_context
@_journal_errors
def balance(ctx: click.Context, value: float) -> None:
    """Set the starting account balance."""
    service = _open_service(ctx)
    service.set_initial_balance(value)
    account = service.account
    click.echo(
        f"Starting balance {format_money(account.initial_balance)}; "
        f"current balance {format_money(account.current_balance)}."
    )


@main.command()
@click.pass_context
@_journal_errors
def analyze(ctx: click.Context) -> None:
    """Ask the AI mentor to review your most recent trades."""
    import asyncio

    service = _open_service(ctx)
    result = asyncio.run(service.analyze())
    if result is not None:
        click.echo(result.text)


@main.command()
@click.option("--format", "fmt", type=click.Choice(["csv", "json", "report"]), default="csv",
              show_default=True)
@click.option("--period", type=click.Choice(["daily", "weekly", "monthly"]), default="monthly",
              show_default=True, help="Bucket size for --format report")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None,
              help="Write to file instead of stdout")
@click.pass_context
@_journal_errors
def export(ctx: click.Context, fmt: str, period: str, output: str | None) -> None:
    """Export trades as CSV, JSON, or a periodic P&L report."""
    import json

    from .journal.export import TradeExporter

    service = _open_service(ctx)
    exporter = TradeExporter(profit_factor_mode=service.settings.stats.profit_factor_mode)
    trades = list(service.trades)
    if fmt == "csv":
        text = exporter.to_csv(trades)
    elif fmt == "json":
        text = exporter.to_json(trades)
    else:
        report = exporter.periodic_report(trades, period=period)
        text = json.dumps(report, indent=2, allow_nan=False)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"Exported {len(trades)} trades to {output}.")
    else:
        click.echo(text)


# ---------------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------------


@main.command()
@click.option("--pair", default="EURUSD", show_default=True, help="Currency pair")
@click.option("--entry", type=float, default=None, help="Entry price")
@click.option("--exit", "exit_", type=float, default=None, help="Exit price")
@click.option("--lots", type=float, default=1.0, show_default=True, help="Lot size")
def pips(pair: str, entry: float | None, exit_: float | None, lots: float) -> None:
    """Forex pips calculator."""
    result = calculate_pips(pair, entry, exit_, lots)
    click.echo(f"Pips:          {result.pips:.1f}")
    click.echo(f"Est. Profit:   ${result.profit:.2f}")


@main.command()
@click.option("--type", "option_type", type=_choices(OptionType), default=OptionType.CALL.value,
              show_default=True)
@click.option("--contracts", type=int, default=1, show_default=True)
@click.option("--buy", "premium_buy", type=float, default=None, help="Premium paid")
@click.option("--sell", "premium_sell", type=float, default=None, help="Premium received")
def options(option_type: str, contracts: int, premium_buy: float | None,
            premium_sell: float | None) -> None:
    """Options profit/loss calculator."""
    profit = calculate_option_pnl(premium_buy, premium_sell, contracts)
    click.echo(f"{option_type} x{contracts}")
    click.echo(f"Total Profit/Loss: ${profit:.2f}")


if __name__ == "__main__":
    main()
