"""CLI entry point for the trade journal."""

from __future__ import annotations

import json
from pathlib import Path

import click

from .core.config import Settings, load_settings
from .core.errors import JournalError
from .observability.logger import get_logger, setup_logging


def _filter_options(func):
    """Attach the shared dashboard filter options to a command."""
    options = [
        click.option("--market", default=None, help="Only trades in this market"),
        click.option("--instrument", default=None, help="Only trades in this instrument"),
        click.option("--strategy", default=None, help="Only trades using this strategy"),
        click.option("--start", default=None, help="Start date (YYYY-MM-DD), inclusive"),
        click.option("--end", default=None, help="End date (YYYY-MM-DD), inclusive"),
        click.option(
            "--direction",
            type=click.Choice(["Long", "Short"]),
            default=None,
            help="Only trades in this direction",
        ),
        click.option(
            "--result",
            type=click.Choice(["Win", "Loss", "BE"]),
            default=None,
            help="Only winning, losing or break-even trades",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load(ctx: click.Context, path: str, filters: dict):
    """Import the CSV at ``path`` and apply the filter options."""
    from .journal.csv_import import TradeImporter
    from .journal.filters import TradeFilter

    settings: Settings = ctx.obj["settings"]
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(
            f"Cannot read {path}: {exc} (journals must be UTF-8 CSV)"
        ) from exc
    try:
        result = TradeImporter(settings.csv).parse(text)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc

    get_logger(__name__).info(
        "journal_loaded",
        path=path,
        trades=result.imported,
        skipped=result.skipped,
    )
    if result.skipped:
        click.echo(f"Skipped {result.skipped} invalid row(s).", err=True)

    trade_filter = TradeFilter(
        market=filters.get("market"),
        instrument=filters.get("instrument"),
        strategy=filters.get("strategy"),
        start_date=filters.get("start"),
        end_date=filters.get("end"),
        direction=filters.get("direction"),
        result=filters.get("result"),
    )
    return trade_filter.apply(result.trades)


_currency_option = click.option(
    "--currency",
    type=click.Choice(["INR", "USD"]),
    default=None,
    help="Display currency for money KPIs (default: report.currency setting)",
)


def _display_currency(ctx: click.Context, currency: str | None) -> str | None:
    return currency or ctx.obj["settings"].report.currency


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.option("--config", default=None, help="Config file path (TOML)")
@click.option("--log-level", default=None, help="Override log level")
@click.pass_context
def main(ctx: click.Context, config: str | None, log_level: str | None) -> None:
    """Pulse Journal trade analytics."""
    overrides: dict = {}
    if log_level:
        overrides["observability"] = {"log_level": log_level}
    try:
        settings = load_settings(config_path=config, overrides=overrides)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc

    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command()
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@_filter_options
@_currency_option
@click.option("--json", "as_json", is_flag=True, help="Print the raw summary as JSON")
@click.pass_context
def summary(
    ctx: click.Context, csv_path: str, currency: str | None, as_json: bool, **filters
) -> None:
    """Headline KPIs for a CSV journal."""
    from .journal.report import build_report

    trades = _load(ctx, csv_path, filters)
    report = build_report(trades, config=ctx.obj["settings"].analytics)

    if as_json:
        _echo_json(report.summary.to_dict())
        return

    click.echo(f"\n{'=' * 40}")
    click.echo(f"JOURNAL SUMMARY ({report.date_range})")
    click.echo(f"{'=' * 40}")
    for label, value in report.kpis(_display_currency(ctx, currency)):
        click.echo(f"  {label:16s} {value}")


@main.command()
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@_filter_options
@_currency_option
@click.pass_context
def report(ctx: click.Context, csv_path: str, currency: str | None, **filters) -> None:
    """Full dashboard report as JSON."""
    from .journal.report import build_report

    trades = _load(ctx, csv_path, filters)
    report = build_report(trades, config=ctx.obj["settings"].analytics)
    _echo_json(report.to_dict(_display_currency(ctx, currency)))


@main.command()
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--by",
    "bucket",
    type=click.Choice(["day", "week", "month", "weekday", "month-winrate"]),
    default="day",
    help="Bucket size",
)
@_filter_options
@click.pass_context
def breakdown(ctx: click.Context, csv_path: str, bucket: str, **filters) -> None:
    """P&L (or win rate) per time bucket."""
    from .journal.breakdown import (
        breakdown_by_day,
        breakdown_by_month,
        breakdown_by_week,
        day_of_week_stats,
        win_rate_by_month,
    )
    from .journal.derive import derive_trades

    derived = derive_trades(_load(ctx, csv_path, filters))
    if bucket == "weekday":
        _echo_json([d.to_dict() for d in day_of_week_stats(derived)])
        return

    fn = {
        "day": breakdown_by_day,
        "week": breakdown_by_week,
        "month": breakdown_by_month,
        "month-winrate": win_rate_by_month,
    }[bucket]
    _echo_json([row.to_dict() for row in fn(derived)])


@main.command()
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--by",
    "key",
    type=click.Choice(["strategy", "instrument"]),
    default="strategy",
    help="Grouping key",
)
@_filter_options
@click.pass_context
def groups(ctx: click.Context, csv_path: str, key: str, **filters) -> None:
    """Per-strategy or per-instrument stats, best P&L first."""
    from .journal.derive import derive_trades
    from .journal.groups import instrument_stats, strategy_stats

    derived = derive_trades(_load(ctx, csv_path, filters))
    label = ctx.obj["settings"].analytics.unspecified_label
    fn = strategy_stats if key == "strategy" else instrument_stats
    _echo_json([g.to_dict() for g in fn(derived, unspecified_label=label)])


@main.command()
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@_filter_options
@click.pass_context
def behavior(ctx: click.Context, csv_path: str, **filters) -> None:
    """Behavioural risk flags (low R:R, early exits, overtrading)."""
    from .journal.derive import derive_trades
    from .journal.heuristics import extract_behavior_signals

    derived = derive_trades(_load(ctx, csv_path, filters))
    signals = extract_behavior_signals(derived, ctx.obj["settings"].analytics)
    _echo_json(signals.to_dict())


@main.command()
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", default=None, help="Write to file instead of stdout")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["csv", "json"]),
    default="csv",
    help="Output format",
)
@_filter_options
@click.pass_context
def export(ctx: click.Context, csv_path: str, output: str | None, fmt: str, **filters) -> None:
    """Re-export trades with every derived column."""
    from .journal.derive import derive_trades
    from .journal.export import TradeExporter

    derived = derive_trades(_load(ctx, csv_path, filters))
    exporter = TradeExporter(decimal_places=ctx.obj["settings"].csv.decimal_places)
    try:
        text = exporter.export(derived, fmt)
    except JournalError as exc:
        raise click.ClickException(str(exc)) from exc

    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        click.echo(f"Wrote {len(derived)} trades to {output}")
    else:
        click.echo(text)


@main.command()
def template() -> None:
    """Print the blank CSV template (header row only)."""
    from .journal.export import TradeExporter

    click.echo(TradeExporter().template())
