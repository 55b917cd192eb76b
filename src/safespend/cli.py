"""Command line entry points for SafeSpend."""

from __future__ import annotations

from datetime import date
from typing import Optional

import click

from .config import BaseConfig
from .logging_config import setup_logging
from .services.debts import STRATEGIES, STRATEGY_DESCRIPTIONS, SimulationResult


def _money(ctx: click.Context, amount: float) -> str:
    return f"{ctx.obj.CURRENCY} {amount:,.2f}"


def _as_of(value) -> date:
    return value.date() if value is not None else date.today()


def _load_debts(config: BaseConfig, user_id: str):
    from .infra.database import bootstrap_database
    from .infra.repositories.debt import SQLModelDebtAccountRepository
    from .services.aggregation import load_debts

    engine, session_factory = bootstrap_database(config)
    try:
        repository = SQLModelDebtAccountRepository(session_factory)
        return load_debts(repository=repository, user_id=user_id)
    finally:
        engine.dispose()


def _check_extra(config: BaseConfig, extra: float) -> None:
    if extra < 0 or extra > config.MAX_EXTRA_PAYMENT:
        raise click.BadParameter(
            f"must be between 0 and {config.MAX_EXTRA_PAYMENT:,.0f}", param_hint="--extra"
        )


def _echo_result(ctx: click.Context, result: SimulationResult, as_of: date) -> None:
    from .services.debts import debt_free_date

    click.echo(f"Strategy: {result.strategy} - {STRATEGY_DESCRIPTIONS[result.strategy]}")
    if result.debt_free:
        payoff = debt_free_date(result, as_of=as_of)
        click.echo(f"Debt free in {result.total_months} months ({payoff:%B %Y})")
    else:
        click.echo(f"Not debt free within {result.total_months} months")
    click.echo(f"Total interest paid: {_money(ctx, result.total_interest_paid)}")
    for index, entry in enumerate(result.priority_order, start=1):
        marker = " [FOCUS]" if entry.is_focus else ""
        click.echo(
            f"  {index}. {entry.name}{marker}: {_money(ctx, entry.balance)}"
            f" @ {entry.interest_rate:.2f}% p.a., min {_money(ctx, entry.min_payment)}"
        )


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Household debt payoff planning."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.obj = config


@cli.command("init-db")
@click.pass_obj
def init_db(config: BaseConfig) -> None:
    """Create database tables."""

    from .infra.database import bootstrap_database

    engine, _ = bootstrap_database(config)
    engine.dispose()
    click.echo(f"Database ready: {config.DATABASE_URL}")


@cli.command("simulate")
@click.option("--user-id", required=True, help="Profile whose household debts are loaded")
@click.option("--strategy", type=click.Choice(STRATEGIES), default="avalanche", show_default=True)
@click.option("--extra", type=float, default=0.0, show_default=True, help="Extra monthly payment")
@click.option("--as-of", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--chart", type=click.Path(dir_okay=False), default=None, help="Write payoff chart PNG")
@click.pass_context
def simulate_command(
    ctx: click.Context,
    user_id: str,
    strategy: str,
    extra: float,
    as_of,
    chart: Optional[str],
) -> None:
    """Project the payoff plan for a user's debts."""

    from .services.debts import simulate

    config: BaseConfig = ctx.obj
    _check_extra(config, extra)
    try:
        debts = _load_debts(config, user_id)
    except (ValueError, LookupError) as exc:
        raise click.ClickException(str(exc)) from exc

    if not debts:
        click.echo("Debt free! No outstanding debts.")
        return

    result = simulate(debts, strategy, extra)
    _echo_result(ctx, result, _as_of(as_of))

    if chart:
        import shutil

        from .charts import debt_payoff_chart_png

        path = debt_payoff_chart_png(result, as_of=_as_of(as_of), currency=config.CURRENCY)
        shutil.move(str(path), chart)
        click.echo(f"Chart written: {chart}")


@cli.command("compare")
@click.option("--user-id", required=True)
@click.option("--extra", type=float, default=0.0, show_default=True)
@click.pass_context
def compare_command(ctx: click.Context, user_id: str, extra: float) -> None:
    """Show avalanche and snowball side by side."""

    from .services.debts import AVALANCHE, SNOWBALL, compare_strategies

    config: BaseConfig = ctx.obj
    _check_extra(config, extra)
    try:
        debts = _load_debts(config, user_id)
    except (ValueError, LookupError) as exc:
        raise click.ClickException(str(exc)) from exc

    if not debts:
        click.echo("Debt free! No outstanding debts.")
        return

    results = compare_strategies(debts, extra)
    for strategy in STRATEGIES:
        result = results[strategy]
        focus = result.focus.name if result.focus else "-"
        click.echo(
            f"{strategy:<10} {result.total_months:>4} months  "
            f"interest {_money(ctx, result.total_interest_paid)}  focus {focus}"
        )
    saved = results[SNOWBALL].total_interest_paid - results[AVALANCHE].total_interest_paid
    click.echo(f"Avalanche saves {_money(ctx, saved)} in interest")


@cli.command("insights")
@click.option("--user-id", required=True)
@click.option("--as-of", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.pass_context
def insights_command(ctx: click.Context, user_id: str, as_of) -> None:
    """Settlement quotes for flat-rate loans and next-cycle card interest."""

    from .services.aggregation import debt_insights

    config: BaseConfig = ctx.obj
    try:
        debts = _load_debts(config, user_id)
    except (ValueError, LookupError) as exc:
        raise click.ClickException(str(exc)) from exc

    if not debts:
        click.echo("Debt free! No outstanding debts.")
        return

    for insight in debt_insights(debts, as_of=_as_of(as_of)):
        debt = insight.debt
        click.echo(f"{debt.name} ({debt.interest_type}): {_money(ctx, debt.balance)}")
        if insight.settlement is not None:
            quote = insight.settlement
            click.echo(
                f"  settle now: {_money(ctx, quote.settlement_amount)}"
                f" (rebate {_money(ctx, quote.rebate)}, {quote.months_remaining} months left)"
            )
        elif insight.interest_estimate is not None:
            estimate = insight.interest_estimate
            click.echo(
                f"  next cycle interest: {_money(ctx, estimate.estimated_interest)},"
                f" minimum {_money(ctx, estimate.min_payment)}"
            )
        else:
            click.echo("  no quote available")


@cli.command("settle")
@click.argument("principal", type=float)
@click.argument("rate", type=float)
@click.argument("tenure", type=int)
@click.argument("months_paid", type=int)
@click.pass_context
def settle_command(
    ctx: click.Context, principal: float, rate: float, tenure: int, months_paid: int
) -> None:
    """Rule-of-78 early settlement quote for a flat-rate loan."""

    from .services.amortization import calculate_rule_of_78

    try:
        quote = calculate_rule_of_78(principal, rate, tenure, months_paid)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Monthly installment: {_money(ctx, quote.monthly_installment)}")
    click.echo(f"Total interest: {_money(ctx, quote.total_interest)}")
    click.echo(f"Months remaining: {quote.months_remaining}")
    click.echo(f"Rebate: {_money(ctx, quote.rebate)}")
    click.echo(f"Settlement amount: {_money(ctx, quote.settlement_amount)}")


@cli.command("card-interest")
@click.argument("balance", type=float)
@click.option("--rate", type=float, default=15.0, show_default=True, help="Annual rate in percent")
@click.pass_context
def card_interest_command(ctx: click.Context, balance: float, rate: float) -> None:
    """Next-cycle interest on a card balance if only the minimum is paid."""

    from .services.amortization import calculate_credit_card_interest

    estimate = calculate_credit_card_interest(balance, rate)
    click.echo(f"Estimated interest: {_money(ctx, estimate.estimated_interest)}")
    click.echo(f"Minimum payment: {_money(ctx, estimate.min_payment)}")


if __name__ == "__main__":  # pragma: no cover
    cli()
