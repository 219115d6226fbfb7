from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, replace
from pathlib import Path
from typing import Optional

import typer

from .config import ScenarioConfigError, load_scenario_file, scenario_to_dict
from .formatting import format_money, format_pct, month_to_years_label
from .model import compute
from .schemas import DEFAULT_SCENARIO

app = typer.Typer(help="Compare net worth from buying a home versus renting.")

CONFIG_ENV_VAR = "RENT_VS_BUY_CONFIG"


def _default_config_path() -> Optional[Path]:
    value = os.environ.get(CONFIG_ENV_VAR)
    return Path(value) if value else None


def _configure_logging(log_level: str) -> None:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level '{log_level}'", param_hint="--log-level")
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


@app.command()
def run(
    config: Optional[Path] = typer.Option(
        default_factory=_default_config_path,
        help=f"JSON scenario file (env {CONFIG_ENV_VAR} if omitted).",
    ),
    years: Optional[int] = typer.Option(None, help="Projection horizon in years."),
    home_price: Optional[float] = typer.Option(None, help="Purchase price."),
    down_payment_pct: Optional[float] = typer.Option(
        None, help="Down payment as a percent of price."
    ),
    mortgage_rate_pct: Optional[float] = typer.Option(
        None, help="Annual mortgage rate in percent (e.g., 6.5)."
    ),
    mortgage_term_years: Optional[int] = typer.Option(None, help="Mortgage term in years."),
    buy_closing_cost_pct: Optional[float] = typer.Option(
        None, help="Closing costs paid at purchase, percent of price."
    ),
    sell_cost_pct: Optional[float] = typer.Option(
        None, help="Selling costs at the end of the horizon, percent of value."
    ),
    property_tax_rate_pct: Optional[float] = typer.Option(
        None, help="Annual property tax, percent of home value."
    ),
    home_insurance_annual: Optional[float] = typer.Option(
        None, help="Homeowner's insurance per year."
    ),
    maintenance_rate_pct: Optional[float] = typer.Option(
        None, help="Annual maintenance, percent of home value."
    ),
    hoa_monthly: Optional[float] = typer.Option(None, help="HOA dues per month."),
    home_appreciation_pct: Optional[float] = typer.Option(
        None, help="Annual home price appreciation in percent."
    ),
    rent_monthly: Optional[float] = typer.Option(None, help="Starting monthly rent."),
    rent_growth_pct: Optional[float] = typer.Option(
        None, help="Annual rent growth in percent."
    ),
    renters_insurance_monthly: Optional[float] = typer.Option(
        None, help="Renter's insurance per month."
    ),
    investment_return_pct: Optional[float] = typer.Option(
        None, help="Annual return on invested savings in percent."
    ),
    show_timeline: bool = typer.Option(
        False, help="If set, dump the monthly timeline as JSON."
    ),
    log_level: str = typer.Option("WARNING", help="Logging level, e.g., DEBUG."),
) -> None:
    """
    Build the scenario (defaults, then config file, then options) and compare
    buying against renting.
    """
    _configure_logging(log_level)

    base = DEFAULT_SCENARIO
    if config is not None:
        try:
            base = load_scenario_file(config)
        except ScenarioConfigError as exc:
            raise typer.BadParameter(str(exc), param_hint="--config") from exc

    overrides = {
        "years": years,
        "home_price": home_price,
        "down_payment_pct": down_payment_pct,
        "mortgage_rate_pct": mortgage_rate_pct,
        "mortgage_term_years": mortgage_term_years,
        "buy_closing_cost_pct": buy_closing_cost_pct,
        "sell_cost_pct": sell_cost_pct,
        "property_tax_rate_pct": property_tax_rate_pct,
        "home_insurance_annual": home_insurance_annual,
        "maintenance_rate_pct": maintenance_rate_pct,
        "hoa_monthly": hoa_monthly,
        "home_appreciation_pct": home_appreciation_pct,
        "rent_monthly": rent_monthly,
        "rent_growth_pct": rent_growth_pct,
        "renters_insurance_monthly": renters_insurance_monthly,
        "investment_return_pct": investment_return_pct,
    }
    scenario = replace(
        base, **{name: value for name, value in overrides.items() if value is not None}
    )
    result = compute(scenario)
    inputs = result.inputs

    typer.echo(f"Horizon: {inputs.years} years")
    typer.echo(
        f"Home price: {format_money(inputs.home_price)} "
        f"({format_pct(inputs.down_payment_pct, 1)} down)"
    )
    typer.echo(
        f"Mortgage: {format_money(inputs.loan_amount)} at "
        f"{format_pct(inputs.mortgage_rate_pct)} over {inputs.mortgage_term_years} years"
    )
    typer.echo(f"Up-front cash to buy: {format_money(result.up_front_cash_for_buy)}")
    typer.echo(
        f"Monthly mortgage payment: {format_money(result.mortgage_payment_monthly, 2)}"
    )
    typer.echo(f"Starting rent: {format_money(inputs.rent_monthly)}/month")
    typer.echo("")
    typer.echo(f"End home value: {format_money(result.end.home_value)}")
    typer.echo(
        f"Buy net worth after sale: {format_money(result.end.buy_net_worth)}"
    )
    typer.echo(f"Rent net worth: {format_money(result.end.rent_net_worth)}")
    typer.echo(f"Better outcome: {result.better_option}")
    typer.echo(f"Buy wins by: {format_money(result.buy_wins_by)}")
    if result.break_even_month is not None:
        typer.echo(
            f"Break-even month: {result.break_even_month} "
            f"(~{month_to_years_label(result.break_even_month)})"
        )
    else:
        typer.echo("Break-even month: never within the horizon")

    if show_timeline:
        payload = [asdict(point) for point in result.points]
        typer.echo(json.dumps(payload, indent=2))


@app.command()
def defaults() -> None:
    """Print the reference scenario as JSON, usable as a --config file."""
    typer.echo(json.dumps(scenario_to_dict(DEFAULT_SCENARIO), indent=2))


if __name__ == "__main__":
    app()
