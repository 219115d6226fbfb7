from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Optional, Sequence, Tuple

from .sanitize import sanitize_inputs
from .schemas import MonthSnapshot, ScenarioInputs, ScenarioResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationPlan:
    """Sanitized inputs plus the monthly rates derived from them once per run."""

    inputs: ScenarioInputs
    mortgage_payment: float
    mortgage_rate_monthly: float
    investment_growth_monthly: float
    appreciation_monthly: float
    rent_growth_monthly: float


@dataclass(frozen=True)
class SimulationState:
    home_value: float
    mortgage_balance: float
    buy_investments: float
    rent_investments: float


@dataclass(frozen=True)
class MonthlyCashFlow:
    property_tax: float
    insurance: float
    maintenance: float
    hoa: float
    rent: float
    renters_insurance: float
    mortgage_interest: float = 0.0
    mortgage_principal: float = 0.0
    mortgage_balance: float = 0.0  # after this month's principal

    @property
    def mortgage_outflow(self) -> float:
        return self.mortgage_interest + self.mortgage_principal

    @property
    def owner_outflow(self) -> float:
        return (
            self.mortgage_outflow
            + self.property_tax
            + self.insurance
            + self.maintenance
            + self.hoa
        )

    @property
    def renter_outflow(self) -> float:
        return self.rent + self.renters_insurance


def compute(raw_inputs: ScenarioInputs) -> ScenarioResult:
    """
    Sanitize ``raw_inputs``, simulate every month of the horizon, and sell the
    home at the end.
    """
    return _compute_sanitized(sanitize_inputs(raw_inputs))


def compute_cached(raw_inputs: ScenarioInputs) -> ScenarioResult:
    """Like :func:`compute`, memoized on the sanitized inputs."""
    return _compute_cached(sanitize_inputs(raw_inputs))


@lru_cache(maxsize=256)
def _compute_cached(inputs: ScenarioInputs) -> ScenarioResult:
    return _compute_sanitized(inputs)


def _compute_sanitized(inputs: ScenarioInputs) -> ScenarioResult:
    plan = build_plan(inputs)
    points = simulate(plan)
    break_even = find_break_even_month(points)
    end = liquidate(points[-1], inputs.sell_cost_pct)
    points = points[:-1] + (end,)

    logger.debug(
        "Simulated %d months: buy %.2f vs rent %.2f, break-even month %s",
        inputs.months,
        end.buy_net_worth,
        end.rent_net_worth,
        break_even,
    )
    return ScenarioResult(
        inputs=inputs,
        up_front_cash_for_buy=inputs.up_front_cash,
        mortgage_payment_monthly=plan.mortgage_payment,
        points=points,
        end=end,
        break_even_month=break_even,
        buy_wins_by=end.buy_net_worth - end.rent_net_worth,
    )


def build_plan(inputs: ScenarioInputs) -> SimulationPlan:
    return SimulationPlan(
        inputs=inputs,
        mortgage_payment=monthly_mortgage_payment(
            inputs.loan_amount, inputs.mortgage_rate_pct, inputs.mortgage_months
        ),
        mortgage_rate_monthly=annual_to_monthly_rate(inputs.mortgage_rate_pct),
        investment_growth_monthly=annual_to_monthly_growth(
            inputs.investment_return_pct
        ),
        appreciation_monthly=annual_to_monthly_growth(inputs.home_appreciation_pct),
        rent_growth_monthly=annual_to_monthly_growth(inputs.rent_growth_pct),
    )


def initial_state(inputs: ScenarioInputs) -> SimulationState:
    # The renter keeps the buyer's up-front cash invested from day one.
    return SimulationState(
        home_value=inputs.home_price,
        mortgage_balance=inputs.loan_amount,
        buy_investments=0.0,
        rent_investments=inputs.up_front_cash,
    )


def simulate(plan: SimulationPlan) -> Tuple[MonthSnapshot, ...]:
    """Scan the monthly transition over the horizon; months 0..N inclusive."""
    months = plan.inputs.months
    state = initial_state(plan.inputs)
    timeline: list[MonthSnapshot] = []
    for month in range(months):
        timeline.append(snapshot(state, month))
        state = advance_month(state, month, plan)
    timeline.append(snapshot(state, months))
    return tuple(timeline)


def snapshot(state: SimulationState, month: int) -> MonthSnapshot:
    equity = max(0.0, state.home_value - state.mortgage_balance)
    return MonthSnapshot(
        month=month,
        home_value=state.home_value,
        mortgage_balance=state.mortgage_balance,
        home_equity=equity,
        buy_investments=state.buy_investments,
        rent_investments=state.rent_investments,
        buy_net_worth=equity + state.buy_investments,
        rent_net_worth=state.rent_investments,
    )


def advance_month(
    state: SimulationState, month: int, plan: SimulationPlan
) -> SimulationState:
    """
    Move ``state`` from ``month`` to ``month + 1``.

    Order matters: investments grow, then the home appreciates, then the
    month's costs are paid and whichever side spent less invests the gap.
    """
    buy_investments = state.buy_investments * (1 + plan.investment_growth_monthly)
    rent_investments = state.rent_investments * (1 + plan.investment_growth_monthly)
    home_value = state.home_value * (1 + plan.appreciation_monthly)

    flow = monthly_cash_flow(home_value, state.mortgage_balance, month, plan)

    delta = flow.owner_outflow - flow.renter_outflow
    if delta > 0:
        rent_investments += delta
    elif delta < 0:
        buy_investments += -delta

    return SimulationState(
        home_value=home_value,
        mortgage_balance=flow.mortgage_balance,
        buy_investments=buy_investments,
        rent_investments=rent_investments,
    )


def monthly_cash_flow(
    home_value: float, mortgage_balance: float, month: int, plan: SimulationPlan
) -> MonthlyCashFlow:
    """Outflows for ``month`` given the already-appreciated home value."""
    inputs = plan.inputs
    rent = inputs.rent_monthly * (1 + plan.rent_growth_monthly) ** month

    interest = 0.0
    principal = 0.0
    if mortgage_balance > 0 and month < inputs.mortgage_months:
        interest = mortgage_balance * plan.mortgage_rate_monthly
        principal = min(
            mortgage_balance, max(0.0, plan.mortgage_payment - interest)
        )
        mortgage_balance = max(0.0, mortgage_balance - principal)

    return MonthlyCashFlow(
        property_tax=(home_value * (inputs.property_tax_rate_pct / 100)) / 12,
        insurance=inputs.home_insurance_annual / 12,
        maintenance=(home_value * (inputs.maintenance_rate_pct / 100)) / 12,
        hoa=inputs.hoa_monthly,
        rent=rent,
        renters_insurance=inputs.renters_insurance_monthly,
        mortgage_interest=interest,
        mortgage_principal=principal,
        mortgage_balance=mortgage_balance,
    )


def find_break_even_month(points: Sequence[MonthSnapshot]) -> Optional[int]:
    """First month after the start where buying has caught up with renting."""
    return next(
        (
            p.month
            for p in points
            if p.month > 0 and p.buy_net_worth >= p.rent_net_worth
        ),
        None,
    )


def liquidate(terminal: MonthSnapshot, sell_cost_pct: float) -> MonthSnapshot:
    """
    Sell the home at the end of the horizon.

    Unlike interior months, equity here is not floored at zero: an underwater
    sale reduces the buyer's net worth.
    """
    net_sale_proceeds = (
        terminal.home_value * (1 - sell_cost_pct / 100) - terminal.mortgage_balance
    )
    return replace(
        terminal,
        home_equity=net_sale_proceeds,
        buy_net_worth=terminal.buy_investments + net_sale_proceeds,
    )


def monthly_mortgage_payment(
    principal: float, annual_rate_pct: float, term_months: int
) -> float:
    if principal <= 0 or term_months <= 0:
        return 0.0
    monthly_rate = annual_to_monthly_rate(annual_rate_pct)
    if monthly_rate == 0:
        return principal / term_months
    discount = (1 + monthly_rate) ** (-term_months)
    return principal * monthly_rate / (1 - discount)


def annual_to_monthly_rate(annual_rate_pct: float) -> float:
    if annual_rate_pct <= 0:
        return 0.0
    return annual_rate_pct / 100.0 / 12.0


def annual_to_monthly_growth(annual_rate_pct: float) -> float:
    if annual_rate_pct <= -100:
        raise ValueError("annual rate must be greater than -100%")
    return (1 + annual_rate_pct / 100.0) ** (1 / 12.0) - 1
