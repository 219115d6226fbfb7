from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ScenarioInputs:
    """Economic assumptions for one rent-vs-buy projection.

    Percentages are expressed in percent (6.5 means 6.5%), money in dollars.
    Field defaults form the reference scenario.
    """

    years: float = 10

    home_price: float = 650_000.0
    down_payment_pct: float = 20.0
    mortgage_rate_pct: float = 6.5  # annual percentage, e.g., 6.5
    mortgage_term_years: float = 30

    buy_closing_cost_pct: float = 2.5
    sell_cost_pct: float = 6.0

    property_tax_rate_pct: float = 1.1
    home_insurance_annual: float = 1_800.0
    maintenance_rate_pct: float = 1.0
    hoa_monthly: float = 0.0

    home_appreciation_pct: float = 3.0

    rent_monthly: float = 3_200.0
    rent_growth_pct: float = 3.0
    renters_insurance_monthly: float = 20.0

    investment_return_pct: float = 6.0

    @property
    def months(self) -> int:
        return int(self.years) * 12

    @property
    def mortgage_months(self) -> int:
        return int(self.mortgage_term_years) * 12

    @property
    def down_payment(self) -> float:
        return self.home_price * (self.down_payment_pct / 100)

    @property
    def buy_closing_costs(self) -> float:
        return self.home_price * (self.buy_closing_cost_pct / 100)

    @property
    def up_front_cash(self) -> float:
        """Cash a buyer spends on day one; the renter invests it instead."""
        return self.down_payment + self.buy_closing_costs

    @property
    def loan_amount(self) -> float:
        return max(0.0, self.home_price - self.down_payment)


DEFAULT_SCENARIO = ScenarioInputs()


@dataclass(frozen=True)
class MonthSnapshot:
    month: int
    home_value: float
    mortgage_balance: float
    home_equity: float
    buy_investments: float
    rent_investments: float
    buy_net_worth: float
    rent_net_worth: float


@dataclass(frozen=True)
class ScenarioResult:
    inputs: ScenarioInputs
    up_front_cash_for_buy: float
    mortgage_payment_monthly: float
    points: Tuple[MonthSnapshot, ...]
    end: MonthSnapshot
    break_even_month: Optional[int]
    buy_wins_by: float

    @property
    def better_option(self) -> str:
        """A zero margin is a "tie", not a win for buying."""
        if self.buy_wins_by > 0:
            return "buying"
        if self.buy_wins_by < 0:
            return "renting"
        return "tie"

    @property
    def net_worth_gaps(self) -> Tuple[float, ...]:
        """Buy minus rent net worth for every month, liquidation included at the end."""
        return tuple(p.buy_net_worth - p.rent_net_worth for p in self.points)
