"""
Basic Projection

Single blended-rate model: one flat annual net income, no escalation and no
landlord split. Agreement fees are collected once, in year 1.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from revive_roi.calculations.discount import safe_divide
from revive_roi.calculations.parameters import DealParameters, percent

logger = logging.getLogger(__name__)

MIN_PROJECTION_YEARS = 5
MAX_PROJECTION_YEARS = 100
YEARS_PAST_PAYBACK = 2


@dataclass(frozen=True)
class FirstYearMetrics:
    """Steady-state income and first-year returns for one parameter set."""

    total_investment: float
    total_projected_annual_rent: float
    total_agreement_fees: float
    effective_annual_rent: float
    annual_operating_expenses: float
    annual_management_fees: float
    annual_maintenance_reserve: float
    annual_net_income: float
    monthly_net_income: float
    first_year_total_return: float
    payback_with_agreement_fees: float  # Years
    first_year_roi: float  # %
    sustained_roi: float  # %


@dataclass(frozen=True)
class BasicYearRecord:
    """One row of the basic cash flow table."""

    year: int
    annual_cash_flow: float
    cumulative_return: float
    net_roi: float  # %
    investment_recovered: float  # %, capped at 100
    break_even: bool


@dataclass(frozen=True)
class BasicProjection:
    metrics: FirstYearMetrics
    projection_years: int
    cash_flow_projection: Tuple[BasicYearRecord, ...]


def calculate_first_year_metrics(params: DealParameters) -> FirstYearMetrics:
    """
    Calculate annual income and first-year return metrics.

    Investment is the bare renovation cost; sensitivity shocks do not apply
    to this model.
    """
    total_investment = params.renovation_cost
    total_rent = params.total_units_rent
    total_fees = params.total_agreement_fees

    effective_rent = total_rent * (1 - percent(params.vacancy_rate))
    operating_expenses = params.annual_operating_expenses(total_rent)
    management_fees = total_rent * percent(params.management_fee)
    maintenance_reserve = total_rent * percent(params.maintenance_reserve)

    annual_net_income = (
        effective_rent - operating_expenses - management_fees - maintenance_reserve
    )
    first_year_return = annual_net_income + total_fees

    return FirstYearMetrics(
        total_investment=total_investment,
        total_projected_annual_rent=total_rent,
        total_agreement_fees=total_fees,
        effective_annual_rent=effective_rent,
        annual_operating_expenses=operating_expenses,
        annual_management_fees=management_fees,
        annual_maintenance_reserve=maintenance_reserve,
        annual_net_income=annual_net_income,
        monthly_net_income=annual_net_income / 12,
        first_year_total_return=first_year_return,
        payback_with_agreement_fees=safe_divide(total_investment, first_year_return),
        first_year_roi=safe_divide(first_year_return, total_investment) * 100,
        sustained_roi=safe_divide(annual_net_income, total_investment) * 100,
    )


def calculate_projection_years(payback_years: float) -> int:
    """
    Size the basic table to run two years past payback, at least five years.

    A non-finite payback (zero or undefined first-year return) falls back to
    the minimum; absurdly long paybacks are capped.
    """
    if not math.isfinite(payback_years):
        return MIN_PROJECTION_YEARS
    years = max(math.ceil(payback_years) + YEARS_PAST_PAYBACK, MIN_PROJECTION_YEARS)
    return min(years, MAX_PROJECTION_YEARS)


def calculate_basic_projection(params: DealParameters) -> BasicProjection:
    """
    Project cumulative returns for the basic model.

    Year 1 earns rent only for the months after renovation, plus the full
    agreement fees. Later years earn the flat annual net income.
    """
    metrics = calculate_first_year_metrics(params)
    investment = metrics.total_investment
    projection_years = calculate_projection_years(metrics.payback_with_agreement_fees)

    rows = []
    cumulative_return = 0.0

    for year in range(1, projection_years + 1):
        if year == 1:
            renting_months = 12 - params.project_duration_months
            yearly_income = (
                metrics.annual_net_income * (renting_months / 12)
                + metrics.total_agreement_fees
            )
        else:
            yearly_income = metrics.annual_net_income

        cumulative_return += yearly_income

        rows.append(
            BasicYearRecord(
                year=year,
                annual_cash_flow=yearly_income,
                cumulative_return=cumulative_return,
                net_roi=safe_divide(cumulative_return - investment, investment) * 100,
                investment_recovered=min(
                    safe_divide(cumulative_return, investment) * 100, 100.0
                ),
                break_even=cumulative_return >= investment,
            )
        )

    logger.debug(
        f"Basic projection for {params.project_name!r}: {projection_years} years, "
        f"payback {metrics.payback_with_agreement_fees:.2f}"
    )

    return BasicProjection(
        metrics=metrics,
        projection_years=projection_years,
        cash_flow_projection=tuple(rows),
    )
