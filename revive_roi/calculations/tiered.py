"""
Tiered Projection

Multi-year model for the renovate-and-lease deal: stepped rent escalation,
vacancy, a one-off major maintenance event, sensitivity shocks and a
three-tier split of net operating income between landlord and investor.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from revive_roi.calculations.discount import calculate_npv, safe_divide, safe_power, solve_irr
from revive_roi.calculations.parameters import DealParameters, percent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearlyRecord:
    """One projected year of the tiered model."""

    year: int
    current_annual_rent: float
    effective_rent: float
    # Before the landlord split, after year-1 shocks. Not NOI plus landlord payment.
    net_operating_income: float
    landlord_payment_percent: float
    landlord_payment: float
    investor_net_income: float
    cumulative_investor_return: float
    cumulative_landlord_payment: float
    annual_roi: float  # %
    cumulative_roi: float  # %
    investment_recovered: float  # %, capped at 100
    break_even: bool


@dataclass(frozen=True)
class ProjectionResult:
    """Summary metrics and yearly table of the tiered model."""

    total_investment: float
    projection: Tuple[YearlyRecord, ...]
    payback_period: float  # Years, fractional
    payback_reached: bool  # False when payback is the average-rate estimate
    total_investor_returns: float
    total_landlord_payments: float
    total_roi: float  # %
    annualized_roi: float  # %
    irr: float  # %
    irr_converged: bool
    npv: float
    cash_flows: Tuple[float, ...]  # [-investment, year 1, year 2, ...]


def landlord_payment_percent(params: DealParameters, year: int) -> float:
    """
    Landlord's share of NOI for a projection year.

    Tier 1 covers the first `landlord_tier1_years`, tier 2 the next
    `landlord_tier2_years`, and tier 3 every year after that.
    """
    if year <= params.landlord_tier1_years:
        return params.landlord_tier1_percent
    if year <= params.landlord_tier1_years + params.landlord_tier2_years:
        return params.landlord_tier2_percent
    return params.landlord_tier3_percent


def rent_escalation_count(params: DealParameters, year: int) -> int:
    """Number of rent increases applied by a projection year. No increases without a positive frequency."""
    if params.rent_increase_frequency <= 0:
        return 0
    return math.floor((year - 1) / params.rent_increase_frequency)


def interpolate_payback(
    year: int, cumulative_before: float, income: float, investment: float
) -> float:
    """
    Fractional payback within the break-even year.

    Assumes the year's income arrives evenly, so the fraction of the year
    needed is the remaining balance over that year's income.
    """
    if year == 1:
        return 1.0
    remaining = investment - cumulative_before
    return (year - 1) + safe_divide(remaining, income)


def calculate_tiered_projection(params: DealParameters) -> ProjectionResult:
    """
    Project the tiered model year by year and derive return metrics.

    Year 1 carries the sensitivity shocks: vacancy and delay months are
    charged against NOI, delay months also shorten the renting period, and
    agreement fees are added in full.

    Args:
        params: Deal parameter snapshot

    Returns:
        ProjectionResult with the yearly table, payback, ROI, IRR and NPV
    """
    total_investment = params.renovation_cost * (1 + percent(params.cost_sensitivity))
    base_annual_rent = params.total_units_rent * (1 + percent(params.rent_sensitivity))
    total_agreement_fees = params.total_agreement_fees
    operating_expenses = params.annual_operating_expenses(base_annual_rent)

    vacancy_loss = (params.vacancy_sensitivity / 12) * base_annual_rent
    delay_impact = (params.delay_sensitivity / 12) * base_annual_rent

    rows: List[YearlyRecord] = []
    cash_flows = [-total_investment]
    cumulative_investor_return = 0.0
    cumulative_landlord_payment = 0.0
    payback_period = 0.0
    payback_found = False

    for year in range(1, params.projection_years + 1):
        # === REVENUE ===
        escalation = safe_power(
            1 + percent(params.rent_increase_rate), rent_escalation_count(params, year)
        )
        current_rent = base_annual_rent * escalation
        effective_rent = current_rent * (1 - percent(params.vacancy_rate))

        # === EXPENSES ===
        management_fees = current_rent * percent(params.management_fee)
        maintenance_reserve = current_rent * percent(params.maintenance_reserve)
        major_maintenance = (
            params.major_maintenance_cost if year == params.major_maintenance_year else 0.0
        )

        noi = (
            effective_rent
            - operating_expenses
            - management_fees
            - maintenance_reserve
            - major_maintenance
        )

        if year == 1:
            noi -= vacancy_loss + delay_impact

        # === LANDLORD SPLIT ===
        tier_percent = landlord_payment_percent(params, year)
        landlord_payment = noi * percent(tier_percent)
        investor_income = noi - landlord_payment

        if year == 1:
            renting_months = max(
                0, 12 - params.project_duration_months - params.delay_sensitivity
            )
            investor_income = investor_income * renting_months / 12 + total_agreement_fees

        cumulative_before = cumulative_investor_return
        cumulative_investor_return += investor_income
        cumulative_landlord_payment += landlord_payment
        cash_flows.append(investor_income)

        # === PAYBACK ===
        if not payback_found and cumulative_investor_return >= total_investment:
            payback_period = interpolate_payback(
                year, cumulative_before, investor_income, total_investment
            )
            payback_found = True

        rows.append(
            YearlyRecord(
                year=year,
                current_annual_rent=current_rent,
                effective_rent=effective_rent,
                net_operating_income=noi,
                landlord_payment_percent=tier_percent,
                landlord_payment=landlord_payment,
                investor_net_income=investor_income,
                cumulative_investor_return=cumulative_investor_return,
                cumulative_landlord_payment=cumulative_landlord_payment,
                annual_roi=safe_divide(investor_income, total_investment) * 100,
                cumulative_roi=safe_divide(
                    cumulative_investor_return - total_investment, total_investment
                )
                * 100,
                investment_recovered=min(
                    safe_divide(cumulative_investor_return, total_investment) * 100, 100.0
                ),
                break_even=cumulative_investor_return >= total_investment,
            )
        )

    if not payback_found:
        # Average-rate approximation, not a true extrapolation
        average_return = safe_divide(cumulative_investor_return, params.projection_years)
        payback_period = safe_divide(total_investment, average_return)

    irr = solve_irr(cash_flows)
    npv = calculate_npv(cash_flows, percent(params.discount_rate))

    total_roi = safe_divide(cumulative_investor_return - total_investment, total_investment) * 100
    growth = safe_divide(cumulative_investor_return, total_investment)
    annualized_roi = (safe_power(growth, safe_divide(1, params.projection_years)) - 1) * 100

    logger.debug(
        f"Tiered projection for {params.project_name!r}: {params.projection_years} years, "
        f"payback {payback_period:.2f}, IRR {irr.rate:.2f}% (converged={irr.converged})"
    )

    return ProjectionResult(
        total_investment=total_investment,
        projection=tuple(rows),
        payback_period=payback_period,
        payback_reached=payback_found,
        total_investor_returns=cumulative_investor_return,
        total_landlord_payments=cumulative_landlord_payment,
        total_roi=total_roi,
        annualized_roi=annualized_roi,
        irr=irr.rate,
        irr_converged=irr.converged,
        npv=npv,
        cash_flows=tuple(cash_flows),
    )
