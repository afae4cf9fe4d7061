"""
Scenario Analysis

Bear / base / bull comparison built on the basic model's first-year
metrics. Only rent, cost and vacancy overrides are applied.
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from revive_roi.calculations.basic import calculate_first_year_metrics
from revive_roi.calculations.parameters import DealParameters


@dataclass(frozen=True)
class ScenarioCase:
    """Parameter overrides for one scenario."""

    name: str
    rent_multiplier: float
    cost_multiplier: float
    vacancy_rate: Optional[float]  # None keeps the deal's vacancy rate
    delay_months: float = 0  # Informational only, not applied


@dataclass(frozen=True)
class ScenarioResult:
    scenario: str
    investment: float
    first_year_return: float
    first_year_roi: float  # %
    sustained_roi: float  # %
    payback_years: float


DEFAULT_SCENARIOS: Tuple[ScenarioCase, ...] = (
    ScenarioCase(
        name="Bear Case",
        rent_multiplier=0.85,
        cost_multiplier=1.2,
        vacancy_rate=15,
        delay_months=3,
    ),
    ScenarioCase(
        name="Base Case",
        rent_multiplier=1.0,
        cost_multiplier=1.0,
        vacancy_rate=None,
    ),
    ScenarioCase(
        name="Bull Case",
        rent_multiplier=1.15,
        cost_multiplier=0.9,
        vacancy_rate=5,
    ),
)


def apply_scenario(params: DealParameters, case: ScenarioCase) -> DealParameters:
    """Return a copy of the parameters with the scenario's overrides applied."""
    return replace(
        params,
        renovation_cost=params.renovation_cost * case.cost_multiplier,
        projected_annual_rent_per_unit=(
            params.projected_annual_rent_per_unit * case.rent_multiplier
        ),
        vacancy_rate=params.vacancy_rate if case.vacancy_rate is None else case.vacancy_rate,
    )


def evaluate_scenario(params: DealParameters, case: ScenarioCase) -> ScenarioResult:
    metrics = calculate_first_year_metrics(apply_scenario(params, case))
    return ScenarioResult(
        scenario=case.name,
        investment=metrics.total_investment,
        first_year_return=metrics.first_year_total_return,
        first_year_roi=metrics.first_year_roi,
        sustained_roi=metrics.sustained_roi,
        payback_years=metrics.payback_with_agreement_fees,
    )


def run_scenarios(
    params: DealParameters, cases: Sequence[ScenarioCase] = DEFAULT_SCENARIOS
) -> Tuple[ScenarioResult, ...]:
    """
    Evaluate each scenario case against the same base parameters.

    Args:
        params: Base deal parameters
        cases: Scenario overrides, bear/base/bull by default

    Returns:
        One ScenarioResult per case, in case order
    """
    return tuple(evaluate_scenario(params, case) for case in cases)
