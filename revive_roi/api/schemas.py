"""
Request and response schemas shared by the API routers.

DealInput is the boundary between raw form input and the engine: anything
that does not parse as a number becomes 0 before DealParameters is built.
Responses replace non-finite floats with null because JSON cannot carry
inf or nan.
"""

import math
from dataclasses import asdict, fields
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationInfo, field_validator

from revive_roi.calculations.basic import (
    MAX_PROJECTION_YEARS,
    BasicProjection,
    FirstYearMetrics,
)
from revive_roi.calculations.parameters import DealParameters
from revive_roi.calculations.risk import (
    IRRBand,
    PerformanceAssessment,
    PerformanceGrade,
    RiskAssessment,
    RiskImpact,
    RiskLevel,
)
from revive_roi.calculations.scenarios import ScenarioResult
from revive_roi.calculations.tiered import ProjectionResult

_DEFAULTS = DealParameters()


def _coerce_float(val: Any, default: float = 0.0) -> float:
    if val is None or isinstance(val, bool):
        return default
    if isinstance(val, str):
        val = val.strip()
    try:
        number = float(val)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    return number


def finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return value


def record_to_dict(record) -> Dict[str, Any]:
    """Flatten a frozen engine record into JSON-safe values."""
    row = {}
    for key, value in asdict(record).items():
        if isinstance(value, float):
            value = finite_or_none(value)
        row[key] = value
    return row


class DealInput(BaseModel):
    """
    Deal parameters as submitted by a form; every numeric field falls back to 0 when unparseable.

    projection_years is truncated and clamped to 0..MAX_PROJECTION_YEARS.
    """

    project_name: str = _DEFAULTS.project_name

    # Core project
    renovation_cost: float = _DEFAULTS.renovation_cost
    number_of_units: float = _DEFAULTS.number_of_units
    projected_annual_rent_per_unit: float = _DEFAULTS.projected_annual_rent_per_unit
    agreement_fee_per_unit: float = _DEFAULTS.agreement_fee_per_unit
    operating_expenses_monthly: float = _DEFAULTS.operating_expenses_monthly
    operating_expenses_percent: float = _DEFAULTS.operating_expenses_percent
    management_fee: float = _DEFAULTS.management_fee
    vacancy_rate: float = _DEFAULTS.vacancy_rate
    maintenance_reserve: float = _DEFAULTS.maintenance_reserve
    project_duration_months: float = _DEFAULTS.project_duration_months
    major_maintenance_year: float = _DEFAULTS.major_maintenance_year
    major_maintenance_cost: float = _DEFAULTS.major_maintenance_cost

    # Escalation and landlord tiers
    rent_increase_rate: float = _DEFAULTS.rent_increase_rate
    rent_increase_frequency: float = _DEFAULTS.rent_increase_frequency
    landlord_tier1_years: float = _DEFAULTS.landlord_tier1_years
    landlord_tier1_percent: float = _DEFAULTS.landlord_tier1_percent
    landlord_tier2_years: float = _DEFAULTS.landlord_tier2_years
    landlord_tier2_percent: float = _DEFAULTS.landlord_tier2_percent
    landlord_tier3_percent: float = _DEFAULTS.landlord_tier3_percent
    projection_years: int = _DEFAULTS.projection_years
    discount_rate: float = _DEFAULTS.discount_rate

    # Sensitivity shocks
    rent_sensitivity: float = _DEFAULTS.rent_sensitivity
    vacancy_sensitivity: float = _DEFAULTS.vacancy_sensitivity
    cost_sensitivity: float = _DEFAULTS.cost_sensitivity
    delay_sensitivity: float = _DEFAULTS.delay_sensitivity

    @field_validator("project_name", mode="before")
    @classmethod
    def _default_project_name(cls, value: Any) -> str:
        if value is None:
            return _DEFAULTS.project_name
        return str(value)

    @field_validator("projection_years", mode="before")
    @classmethod
    def _coerce_years(cls, value: Any) -> int:
        years = _coerce_float(value)
        if not math.isfinite(years):
            return 0
        return min(max(int(years), 0), MAX_PROJECTION_YEARS)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any, info: ValidationInfo) -> Any:
        if info.field_name in ("project_name", "projection_years"):
            return value
        return _coerce_float(value)

    def to_parameters(self) -> DealParameters:
        names = {f.name for f in fields(DealParameters)}
        return DealParameters(**{k: v for k, v in self.model_dump().items() if k in names})


class FirstYearMetricsResponse(BaseModel):
    total_investment: Optional[float]
    total_projected_annual_rent: Optional[float]
    total_agreement_fees: Optional[float]
    effective_annual_rent: Optional[float]
    annual_operating_expenses: Optional[float]
    annual_management_fees: Optional[float]
    annual_maintenance_reserve: Optional[float]
    annual_net_income: Optional[float]
    monthly_net_income: Optional[float]
    first_year_total_return: Optional[float]
    payback_with_agreement_fees: Optional[float]
    first_year_roi: Optional[float]
    sustained_roi: Optional[float]

    @classmethod
    def from_metrics(cls, metrics: FirstYearMetrics) -> "FirstYearMetricsResponse":
        return cls(**record_to_dict(metrics))


class BasicProjectionResponse(BaseModel):
    metrics: FirstYearMetricsResponse
    projection_years: int
    cash_flow_projection: List[dict]

    @classmethod
    def from_projection(cls, result: BasicProjection) -> "BasicProjectionResponse":
        return cls(
            metrics=FirstYearMetricsResponse.from_metrics(result.metrics),
            projection_years=result.projection_years,
            cash_flow_projection=[record_to_dict(r) for r in result.cash_flow_projection],
        )


class ProjectionMetrics(BaseModel):
    total_investment: Optional[float]
    payback_period: Optional[float]
    payback_reached: bool
    total_investor_returns: Optional[float]
    total_landlord_payments: Optional[float]
    total_roi: Optional[float]
    annualized_roi: Optional[float]
    irr: Optional[float]
    irr_converged: bool
    npv: Optional[float]


class ProjectionResponse(BaseModel):
    metrics: ProjectionMetrics
    projection: List[dict]
    cash_flows: List[Optional[float]]

    @classmethod
    def from_result(cls, result: ProjectionResult) -> "ProjectionResponse":
        return cls(
            metrics=ProjectionMetrics(
                total_investment=finite_or_none(result.total_investment),
                payback_period=finite_or_none(result.payback_period),
                payback_reached=result.payback_reached,
                total_investor_returns=finite_or_none(result.total_investor_returns),
                total_landlord_payments=finite_or_none(result.total_landlord_payments),
                total_roi=finite_or_none(result.total_roi),
                annualized_roi=finite_or_none(result.annualized_roi),
                irr=finite_or_none(result.irr),
                irr_converged=result.irr_converged,
                npv=finite_or_none(result.npv),
            ),
            projection=[record_to_dict(r) for r in result.projection],
            cash_flows=[finite_or_none(cf) for cf in result.cash_flows],
        )


class ScenarioResponse(BaseModel):
    scenario: str
    investment: Optional[float]
    first_year_return: Optional[float]
    first_year_roi: Optional[float]
    sustained_roi: Optional[float]
    payback_years: Optional[float]

    @classmethod
    def from_result(cls, result: ScenarioResult) -> "ScenarioResponse":
        return cls(**record_to_dict(result))


class RiskResponse(BaseModel):
    level: RiskLevel
    impact: RiskImpact

    @classmethod
    def from_assessment(cls, assessment: RiskAssessment) -> "RiskResponse":
        return cls(level=assessment.level, impact=assessment.impact)


class PerformanceResponse(BaseModel):
    grade: PerformanceGrade
    irr_band: IRRBand
    creates_value: bool

    @classmethod
    def from_assessment(cls, assessment: PerformanceAssessment) -> "PerformanceResponse":
        return cls(
            grade=assessment.grade,
            irr_band=assessment.irr_band,
            creates_value=assessment.creates_value,
        )
