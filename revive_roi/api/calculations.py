"""
Financial calculation API endpoints.

These endpoints accept deal inputs and return calculated results.
The engine is pure and fast, so every request recomputes (or hits the
analysis cache) rather than storing anything.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List, Optional

from revive_roi.api.schemas import (
    BasicProjectionResponse,
    DealInput,
    PerformanceResponse,
    ProjectionResponse,
    RiskResponse,
    ScenarioResponse,
    finite_or_none,
)
from revive_roi.calculations import discount
from revive_roi.calculations.analysis import analyze_deal
from revive_roi.calculations.basic import calculate_basic_projection
from revive_roi.calculations.risk import classify_risk
from revive_roi.calculations.tiered import calculate_tiered_projection

router = APIRouter()


@router.post("/basic", response_model=BasicProjectionResponse)
async def calculate_basic(inputs: DealInput):
    """Single-rate projection with first-year and sustained ROI."""
    result = calculate_basic_projection(inputs.to_parameters())
    return BasicProjectionResponse.from_projection(result)


@router.post("/advanced", response_model=ProjectionResponse)
async def calculate_advanced(inputs: DealInput):
    """Tiered projection with escalation, landlord split, shocks, IRR and NPV."""
    result = calculate_tiered_projection(inputs.to_parameters())
    return ProjectionResponse.from_result(result)


class AnalysisResponse(BaseModel):
    """Every model's output for one deal."""

    project_name: str
    basic: BasicProjectionResponse
    advanced: ProjectionResponse
    scenarios: List[ScenarioResponse]
    risk: RiskResponse
    performance: PerformanceResponse


@router.post("/analysis", response_model=AnalysisResponse)
async def calculate_analysis(inputs: DealInput):
    """Run the basic, tiered, scenario and risk models together."""
    analysis = analyze_deal(inputs.to_parameters())

    return AnalysisResponse(
        project_name=analysis.parameters.project_name,
        basic=BasicProjectionResponse.from_projection(analysis.basic),
        advanced=ProjectionResponse.from_result(analysis.advanced),
        scenarios=[ScenarioResponse.from_result(s) for s in analysis.scenarios],
        risk=RiskResponse.from_assessment(analysis.risk),
        performance=PerformanceResponse.from_assessment(analysis.performance),
    )


class IRRInput(BaseModel):
    """Input for IRR calculation."""

    cash_flows: List[float]
    discount_rate: float = 10.0  # %, for the NPV figure


class IRRResponse(BaseModel):
    """Response with IRR calculation."""

    irr: Optional[float]  # %
    converged: bool
    iterations: int
    multiple: Optional[float]
    profit: float
    npv: Optional[float]


@router.post("/irr", response_model=IRRResponse)
async def calculate_irr_endpoint(inputs: IRRInput):
    """Calculate IRR and NPV for arbitrary periodic cash flows."""
    if len(inputs.cash_flows) < 2:
        raise HTTPException(status_code=400, detail="At least 2 cash flows required")

    solution = discount.solve_irr(inputs.cash_flows)
    npv = discount.calculate_npv(inputs.cash_flows, inputs.discount_rate / 100)

    return IRRResponse(
        irr=finite_or_none(solution.rate),
        converged=solution.converged,
        iterations=solution.iterations,
        multiple=finite_or_none(discount.calculate_multiple(inputs.cash_flows)),
        profit=sum(inputs.cash_flows),
        npv=finite_or_none(npv),
    )


class RiskInput(BaseModel):
    """Input for risk classification."""

    total_roi: float  # %
    payback_years: float


@router.post("/risk", response_model=RiskResponse)
async def calculate_risk(inputs: RiskInput):
    """Classify risk from total ROI and payback period."""
    return RiskResponse.from_assessment(
        classify_risk(inputs.total_roi, inputs.payback_years)
    )
