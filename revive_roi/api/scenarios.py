"""
Scenario comparison API endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List, Optional

from revive_roi.api.schemas import DealInput, ScenarioResponse
from revive_roi.calculations.scenarios import DEFAULT_SCENARIOS, run_scenarios

router = APIRouter()


class ScenarioCaseResponse(BaseModel):
    """Overrides applied by one scenario."""

    name: str
    rent_multiplier: float
    cost_multiplier: float
    vacancy_rate: Optional[float] = None  # None keeps the deal's vacancy rate
    delay_months: float = 0


class ScenarioComparisonResponse(BaseModel):
    project_name: str
    scenarios: List[ScenarioResponse]


@router.get("/presets", response_model=List[ScenarioCaseResponse])
async def list_scenario_presets():
    """List the bear/base/bull overrides."""
    return [
        ScenarioCaseResponse(
            name=case.name,
            rent_multiplier=case.rent_multiplier,
            cost_multiplier=case.cost_multiplier,
            vacancy_rate=case.vacancy_rate,
            delay_months=case.delay_months,
        )
        for case in DEFAULT_SCENARIOS
    ]


@router.post("/", response_model=ScenarioComparisonResponse)
async def compare_scenarios(inputs: DealInput):
    """Compare first-year and sustained returns across the preset scenarios."""
    results = run_scenarios(inputs.to_parameters())
    return ScenarioComparisonResponse(
        project_name=inputs.project_name,
        scenarios=[ScenarioResponse.from_result(r) for r in results],
    )
