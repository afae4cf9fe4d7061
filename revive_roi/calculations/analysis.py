"""
Deal Analysis

Runs every model for one parameter snapshot. Results are memoized on the
full (frozen, hashable) parameter record; all returned records are frozen,
so sharing a cached result between callers is safe.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from revive_roi.calculations.basic import BasicProjection, calculate_basic_projection
from revive_roi.calculations.parameters import DealParameters
from revive_roi.calculations.risk import (
    PerformanceAssessment,
    RiskAssessment,
    assess_performance,
    assess_risk,
)
from revive_roi.calculations.scenarios import ScenarioResult, run_scenarios
from revive_roi.calculations.tiered import ProjectionResult, calculate_tiered_projection

ANALYSIS_CACHE_SIZE = 128


@dataclass(frozen=True)
class DealAnalysis:
    parameters: DealParameters
    basic: BasicProjection
    advanced: ProjectionResult
    scenarios: Tuple[ScenarioResult, ...]
    risk: RiskAssessment
    performance: PerformanceAssessment


@lru_cache(maxsize=ANALYSIS_CACHE_SIZE)
def analyze_deal(params: DealParameters) -> DealAnalysis:
    """Basic, tiered, scenario and risk outputs for one deal."""
    advanced = calculate_tiered_projection(params)
    return DealAnalysis(
        parameters=params,
        basic=calculate_basic_projection(params),
        advanced=advanced,
        scenarios=run_scenarios(params),
        risk=assess_risk(advanced),
        performance=assess_performance(advanced),
    )
