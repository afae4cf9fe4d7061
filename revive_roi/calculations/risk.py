"""
Risk and Performance Classification

Maps tiered-model metrics to discrete tiers. Thresholds are checked in
order and the first match wins.
"""

from dataclasses import dataclass
from enum import Enum

from revive_roi.calculations.tiered import ProjectionResult


class RiskLevel(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class RiskImpact(str, Enum):
    SEVERE = "SEVERE"
    MODERATE = "MODERATE"
    MINIMAL = "MINIMAL"


class PerformanceGrade(str, Enum):
    EXCELLENT = "EXCELLENT"
    SOLID = "SOLID"
    MODERATE = "MODERATE"
    WEAK = "WEAK"


class IRRBand(str, Enum):
    STRONG = "STRONG"
    COMPETITIVE = "COMPETITIVE"
    WEAK = "WEAK"


# Total ROI in %, payback in years
HIGH_RISK_ROI = 50
HIGH_RISK_PAYBACK = 7
MEDIUM_RISK_ROI = 75
MEDIUM_RISK_PAYBACK = 5

STRONG_IRR = 15
COMPETITIVE_IRR = 10

_IMPACT = {
    RiskLevel.HIGH: RiskImpact.SEVERE,
    RiskLevel.MEDIUM: RiskImpact.MODERATE,
    RiskLevel.LOW: RiskImpact.MINIMAL,
}


@dataclass(frozen=True)
class RiskAssessment:
    level: RiskLevel
    impact: RiskImpact


@dataclass(frozen=True)
class PerformanceAssessment:
    grade: PerformanceGrade
    irr_band: IRRBand
    creates_value: bool  # NPV > 0 at the deal's discount rate


def classify_risk(total_roi: float, payback_years: float) -> RiskAssessment:
    """
    Classify deal risk from total ROI (%) and payback period (years).

    HIGH requires ROI strictly below 50% or payback strictly above 7 years,
    so a deal at exactly 50% ROI is at worst MEDIUM.
    """
    if total_roi < HIGH_RISK_ROI or payback_years > HIGH_RISK_PAYBACK:
        level = RiskLevel.HIGH
    elif total_roi < MEDIUM_RISK_ROI or payback_years > MEDIUM_RISK_PAYBACK:
        level = RiskLevel.MEDIUM
    else:
        level = RiskLevel.LOW
    return RiskAssessment(level=level, impact=_IMPACT[level])


def grade_performance(total_roi: float, payback_years: float) -> PerformanceGrade:
    if total_roi >= 150 and payback_years <= 4:
        return PerformanceGrade.EXCELLENT
    if total_roi >= 100 and payback_years <= 6:
        return PerformanceGrade.SOLID
    if total_roi >= 50:
        return PerformanceGrade.MODERATE
    return PerformanceGrade.WEAK


def classify_irr(irr: float) -> IRRBand:
    if irr >= STRONG_IRR:
        return IRRBand.STRONG
    if irr >= COMPETITIVE_IRR:
        return IRRBand.COMPETITIVE
    return IRRBand.WEAK


def assess_risk(result: ProjectionResult) -> RiskAssessment:
    return classify_risk(result.total_roi, result.payback_period)


def assess_performance(result: ProjectionResult) -> PerformanceAssessment:
    """Grade a tiered projection on ROI/payback, IRR and NPV."""
    return PerformanceAssessment(
        grade=grade_performance(result.total_roi, result.payback_period),
        irr_band=classify_irr(result.irr),
        creates_value=result.npv > 0,
    )
