"""
Financial Calculation Engine

Projection and valuation modules for renovate-and-lease deals.
Every calculation is a pure function of a DealParameters snapshot.
"""

from revive_roi.calculations import analysis, basic, discount, parameters, risk, scenarios, tiered

__all__ = ["analysis", "basic", "discount", "parameters", "risk", "scenarios", "tiered"]
