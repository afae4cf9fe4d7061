"""
Deal Parameters

Immutable input record for the projection models. Defaults describe the
reference four-unit renovate-and-lease deal.
"""

from dataclasses import dataclass


def percent(value: float) -> float:
    """Convert a whole-number percentage (10 means 10%) to a decimal."""
    return value / 100


@dataclass(frozen=True)
class DealParameters:
    """
    Everything needed to project a renovate-and-lease deal.

    All percentages are whole numbers and are divided by 100 where used.
    The record is hashable so a full snapshot can key a cache.
    """

    project_name: str = "Revive Capital Project 1"

    # Core project
    renovation_cost: float = 8_000_000
    number_of_units: float = 4
    projected_annual_rent_per_unit: float = 700_000
    agreement_fee_per_unit: float = 300_000
    operating_expenses_monthly: float = 50_000  # Used only when the percent is 0
    operating_expenses_percent: float = 10  # % of gross rent
    management_fee: float = 10  # % of gross rent
    vacancy_rate: float = 8  # %
    maintenance_reserve: float = 5  # % of gross rent
    project_duration_months: float = 6  # Renovation months with no rent
    major_maintenance_year: float = 8  # 1-based projection year
    major_maintenance_cost: float = 700_000

    # Escalation and landlord tiers
    rent_increase_rate: float = 5  # % per step
    rent_increase_frequency: float = 2  # Years between steps
    landlord_tier1_years: float = 3
    landlord_tier1_percent: float = 15
    landlord_tier2_years: float = 5
    landlord_tier2_percent: float = 25
    landlord_tier3_percent: float = 35  # All remaining years
    projection_years: int = 12
    discount_rate: float = 10  # %

    # Sensitivity shocks
    rent_sensitivity: float = 0  # %
    vacancy_sensitivity: float = 0  # Months of lost rent in year 1
    cost_sensitivity: float = 0  # %
    delay_sensitivity: float = 0  # Months of extra delay in year 1

    @property
    def total_units_rent(self) -> float:
        """Gross annual rent across all units, before shocks."""
        return self.projected_annual_rent_per_unit * self.number_of_units

    @property
    def total_agreement_fees(self) -> float:
        return self.agreement_fee_per_unit * self.number_of_units

    def annual_operating_expenses(self, gross_annual_rent: float) -> float:
        """
        Annual operating expenses for a given gross rent.

        The percentage input takes precedence whenever it is nonzero; the flat
        monthly figure is only a fallback.
        """
        if self.operating_expenses_percent > 0:
            return gross_annual_rent * percent(self.operating_expenses_percent)
        return self.operating_expenses_monthly * 12
