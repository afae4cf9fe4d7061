"""
Discounting, NPV and IRR Calculations

Time-value-of-money primitives shared by the projection models. IRR uses a
Newton-Raphson search that never raises: when it cannot converge it reports
the last rate it reached.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 1000
TOLERANCE = 1e-4
DEFAULT_GUESS = 0.1
MIN_RATE = -0.99
MAX_RATE = 5.0


@dataclass(frozen=True)
class IRRSolution:
    """Outcome of an IRR search."""

    rate: float  # Percent (e.g., 15.0 for 15%)
    converged: bool
    iterations: int


def safe_divide(numerator: float, denominator: float) -> float:
    """
    Divide with IEEE semantics instead of raising.

    x / 0 gives +/-inf and 0 / 0 gives nan, so degenerate deals surface as
    non-finite metrics rather than exceptions.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(numerator), np.float64(denominator)))


def safe_power(base: float, exponent: float) -> float:
    """Raise to a power; overflow gives inf and a negative base with a fractional exponent gives nan."""
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        return float(np.power(np.float64(base), np.float64(exponent)))


def calculate_present_value(cash_flow: float, rate: float, period: int) -> float:
    """
    Discount a single cash flow back to period 0.

    Args:
        cash_flow: Amount received at the end of `period`
        rate: Discount rate as decimal (e.g., 0.10 for 10%)
        period: Number of periods to discount

    Returns:
        Present value
    """
    return safe_divide(cash_flow, safe_power(1 + rate, period))


def calculate_npv(cash_flows: Sequence[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of periodic cash flows.

    Period 0 (the initial outlay) is not discounted.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow)
        discount_rate: Discount rate per period as decimal (e.g., 0.10 for 10%)

    Returns:
        NPV value
    """
    flows = np.asarray(cash_flows, dtype=float)
    if flows.size == 0:
        return 0.0

    periods = np.arange(flows.size)
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        factors = np.power(np.float64(1 + discount_rate), periods)
        return float(np.sum(flows / factors))


def _npv_derivative(cash_flows: Sequence[float], rate: float) -> float:
    """Derivative of NPV with respect to rate (for Newton-Raphson). Period 0 contributes nothing."""
    flows = np.asarray(cash_flows, dtype=float)
    if flows.size < 2:
        return 0.0

    periods = np.arange(1, flows.size)
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        factors = np.power(np.float64(1 + rate), periods + 1)
        return float(np.sum(-periods * flows[1:] / factors))


def solve_irr(cash_flows: Sequence[float], guess: float = DEFAULT_GUESS) -> IRRSolution:
    """
    Search for the IRR and report whether the search converged.

    Each step is clamped to [-99%, +500%] so overshooting near the
    (1 + rate) = 0 singularity cannot diverge. The search stops early when
    the derivative is too small to trust the next step.

    Args:
        cash_flows: Array of periodic cash flows, index 0 = initial outlay
        guess: Initial guess for rate (default 0.1 = 10%)

    Returns:
        IRRSolution with the rate as a percentage
    """
    rate = guess

    for iteration in range(1, MAX_ITERATIONS + 1):
        npv = calculate_npv(cash_flows, rate)

        if abs(npv) < TOLERANCE:
            return IRRSolution(rate=rate * 100, converged=True, iterations=iteration)

        dnpv = _npv_derivative(cash_flows, rate)

        if abs(dnpv) < TOLERANCE:
            logger.debug(f"IRR search stalled at {rate:.6f}: derivative too small")
            return IRRSolution(rate=rate * 100, converged=False, iterations=iteration)

        new_rate = rate - npv / dnpv

        if new_rate < MIN_RATE:
            rate = MIN_RATE
        elif new_rate > MAX_RATE:
            rate = MAX_RATE
        else:
            rate = new_rate

    logger.debug(f"IRR search hit {MAX_ITERATIONS} iterations, last rate {rate:.6f}")
    return IRRSolution(rate=rate * 100, converged=False, iterations=MAX_ITERATIONS)


def calculate_irr(cash_flows: Sequence[float], guess: float = DEFAULT_GUESS) -> float:
    """
    Calculate IRR (Internal Rate of Return) as a percentage.

    Returns the best-effort rate whether or not the search converged; use
    solve_irr() to find out which.
    """
    return solve_irr(cash_flows, guess).rate


def calculate_multiple(cash_flows: Sequence[float]) -> float:
    """
    Calculate equity multiple.

    Returns:
        Multiple (e.g., 2.0 = 2.0x return); inf or nan when there is no outflow
    """
    total_inflows = sum(cf for cf in cash_flows if cf > 0)
    total_outflows = abs(sum(cf for cf in cash_flows if cf < 0))
    return safe_divide(total_inflows, total_outflows)
