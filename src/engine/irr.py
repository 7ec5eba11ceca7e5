"""IRR computation using scipy's Newton-Raphson.

Pure functions. No I/O.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

from scipy.optimize import newton

from src.engine.errors import NumericalDegeneracyError

logger = logging.getLogger(__name__)

DEFAULT_GUESS = 0.10
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_TOLERANCE = 1e-5


@dataclass(frozen=True)
class IRRResult:
    rate: Decimal
    converged: bool
    iterations: int


def _npv(rate: float, cash_flows: list[float]) -> float:
    return sum(cf / (1 + rate) ** t for t, cf in enumerate(cash_flows))


def _npv_derivative(rate: float, cash_flows: list[float]) -> float:
    dnpv = sum(-t * cf / (1 + rate) ** (t + 1) for t, cf in enumerate(cash_flows))
    if dnpv == 0:
        raise NumericalDegeneracyError("NPV derivative vanished", {"rate": rate})
    return dnpv


def solve_irr(
    cash_flows: list[Decimal],
    initial_guess: float = DEFAULT_GUESS,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
) -> IRRResult:
    """Solve NPV(rate) = 0 for a series of periodic cash flows.

    cash_flows[t] happens t periods from now, so the returned rate is per
    period. Stops once a Newton step moves the rate by less than
    `tolerance`. If the iteration budget runs out the last estimate is
    returned with converged=False; deciding whether that is fatal is up to
    the caller.

    Raises NumericalDegeneracyError when the derivative vanishes, a discount
    factor hits zero, or the estimate stops being finite.
    """
    if not cash_flows or len(cash_flows) < 2:
        return IRRResult(rate=Decimal("0"), converged=False, iterations=0)

    # Convert to float for scipy
    cf_float = [float(cf) for cf in cash_flows]

    try:
        root, info = newton(
            _npv,
            initial_guess,
            fprime=_npv_derivative,
            args=(cf_float,),
            tol=tolerance,
            maxiter=max_iterations,
            full_output=True,
            disp=False,
        )
    except (ZeroDivisionError, OverflowError) as e:
        raise NumericalDegeneracyError(
            f"IRR iteration broke down: {e}", {"initial_guess": initial_guess}
        ) from e

    root = float(root)
    if not math.isfinite(root):
        raise NumericalDegeneracyError("IRR estimate is not finite", {"estimate": root})

    if not info.converged:
        logger.warning(
            "IRR did not converge after %d iterations; best estimate %.8f", info.iterations, root
        )
    else:
        logger.debug("IRR converged to %.8f in %d iterations", root, info.iterations)

    return IRRResult(rate=Decimal(str(root)), converged=bool(info.converged), iterations=info.iterations)
