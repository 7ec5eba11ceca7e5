from decimal import Decimal

import pytest

from src.engine.errors import NumericalDegeneracyError
from src.engine.irr import solve_irr


class TestSolveIRR:
    def test_simple_irr(self):
        """Lend $100, get $110 back one period later = 10%."""
        result = solve_irr([Decimal("-100"), Decimal("110")])
        assert result.converged
        assert abs(result.rate - Decimal("0.10")) < Decimal("0.00001")

    def test_level_annuity_recovers_rate(self):
        """Twelve payments of an annuity priced at 1% per month."""
        r = Decimal("0.01")
        pmt = Decimal("100000") * r / (1 - (1 + r) ** -12)
        result = solve_irr([Decimal("-100000")] + [pmt] * 12, 0.01)
        assert result.converged
        assert abs(result.rate - r) < Decimal("0.00001")

    def test_multi_period(self):
        cfs = [Decimal("-100000"), Decimal("10000"), Decimal("10000"),
               Decimal("10000"), Decimal("10000"), Decimal("130000")]
        result = solve_irr(cfs)
        assert Decimal("0.10") < result.rate < Decimal("0.20")

    def test_budget_exhausted_returns_best_estimate(self):
        result = solve_irr([Decimal("-100"), Decimal("110")], 0.0, max_iterations=1)
        assert not result.converged
        assert result.iterations == 1
        # One Newton step from 0% lands at 1/11, short of 10%
        assert Decimal("0.09") < result.rate < Decimal("0.10")

    def test_vanishing_derivative(self):
        """Only a time-zero flow: the NPV does not depend on the rate."""
        with pytest.raises(NumericalDegeneracyError):
            solve_irr([Decimal("-100"), Decimal("0")])

    def test_discount_factor_at_zero(self):
        with pytest.raises(NumericalDegeneracyError):
            solve_irr([Decimal("-100"), Decimal("110")], -1.0)

    def test_empty_cash_flows(self):
        result = solve_irr([])
        assert result.rate == Decimal("0")
        assert not result.converged
