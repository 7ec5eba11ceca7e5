import pytest

from src.cli import main


class TestCLI:
    def test_monthly_report(self, capsys):
        code = main(["--amount", "100000", "--rate", "0.08", "--years", "1", "--start", "2025-01-15"])
        out = capsys.readouterr().out
        assert code == 0
        assert "8.0000%" in out
        assert "8,685.94" in out
        assert "2026-01-15" in out

    def test_yearly_report(self, capsys):
        code = main(["--amount", "200000", "--rate", "0.09", "--rate-type", "nominal",
                     "--capitalization", "quarterly", "--years", "3", "--grace", "partial",
                     "--grace-months", "6", "--yearly"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Year" in out
        assert "partial (6 months)" in out

    def test_invalid_parameters_exit_nonzero(self, capsys):
        code = main(["--amount", "100000", "--rate", "0.08", "--years", "1",
                     "--grace", "total", "--grace-months", "12"])
        err = capsys.readouterr().err
        assert code == 1
        assert "Grace period" in err

    @pytest.mark.parametrize("flag,value", [("--amount", "NaN"), ("--rate", "Infinity")])
    def test_non_finite_input_exit_nonzero(self, capsys, flag, value):
        args = {"--amount": "100000", "--rate": "0.08"}
        args[flag] = value
        code = main(["--amount", args["--amount"], "--rate", args["--rate"], "--years", "1"])
        err = capsys.readouterr().err
        assert code == 1
        assert "finite" in err
