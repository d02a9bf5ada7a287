import click
import pytest
from click.testing import CliRunner

from expreval.about import __version__
from expreval.cli import cli, parse_assignments


def test_cli_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_compute():
    runner = CliRunner()
    for problem, answer in [("2+3*4", "14.0"), ("2^3^2", "64.0"), ("", "0.0")]:
        result = runner.invoke(cli, ["compute", problem])
        assert result.exit_code == 0
        assert result.output.strip() == answer


def test_cli_compute_params_and_variable():
    runner = CliRunner()
    args = ["compute", "a*x^2 + b", "-p", "a=2", "--param", "b=1"]
    result = runner.invoke(cli, args + ["--var", "x", "--value", "3", "--optimize"])
    assert result.exit_code == 0
    assert result.output.strip() == "19.0"


def test_cli_compute_verbose():
    runner = CliRunner()
    result = runner.invoke(cli, ["compute", "sin(x) + 2*3", "--verbose", "--optimize"])
    # x is never assigned
    assert result.exit_code == 1
    assert "Built" in result.output
    assert "Optimized tree" in result.output


def test_cli_compute_errors():
    runner = CliRunner()
    for problem in ["3+", "sin(", "qz", "x + 1"]:
        result = runner.invoke(cli, ["compute", problem])
        assert result.exit_code == 1

    # Usage errors
    result = runner.invoke(cli, ["compute", "x", "--var", "x"])
    assert result.exit_code == 2
    result = runner.invoke(cli, ["compute", "a", "-p", "ab=1"])
    assert result.exit_code == 2


def test_cli_table():
    runner = CliRunner()
    result = runner.invoke(
        cli, ["table", "a*x^2", "-p", "a=1", "--start=0", "--stop=1", "--num=3"]
    )
    assert result.exit_code == 0
    assert "0.25" in result.output
    assert "a*x^2" in result.output


def test_cli_table_errors():
    runner = CliRunner()
    result = runner.invoke(cli, ["table", "x + y"])
    assert result.exit_code == 1
    result = runner.invoke(cli, ["table", "(x"])
    assert result.exit_code == 1


def test_cli_parse_assignments():
    assert parse_assignments(("a=1", " b = 2.5")) == {"a": 1.0, "b": 2.5}
    with pytest.raises(click.BadParameter):
        parse_assignments(("a",))
    with pytest.raises(click.BadParameter):
        parse_assignments(("a=two",))
