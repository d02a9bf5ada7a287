"""Expreval CLI
---

Command line application for evaluating formulas with Expreval.
"""
from typing import Dict, Optional, Tuple

import click
import numpy as np
from wasabi import msg

from . import about
from .config import BuildPolicy, ExpressionConfig
from .core.errors import ExpressionException
from .expression import Expression


def parse_assignments(assignments: Tuple[str, ...]) -> Dict[str, float]:
    """Turn `NAME=VALUE` option strings into a parameter dictionary"""
    result: Dict[str, float] = {}
    for item in assignments:
        name, sep, value = item.partition("=")
        name = name.strip()
        if sep == "" or len(name) != 1:
            raise click.BadParameter(f"expected NAME=VALUE, got '{item}'")
        try:
            result[name] = float(value)
        except ValueError:
            raise click.BadParameter(f"'{value}' is not a number") from None
    return result


def make_expression(
    text: str, params: Tuple[str, ...], optimize: bool, verbose: bool = False
) -> Expression:
    policy = BuildPolicy.BUILD_AND_OPTIMIZE if optimize else BuildPolicy.BUILD
    expr = Expression(config=ExpressionConfig(policy=policy, verbose=verbose))
    for name, value in parse_assignments(params).items():
        expr.set_param(name, value)
    try:
        expr.build(text)
    except ExpressionException as error:
        msg.fail(f"Cannot parse '{text}'", str(error), exits=1)
    return expr


@click.group()
@click.version_option(version=about.__version__)
def cli():
    """
    Expreval

    Compile math formulas into expression trees and evaluate them.
    """


@cli.command("compute")
@click.argument("expression", type=str)
@click.option(
    "params",
    "--param",
    "-p",
    multiple=True,
    help="Assign a parameter value, e.g. -p a=2.5 (repeatable)",
)
@click.option("var", "--var", default=None, help="Free variable to bind")
@click.option("value", "--value", type=float, default=None, help="Free variable value")
@click.option("optimize", "--optimize", is_flag=True, help="Optimize before evaluating")
@click.option("verbose", "--verbose", is_flag=True, help="Print build details")
def cli_compute(
    expression: str,
    params: Tuple[str, ...],
    var: Optional[str],
    value: Optional[float],
    optimize: bool,
    verbose: bool,
):
    """Evaluate an expression once and print the result."""
    if (var is None) != (value is None):
        raise click.UsageError("--var and --value must be used together")
    expr = make_expression(expression, params, optimize, verbose)
    try:
        result = expr.eval(var, value)
    except ExpressionException as error:
        msg.fail(f"Cannot evaluate '{expression}'", str(error), exits=1)
    click.echo(f"{result}")


@cli.command("table")
@click.argument("expression", type=str)
@click.option("var", "--var", default="x", help="Free variable to sweep")
@click.option("start", "--start", type=float, default=0.0)
@click.option("stop", "--stop", type=float, default=1.0)
@click.option("number", "--num", type=int, default=11, help="Number of samples")
@click.option(
    "params",
    "--param",
    "-p",
    multiple=True,
    help="Assign a parameter value, e.g. -p a=2.5 (repeatable)",
)
@click.option("optimize", "--optimize", is_flag=True, help="Optimize before evaluating")
def cli_table(
    expression: str,
    var: str,
    start: float,
    stop: float,
    number: int,
    params: Tuple[str, ...],
    optimize: bool,
):
    """Print a table of an expression's values over a range of its free
    variable."""
    expr = make_expression(expression, params, optimize)
    function = expr.as_unary(var)
    assert function is not None
    msg.divider(expression)
    data = []
    try:
        for x in np.linspace(start, stop, number):
            data.append((f"{x:g}", f"{function(float(x)):g}"))
    except ExpressionException as error:
        msg.fail(f"Cannot evaluate '{expression}'", str(error), exits=1)
    msg.table(data, header=(var, "value"), divider=True, aligns=("r", "r"))


if __name__ == "__main__":
    cli()
