"""Substitution (verification) checks for polysolve.

Substitutes roots, or a user-supplied value such as ``x = 3``, back into
the canonical polynomial and checks whether ``P(x) = 0`` holds, producing
step-by-step explanations along the way.
"""

import re
import time
from datetime import datetime

import sympy
from sympy import Symbol
from sympy.parsing.sympy_parser import (
    parse_expr, standard_transformations, implicit_multiplication_application,
    convert_xor,
)

from solver.numerical import fmt_num, residual_tolerance
from solver.parser import combine, parse_equation

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

X = Symbol("X")

_VALUE_RE = re.compile(r"^\s*(?:[Xx]\s*=)?\s*(?P<value>.+?)\s*$")


def to_expression(coefficients: dict[int, float]):
    """Build the SymPy expression ``sum(c * X**e)`` for *coefficients*."""
    return sympy.Add(*(sympy.Float(c) * X**exp for exp, c in coefficients.items()))


def _evaluate(coefficients: dict[int, float], value) -> complex:
    return complex(sympy.N(to_expression(coefficients).subs(X, value)))


def _sympy_value(root):
    if root.is_complex:
        return sympy.Float(root.real) + sympy.Float(root.imag) * sympy.I
    return sympy.Float(root.value)


def verify_solution(coefficients: dict[int, float], solution) -> list[dict]:
    """Substitute every root of *solution* into *coefficients*.

    Returns one step per root with ``passed`` set when ``|P(root)|`` is
    within floating-point tolerance. Solutions without roots give no steps.
    """
    steps = []
    for index, root in enumerate(solution.roots, start=1):
        label = f"x{index}" if len(solution.roots) > 1 else "x"
        residual = _evaluate(coefficients, _sympy_value(root))
        ok = abs(residual) <= residual_tolerance(coefficients, root.as_complex())
        steps.append({
            "description": f"Substitute {label} = {root.format()}",
            "expression": f"P({label}) = {fmt_num(residual.real)}"
                          + (f" + {fmt_num(residual.imag)}i" if residual.imag else ""),
            "explanation": (
                f"The reduced polynomial vanishes at {label} {'✓' if ok else '✗'}"
            ),
            "passed": ok,
        })
    return steps


def _parse_value(value_str: str):
    """Parse ``"3"``, ``"x = 3"`` or ``"1/2"`` into a SymPy number."""
    match = _VALUE_RE.match(value_str)
    if not match or not match.group("value"):
        raise ValueError(
            f"Invalid value format: '{value_str}'. Expected format: x = 3"
        )
    raw = match.group("value").replace("^", "**")
    try:
        value = parse_expr(raw, transformations=TRANSFORMATIONS)
    except Exception as e:
        raise ValueError(f"Could not parse value: '{value_str}'. Error: {e}")
    if value.free_symbols:
        raise ValueError(f"Value must be a number, got '{value_str}'.")
    if value.is_finite is False or value is sympy.nan:
        raise ValueError(f"Value must be finite, got '{value_str}'.")
    return value


def check_value(equation_str: str, value_str: str) -> dict:
    """Substitute a user-given value into an equation and verify it.

    Returns a dict with ``value``, ``lhs``, ``rhs``, ``holds``, ``steps``
    and ``summary``.
    """
    t_start = time.perf_counter()

    value = _parse_value(value_str)
    lhs, rhs = parse_equation(equation_str)
    lhs_val = _evaluate(lhs, value) if lhs else 0j
    rhs_val = _evaluate(rhs, value) if rhs else 0j
    coefficients = combine(lhs, rhs)
    numeric = complex(sympy.N(value))
    holds = abs(lhs_val - rhs_val) <= residual_tolerance(coefficients, numeric)

    def _show(v: complex) -> str:
        if v.imag:
            return f"{fmt_num(v.real)} + {fmt_num(v.imag)}i"
        return fmt_num(v.real)

    shown = _show(numeric)
    steps = [
        {
            "description": "Starting with the original equation",
            "expression": equation_str.strip(),
            "explanation": f"We check whether the equation holds when X = {shown}.",
        },
        {
            "description": f"Substitute X = {shown}",
            "expression": f"LHS = {_show(lhs_val)},  RHS = {_show(rhs_val)}",
            "explanation": f"Replace X with {shown} and compute each side.",
        },
        {
            "description": "Compare both sides",
            "expression": f"LHS {'=' if holds else '≠'} RHS  {'✓' if holds else '✗'}",
            "explanation": (
                f"X = {shown} is a solution of the equation."
                if holds else
                f"X = {shown} is not a solution of the equation."
            ),
        },
    ]

    t_end = time.perf_counter()
    return {
        "equation": equation_str.strip(),
        "value": shown,
        "lhs": _show(lhs_val),
        "rhs": _show(rhs_val),
        "holds": holds,
        "steps": steps,
        "summary": {
            "runtime_ms": round((t_end - t_start) * 1000, 2),
            "total_steps": len(steps),
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "library": f"SymPy {sympy.__version__}",
        },
    }
