"""Numeric helpers shared by the renderer, the solver and the display layers."""

import math

import numpy as np


# ── Numeric formatting helpers ──────────────────────────────────────────

def fmt_num(value: float, max_decimals: int = 10) -> str:
    """Format a float into a clean decimal string.

    - Removes trailing zeros after the decimal point.
    - Uses up to *max_decimals* digits of precision.
    - Returns integers without a decimal point (e.g. ``7`` not ``7.0``).
    """
    if not math.isfinite(value):
        return str(value)
    if abs(value - round(value)) < 1e-12:
        return str(int(round(value)))
    formatted = f"{value:.{max_decimals}f}".rstrip("0").rstrip(".")
    if formatted in ("-0", ""):
        return "0"
    return formatted


def exact_num(value: float) -> str:
    """Shortest decimal that reads back as *value*, never in exponent notation.

    ``4.0`` → ``'4'``, ``1/3`` → ``'0.3333333333333333'``,
    ``1e-11`` → ``'0.00000000001'``.
    """
    if value == 0:
        return "0"
    return np.format_float_positional(value, trim="-")


def format_root(root, precision: int = 2) -> str:
    """Render a real root exactly, a complex one as ``a + bi`` to *precision* places."""
    if root.kind == "complex":
        sign = "-" if root.imag < 0 else "+"
        return f"{root.real:.{precision}f} {sign} {abs(root.imag):.{precision}f}i"
    return exact_num(root.value)


# ── Evaluation ──────────────────────────────────────────────────────────

def to_dense(coefficients: dict[int, float]) -> np.ndarray:
    """Return the coefficients highest power first, as ``np.polyval`` expects."""
    degree = max(coefficients) if coefficients else 0
    dense = np.zeros(degree + 1, dtype=float)
    for exp, coeff in coefficients.items():
        dense[degree - exp] = coeff
    return dense


def evaluate(coefficients: dict[int, float], x):
    """Evaluate the canonical polynomial at *x* (scalar, complex or array)."""
    return np.polyval(to_dense(coefficients), x)


def residual_tolerance(coefficients: dict[int, float], x=0.0) -> float:
    """Absolute tolerance for ``P(x) == 0``, scaled to the size of the terms."""
    scale = sum(abs(c) * abs(x) ** exp for exp, c in coefficients.items())
    return 1e-9 * max(1.0, scale)
