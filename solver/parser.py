"""Equation parser for polysolve.

Turns an equation such as ``5 * X^0 + 4 * X^1 - 9.3 * X^2 = 1 * X^0`` into
one coefficient mapping per side (``{exponent: coefficient}``) and merges
the two sides into the canonical mapping of ``P(X) = 0``.
"""

import logging
import math
import re

logger = logging.getLogger(__name__)

# [sign][coefficient][*]X^<exponent>, matched on whitespace-free text.
_TERM_RE = re.compile(
    r"(?P<sign>[+-]?)"
    r"(?P<coeff>\d+(?:\.\d*)?|\.\d+)?"
    r"\*?"
    r"[Xx]\^(?P<exp>\d+)"
)

_WHITESPACE_RE = re.compile(r"\s+")


class FormatError(ValueError):
    """Raised when the equation has no usable ``=`` separator or an empty side."""


def split_equation(equation_str: str) -> tuple[str, str]:
    """Strip all whitespace and return the ``(lhs, rhs)`` strings.

    Raises FormatError unless there is exactly one ``=`` with text on both
    sides of it.
    """
    cleaned = _WHITESPACE_RE.sub("", equation_str)
    if "=" not in cleaned:
        raise FormatError("Equation must contain '='. Example: 5 * X^0 + 4 * X^1 = 4 * X^0")

    parts = cleaned.split("=")
    if len(parts) != 2:
        raise FormatError("Equation must contain exactly one '=' sign.")

    lhs, rhs = parts
    if not lhs or not rhs:
        raise FormatError("Both sides of the equation must have expressions.")
    return lhs, rhs


def _iter_terms(side_str: str):
    """Yield ``(sign, magnitude, exponent)`` for every term found in *side_str*."""
    for match in _TERM_RE.finditer(side_str):
        sign = -1 if match.group("sign") == "-" else 1
        coeff = match.group("coeff")
        magnitude = float(coeff) if coeff else 1.0
        yield sign, magnitude, int(match.group("exp"))


def ensure_finite(coefficients: dict[int, float]) -> dict[int, float]:
    """Raise FormatError if a coefficient overflowed to infinity (or NaN)."""
    for exp, coeff in coefficients.items():
        if not math.isfinite(coeff):
            raise FormatError(f"Coefficient of X^{exp} is too large to represent.")
    return coefficients


def parse_side(side_str: str) -> dict[int, float]:
    """Parse one side of the equation into ``{exponent: coefficient}``.

    Terms sharing an exponent are summed. A side without any term gives an
    empty mapping.
    """
    terms: dict[int, float] = {}
    for sign, magnitude, exponent in _iter_terms(_WHITESPACE_RE.sub("", side_str)):
        terms[exponent] = terms.get(exponent, 0.0) + sign * magnitude
    return ensure_finite(terms)


def parse_equation(equation_str: str) -> tuple[dict[int, float], dict[int, float]]:
    """Return the coefficient mappings of the left and right sides."""
    lhs_str, rhs_str = split_equation(equation_str)
    lhs = parse_side(lhs_str)
    rhs = parse_side(rhs_str)
    logger.debug("Parsed sides: lhs=%s rhs=%s", lhs, rhs)
    return lhs, rhs


def combine(lhs: dict[int, float], rhs: dict[int, float]) -> dict[int, float]:
    """Move every right-hand term to the left: ``canonical[e] = lhs[e] - rhs[e]``.

    The constant (exponent 0) is always present in the result, even when
    neither side mentions it.
    """
    exponents = set(lhs) | set(rhs) | {0}
    return {exp: lhs.get(exp, 0.0) - rhs.get(exp, 0.0) for exp in sorted(exponents)}


def reduce_equation(equation_str: str) -> dict[int, float]:
    """Parse *equation_str* and return its canonical coefficient mapping."""
    lhs, rhs = parse_equation(equation_str)
    return ensure_finite(combine(lhs, rhs))
