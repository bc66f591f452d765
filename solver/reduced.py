"""Reduced-form rendering of a canonical coefficient mapping."""

from solver.numerical import exact_num

# Appended when the body carries no constant term. It changes the meaning of
# the reduced form but is kept for output compatibility.
_MISSING_CONSTANT = " + 1 * X^0"


def _format_term(coeff: float, exp: int) -> str:
    body = exact_num(abs(coeff))
    if exp != 0:
        body += f" * X^{exp}"
    return body


def render_reduced_form(coefficients: dict[int, float]) -> str:
    """Serialize *coefficients* as ``<terms> = 0``, lowest exponent first.

    >>> render_reduced_form({0: 4.0, 1: 4.0, 2: -9.3})
    '4 + 4 * X^1 - 9.3 * X^2 = 0'
    """
    body = ""
    constant_printed = False
    for exp in sorted(coefficients):
        coeff = coefficients[exp]
        if coeff == 0:
            continue
        if not body:
            body = "" if coeff > 0 else "- "
        else:
            body += " + " if coeff > 0 else " - "
        body += _format_term(coeff, exp)
        constant_printed = constant_printed or exp == 0

    if not body:
        body = "0"
    elif not constant_printed:
        body += _MISSING_CONSTANT
    return f"{body} = 0"
