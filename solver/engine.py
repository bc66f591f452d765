"""Degree classification and closed-form solving for polynomial equations.

Handles equations of degree 0, 1 and 2 written as sums of ``a * X^n`` terms
(e.g. ``"5 * X^0 + 4 * X^1 - 9.3 * X^2 = 1 * X^0"``) and produces a result
bundle with the reduced form, the degree, the roots and human-readable
steps.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import numpy as np
import sympy

from solver.numerical import exact_num, format_root
from solver.parser import combine, ensure_finite, parse_equation
from solver.reduced import render_reduced_form
from solver.substitution import verify_solution

logger = logging.getLogger(__name__)

MAX_DEGREE = 2

MSG_TOO_HIGH = "The polynomial degree is strictly greater than 2, I can't solve."
MSG_ALL_REALS = "All real numbers are solutions."
MSG_NO_SOLUTION = "No solution."
MSG_LINEAR = "The solution is:"
MSG_POSITIVE = "Discriminant is strictly positive, the two solutions are:"
MSG_ZERO = "Discriminant is zero, the solution is:"
MSG_NEGATIVE = "Discriminant is strictly negative, the two complex solutions are:"


# ── Result types ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Root:
    """A single root: ``kind`` is ``"real"`` (uses *value*) or ``"complex"``."""

    kind: str
    value: float = 0.0
    real: float = 0.0
    imag: float = 0.0

    @classmethod
    def real_root(cls, value: float) -> "Root":
        # -0.0 + 0.0 == 0.0, so "x = -0" never reaches the display
        return cls("real", value=value + 0.0)

    @classmethod
    def complex_root(cls, real: float, imag: float) -> "Root":
        return cls("complex", real=real + 0.0, imag=imag)

    @property
    def is_complex(self) -> bool:
        return self.kind == "complex"

    def as_complex(self) -> complex:
        if self.is_complex:
            return complex(self.real, self.imag)
        return complex(self.value, 0.0)

    def format(self, precision: int = 2) -> str:
        return format_root(self, precision)

    def to_dict(self) -> dict:
        if self.is_complex:
            return {"kind": self.kind, "real": self.real, "imag": self.imag,
                    "display": self.format()}
        return {"kind": self.kind, "value": self.value, "display": self.format()}


@dataclass
class Solution:
    """Outcome of solving a canonical polynomial.

    *degree* is the degree actually used to solve, which drops below
    *nominal_degree* when leading coefficients are zero.
    """

    degree: int
    description: str
    roots: list[Root] = field(default_factory=list)
    discriminant: Optional[float] = None
    nominal_degree: Optional[int] = None

    @property
    def solvable(self) -> bool:
        return self.degree <= MAX_DEGREE

    def to_dict(self) -> dict:
        return {
            "degree": self.degree,
            "nominal_degree": self.nominal_degree,
            "description": self.description,
            "discriminant": self.discriminant,
            "roots": [root.to_dict() for root in self.roots],
        }


# ── Degree / branch helpers ─────────────────────────────────────────────

def nominal_degree(coefficients: dict[int, float]) -> int:
    """Highest exponent present in *coefficients*, even if its value is 0."""
    return max(coefficients) if coefficients else 0


def _solve_constant(c: float, nominal: int) -> Solution:
    return Solution(0, MSG_ALL_REALS if c == 0 else MSG_NO_SOLUTION,
                    nominal_degree=nominal)


def _solve_linear(b: float, c: float, nominal: int) -> Solution:
    if b == 0:
        logger.debug("Linear coefficient is zero, collapsing to degree 0")
        return _solve_constant(c, nominal)
    return Solution(1, MSG_LINEAR, [Root.real_root(-c / b)], nominal_degree=nominal)


def _solve_quadratic(a: float, b: float, c: float, nominal: int) -> Solution:
    if a == 0:
        logger.debug("Quadratic coefficient is zero, falling back to the linear branch")
        return _solve_linear(b, c, nominal)

    discriminant = b * b - 4 * a * c
    if discriminant > 0:
        sqrt_d = math.sqrt(discriminant)
        roots = [Root.real_root((-b + sqrt_d) / (2 * a)),
                 Root.real_root((-b - sqrt_d) / (2 * a))]
        description = MSG_POSITIVE
    elif discriminant == 0:
        roots = [Root.real_root(-b / (2 * a))]
        description = MSG_ZERO
    else:
        real = -b / (2 * a)
        imag = abs(math.sqrt(-discriminant) / (2 * a))
        roots = [Root.complex_root(real, imag), Root.complex_root(real, -imag)]
        description = MSG_NEGATIVE
    return Solution(2, description, roots, discriminant=discriminant,
                    nominal_degree=nominal)


def solve_polynomial(coefficients: dict[int, float]) -> Solution:
    """Classify the canonical polynomial by degree and solve it."""
    nominal = nominal_degree(coefficients)
    a = coefficients.get(2, 0.0)
    b = coefficients.get(1, 0.0)
    c = coefficients.get(0, 0.0)

    if nominal > MAX_DEGREE:
        logger.debug("Nominal degree %d is above %d, not solving", nominal, MAX_DEGREE)
        return Solution(nominal, MSG_TOO_HIGH, nominal_degree=nominal)
    if nominal == 2:
        return _solve_quadratic(a, b, c, nominal)
    if nominal == 1:
        return _solve_linear(b, c, nominal)
    return _solve_constant(c, nominal)


# ── Presentation ────────────────────────────────────────────────────────

def format_final_answer(solution: Solution, precision: int = 2) -> str:
    """One line per root (``x1 = ...``), or the description when there are none."""
    roots = solution.roots
    if len(roots) == 2:
        return "\n".join(
            f"x{i} = {root.format(precision)}"
            for i, root in enumerate(roots, start=1)
        )
    if len(roots) == 1:
        return f"x = {roots[0].format(precision)}"
    return solution.description


def _build_steps(equation_str: str, lhs: dict, rhs: dict, coefficients: dict,
                 reduced_form: str, solution: Solution) -> list[dict]:
    steps = []

    steps.append({
        "description": "Starting with the original equation",
        "expression": equation_str.strip(),
        "explanation": (
            f"The left side has {len(lhs)} distinct power(s) of X and the "
            f"right side has {len(rhs)}."
        ),
    })

    steps.append({
        "description": "Move every term to the left side",
        "expression": reduced_form,
        "explanation": (
            "Subtract each right-hand coefficient from the left-hand "
            "coefficient of the same power of X."
        ),
    })

    nominal = solution.nominal_degree
    if solution.degree != nominal:
        steps.append({
            "description": "Drop vanishing leading coefficients",
            "expression": f"Degree {nominal} → degree {solution.degree}",
            "explanation": (
                "The highest powers have a coefficient of 0, so the equation "
                "is solved as a lower-degree one."
            ),
        })

    if solution.discriminant is not None:
        a = coefficients.get(2, 0.0)
        b = coefficients.get(1, 0.0)
        c = coefficients.get(0, 0.0)
        steps.append({
            "description": "Compute the discriminant",
            "expression": (
                f"Δ = b² − 4ac = ({exact_num(b)})² − 4·({exact_num(a)})·({exact_num(c)}) "
                f"= {exact_num(solution.discriminant)}"
            ),
            "explanation": solution.description,
        })

    steps.append({
        "description": "Solve",
        "expression": format_final_answer(solution),
        "explanation": solution.description,
    })
    return steps


# ── Main public entry point ─────────────────────────────────────────────

def solve_equation(equation_str: str, check: bool = True, precision: int = 2) -> dict:
    """
    Parse, reduce and solve a polynomial equation of degree 0, 1 or 2.

    Raises FormatError when the equation has no single ``=`` or an empty
    side. Returns a dict with the sections:
      - equation, coefficients, reduced_form, degree, solution
      - steps, final_answer, verification_steps, summary
    """
    t_start = time.perf_counter()

    lhs, rhs = parse_equation(equation_str)
    coefficients = ensure_finite(combine(lhs, rhs))
    reduced_form = render_reduced_form(coefficients)
    logger.debug("Canonical coefficients: %s", coefficients)

    solution = solve_polynomial(coefficients)
    logger.debug("Solved at degree %d: %s", solution.degree, solution.description)

    steps = _build_steps(equation_str, lhs, rhs, coefficients, reduced_form, solution)
    verification_steps = verify_solution(coefficients, solution) if check else []
    passed = all(step["passed"] for step in verification_steps)

    t_end = time.perf_counter()
    return {
        "equation": equation_str.strip(),
        "coefficients": coefficients,
        "reduced_form": reduced_form,
        "degree": solution.degree,
        "solution": solution.to_dict(),
        "steps": steps,
        "final_answer": format_final_answer(solution, precision),
        "verification_steps": verification_steps,
        "summary": {
            "runtime_ms": round((t_end - t_start) * 1000, 2),
            "total_steps": len(steps),
            "verification_steps": len(verification_steps),
            "validation_status": "pass" if passed else "fail",
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "library": f"NumPy {np.__version__}, SymPy {sympy.__version__}",
        },
    }
