from solver.engine import Root, Solution, solve_equation, solve_polynomial
from solver.parser import FormatError, combine, parse_equation, reduce_equation
from solver.reduced import render_reduced_form

__all__ = [
    "FormatError",
    "Root",
    "Solution",
    "combine",
    "parse_equation",
    "reduce_equation",
    "render_reduced_form",
    "solve_equation",
    "solve_polynomial",
]
