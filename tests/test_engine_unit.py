import math

import pytest

from solver import engine
from solver.engine import Root, Solution, nominal_degree, solve_equation, solve_polynomial
from solver.parser import FormatError


# ── nominal degree ──────────────────────────────────────────────────────

def test_nominal_degree_ignores_coefficient_values() -> None:
    assert nominal_degree({0: 1.0, 1: 0.0, 2: 0.0}) == 2
    assert nominal_degree({0: 0.0}) == 0
    assert nominal_degree({0: 1.0, 5: 0.0}) == 5


# ── solve_polynomial branches ───────────────────────────────────────────

class TestQuadratic:
    def test_positive_discriminant(self):
        a, b, c = -9.3, 4.0, 4.0
        solution = solve_polynomial({0: c, 1: b, 2: a})
        assert solution.degree == 2
        assert solution.discriminant == pytest.approx(164.8)
        assert solution.description == engine.MSG_POSITIVE
        sqrt_d = math.sqrt(b * b - 4 * a * c)
        values = [root.value for root in solution.roots]
        assert values == pytest.approx([(-b + sqrt_d) / (2 * a), (-b - sqrt_d) / (2 * a)])
        assert all(root.kind == "real" for root in solution.roots)

    def test_zero_discriminant_single_root(self):
        solution = solve_polynomial({0: 0.0, 2: 1.0})
        assert solution.discriminant == 0
        assert solution.description == engine.MSG_ZERO
        assert solution.roots == [Root.real_root(0.0)]
        assert math.copysign(1.0, solution.roots[0].value) == 1.0

    def test_negative_discriminant_complex_pair(self):
        solution = solve_polynomial({0: 1.0, 1: 0.0, 2: 1.0})
        assert solution.discriminant == -4
        assert solution.description == engine.MSG_NEGATIVE
        first, second = solution.roots
        assert first.kind == second.kind == "complex"
        assert (first.real, first.imag) == (0.0, 1.0)
        assert (second.real, second.imag) == (0.0, -1.0)
        assert first.format() == "0.00 + 1.00i"
        assert second.format() == "0.00 - 1.00i"

    def test_negative_leading_coefficient_keeps_positive_imaginary_first(self):
        solution = solve_polynomial({0: -5.0, 1: 2.0, 2: -1.0})
        first, second = solution.roots
        assert first.real == pytest.approx(1.0)
        assert first.imag == pytest.approx(2.0)
        assert second.imag == pytest.approx(-2.0)

    def test_complex_parts_keep_full_precision(self):
        solution = solve_polynomial({0: 1.0, 1: 1.0, 2: 3.0})
        first = solution.roots[0]
        assert first.real == pytest.approx(-1 / 6)
        assert first.imag == pytest.approx(math.sqrt(11) / 6)
        assert first.format() == "-0.17 + 0.55i"
        assert first.format(precision=4) == "-0.1667 + 0.5528i"


class TestDegenerate:
    @pytest.mark.parametrize("b,c", [(2.0, -4.0), (0.0, 0.0), (0.0, 3.0), (-0.5, 1.0)])
    def test_zero_quadratic_coefficient_matches_linear(self, b, c):
        degraded = solve_polynomial({0: c, 1: b, 2: 0.0})
        linear = solve_polynomial({0: c, 1: b})
        assert degraded.degree == linear.degree
        assert degraded.roots == linear.roots
        assert degraded.description == linear.description
        assert degraded.discriminant is None
        assert degraded.nominal_degree == 2

    def test_linear_root(self):
        solution = solve_polynomial({0: -4.0, 1: 2.0, 2: 0.0})
        assert solution.degree == 1
        assert solution.roots == [Root.real_root(2.0)]

    def test_linear_collapse_to_identity(self):
        solution = solve_polynomial({0: 0.0, 1: 0.0})
        assert solution.degree == 0
        assert solution.description == engine.MSG_ALL_REALS
        assert solution.roots == []

    def test_linear_collapse_to_contradiction(self):
        solution = solve_polynomial({0: 3.0, 1: 0.0})
        assert solution.degree == 0
        assert solution.description == engine.MSG_NO_SOLUTION


class TestOtherDegrees:
    def test_constant_cases(self):
        assert solve_polynomial({0: 0.0}).description == engine.MSG_ALL_REALS
        assert solve_polynomial({0: -1.0}).description == engine.MSG_NO_SOLUTION

    def test_degree_above_two_is_refused(self):
        solution = solve_polynomial({0: 1.0, 3: 2.0})
        assert solution.degree == 3
        assert solution.roots == []
        assert solution.description == engine.MSG_TOO_HIGH
        assert solution.solvable is False

    def test_nominal_degree_three_with_zero_coefficient_is_refused(self):
        solution = solve_polynomial({0: 1.0, 1: 1.0, 3: 0.0})
        assert solution.degree == 3
        assert solution.roots == []


# ── result types ────────────────────────────────────────────────────────

def test_root_to_dict_variants() -> None:
    assert Root.real_root(-1.5).to_dict() == {"kind": "real", "value": -1.5, "display": "-1.5"}
    payload = Root.complex_root(0.5, -2.0).to_dict()
    assert payload["kind"] == "complex"
    assert payload["display"] == "0.50 - 2.00i"
    assert Root.complex_root(0.5, -2.0).as_complex() == complex(0.5, -2.0)


def test_solution_to_dict() -> None:
    data = Solution(1, engine.MSG_LINEAR, [Root.real_root(3.0)], nominal_degree=1).to_dict()
    assert data["degree"] == 1
    assert data["discriminant"] is None
    assert data["roots"][0]["value"] == 3.0


def test_format_final_answer() -> None:
    two = solve_polynomial({0: -6.0, 1: 1.0, 2: 1.0})
    assert engine.format_final_answer(two) == "x1 = 2\nx2 = -3"
    assert engine.format_final_answer(solve_polynomial({0: 1.0, 1: 1.0})) == "x = -1"
    assert engine.format_final_answer(solve_polynomial({0: 1.0})) == engine.MSG_NO_SOLUTION


# ── solve_equation scenarios ────────────────────────────────────────────

def test_scenario_two_real_roots() -> None:
    result = solve_equation("5 * X^0 + 4 * X^1 - 9.3 * X^2 = 1 * X^0")
    assert result["coefficients"] == {0: 4.0, 1: 4.0, 2: -9.3}
    assert result["reduced_form"] == "4 + 4 * X^1 - 9.3 * X^2 = 0"
    assert result["degree"] == 2
    assert result["solution"]["discriminant"] == pytest.approx(164.8)
    assert len(result["solution"]["roots"]) == 2
    assert result["summary"]["validation_status"] == "pass"


def test_scenario_double_root_at_zero() -> None:
    result = solve_equation("X^2 = 0")
    assert result["coefficients"].get(1, 0.0) == 0.0
    assert result["solution"]["discriminant"] == 0
    assert result["final_answer"] == "x = 0"


def test_scenario_linear() -> None:
    result = solve_equation("X^1 + 1 * X^0 = 0")
    assert result["degree"] == 1
    assert result["solution"]["roots"][0]["value"] == -1.0
    assert result["final_answer"] == "x = -1"


def test_scenario_no_solution() -> None:
    result = solve_equation("1 * X^0 = 2 * X^0")
    assert result["degree"] == 0
    assert result["final_answer"] == "No solution."
    assert result["verification_steps"] == []


def test_scenario_missing_equal_sign() -> None:
    with pytest.raises(FormatError):
        solve_equation("5 * X^2")


def test_solve_equation_required_fields() -> None:
    result = solve_equation("X^2 + 1 * X^0 = 0")
    required_fields = {
        "equation", "coefficients", "reduced_form", "degree", "solution",
        "steps", "final_answer", "verification_steps", "summary",
    }
    assert required_fields.issubset(set(result.keys()))
    summary = result["summary"]
    assert isinstance(summary["runtime_ms"], (int, float)) and summary["runtime_ms"] >= 0
    assert summary["total_steps"] == len(result["steps"])
    assert summary["verification_steps"] == 2
    assert "SymPy" in summary["library"] and "NumPy" in summary["library"]
    assert result["final_answer"] == "x1 = 0.00 + 1.00i\nx2 = 0.00 - 1.00i"


def test_solve_equation_degenerate_step() -> None:
    result = solve_equation("0 * X^2 + 3 * X^1 = 1 * X^0")
    descriptions = [step["description"] for step in result["steps"]]
    assert "Drop vanishing leading coefficients" in descriptions
    assert result["degree"] == 1
    assert result["final_answer"] == "x = 0.3333333333333333"


def test_real_roots_are_printed_unrounded() -> None:
    result = solve_equation("3 * X^1 = 1 * X^0")
    assert result["solution"]["roots"][0]["value"] == 1 / 3
    assert result["final_answer"] == "x = 0.3333333333333333"

    tiny = solve_equation("1 * X^1 = 0.0000000000001 * X^0")
    assert tiny["final_answer"] == "x = 0.0000000000001"


def test_tiny_coefficient_survives_in_reduced_form() -> None:
    result = solve_equation("0.00000000001 * X^1 = 1 * X^0")
    assert result["reduced_form"] == "- 1 + 0.00000000001 * X^1 = 0"
    assert result["solution"]["roots"][0]["value"] == pytest.approx(1e11)
    assert result["final_answer"] != "x = 0"


def test_overflowing_coefficient_is_a_format_error() -> None:
    with pytest.raises(FormatError, match="too large"):
        solve_equation("1" * 400 + " * X^1 = 1 * X^0")


def test_solve_equation_without_check() -> None:
    result = solve_equation("X^1 = 2 * X^0", check=False)
    assert result["verification_steps"] == []
    assert result["summary"]["validation_status"] == "pass"
