"""
Graph builder for polysolve.

Produces a dark-themed matplotlib Figure of the reduced polynomial P(X),
with its real roots marked. Also classifies a solve result into one of
the textbook cases (two real roots, complex pair, identity, ...).
"""

import numpy as np

from solver.numerical import evaluate, exact_num, fmt_num

# ── palette ────────────────────────────────────────────────────────────────
C_BG       = "#0f0f0f"
C_AX       = "#181818"
C_GRID     = "#252525"
C_TICK     = "#666666"
C_SPINE    = "#333333"
C_LINE1    = "#1a8cff"   # P(X)
C_DOT      = "#4caf50"   # real roots
C_VERTEX   = "#ff8c42"   # parabola vertex (complex case)
C_TEXT     = "#cccccc"

_FORMS = {
    0: "c = 0",
    1: "bX + c = 0",
    2: "aX² + bX + c = 0",
}


def _style_axes(ax, fig):
    fig.patch.set_facecolor(C_BG)
    ax.set_facecolor(C_AX)
    ax.tick_params(colors=C_TICK, labelsize=9)
    ax.xaxis.label.set_color(C_TEXT)
    ax.yaxis.label.set_color(C_TEXT)
    ax.title.set_color(C_TEXT)
    for spine in ax.spines.values():
        spine.set_edgecolor(C_SPINE)
    ax.grid(True, color=C_GRID, linewidth=0.8, linestyle="--", alpha=0.7)
    ax.axhline(0, color=C_SPINE, linewidth=0.8)
    ax.axvline(0, color=C_SPINE, linewidth=0.8)


def _coefficients(result: dict) -> dict[int, float]:
    # JSON round trips turn the exponent keys into strings
    return {int(exp): float(c) for exp, c in result.get("coefficients", {}).items()}


def analyze_result(result: dict) -> dict | None:
    """
    Return a structured analysis dict describing the mathematical case.
    Returns None if *result* carries no solution.

    Returned dict keys:
      case      : "two_real" | "one_real" | "complex" | "linear" |
                  "identity" | "contradiction" | "unsolvable"
      case_label: human-readable short label
      form      : general algebraic form string
      description: explanation of the case
      graphable : bool
    """
    solution = result.get("solution")
    if not solution:
        return None

    degree = solution["degree"]
    roots = solution.get("roots", [])
    discriminant = solution.get("discriminant")

    if degree > 2:
        return {
            "case": "unsolvable",
            "case_label": f"Degree {degree} — Not Solved",
            "form": f"degree {degree} polynomial",
            "description": "Only equations of degree 0, 1 or 2 are solved.",
            "graphable": False,
        }
    if degree == 0:
        if not roots and solution["description"].startswith("All real"):
            return {
                "case": "identity",
                "case_label": "Identity — Every Real Number",
                "form": _FORMS[0],
                "description": "Every coefficient cancels: the equation reads 0 = 0.",
                "graphable": True,
            }
        return {
            "case": "contradiction",
            "case_label": "Contradiction — No Solution",
            "form": _FORMS[0],
            "description": "Only a non-zero constant is left: c = 0 can never hold.",
            "graphable": True,
        }
    if degree == 1:
        return {
            "case": "linear",
            "case_label": "Linear — One Solution",
            "form": _FORMS[1],
            "description": "b ≠ 0, so X = –c / b.",
            "graphable": True,
        }
    if discriminant is not None and discriminant > 0:
        case, label = "two_real", "Δ > 0 — Two Real Roots"
        description = "The parabola crosses the X axis twice."
    elif discriminant == 0:
        case, label = "one_real", "Δ = 0 — One Double Root"
        description = "The parabola touches the X axis at its vertex."
    else:
        case, label = "complex", "Δ < 0 — Two Complex Roots"
        description = "The parabola never meets the X axis; the roots are conjugates."
    return {
        "case": case,
        "case_label": label,
        "form": _FORMS[2],
        "description": f"Δ = {exact_num(discriminant)}. {description}",
        "graphable": True,
    }


def _window(coefficients: dict[int, float], real_roots: list[float], span: float):
    if real_roots:
        centre = sum(real_roots) / len(real_roots)
        half = max(span, (max(real_roots) - min(real_roots)) * 0.75)
    else:
        a = coefficients.get(2, 0.0)
        b = coefficients.get(1, 0.0)
        # vertex of the parabola, or the origin for lines and constants
        centre = -b / (2 * a) if a else 0.0
        half = span
    return np.linspace(centre - half, centre + half, 400)


def build_figure(result: dict, span: float = 5.0):
    """
    Build and return a dark-themed matplotlib Figure of P(X) for *result*.
    Returns None if graphing is not applicable (degree > 2).
    """
    from matplotlib.figure import Figure

    analysis = analyze_result(result)
    if analysis is None or not analysis["graphable"]:
        return None

    coefficients = _coefficients(result)
    roots = result["solution"]["roots"]
    real_roots = [r["value"] for r in roots if r["kind"] == "real"]

    xs = _window(coefficients, real_roots, span)
    ys = evaluate(coefficients, xs)

    fig = Figure(figsize=(7, 3.4), dpi=100)
    ax = fig.add_subplot(111)
    _style_axes(ax, fig)

    ax.plot(xs, ys, color=C_LINE1, linewidth=2, label="P(X)")

    if real_roots:
        ax.scatter(real_roots, [0.0] * len(real_roots), color=C_DOT, s=80, zorder=5,
                   label=", ".join(f"X = {fmt_num(r, 4)}" for r in real_roots))
    elif analysis["case"] == "complex":
        vx = roots[0]["real"]
        ax.scatter([vx], [float(evaluate(coefficients, vx))], color=C_VERTEX, s=60,
                   zorder=5, label="vertex")

    ax.set_title(analysis["case_label"], color=C_TEXT, fontsize=10)
    ax.set_xlabel("X", color=C_TEXT)
    ax.set_ylabel("P(X)", color=C_TEXT)
    ax.legend(fontsize=8, facecolor="#1e1e1e", edgecolor=C_SPINE, labelcolor=C_TEXT)
    fig.tight_layout(pad=1.2)
    return fig
