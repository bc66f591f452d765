"""
polysolve — Entry point.

Solve one polynomial equation given on the command line, or typed at the
prompt when no argument is given.
"""

import argparse
import logging
import sys

from solver import solve_equation, storage
from solver.numerical import exact_num
from solver.graph import build_figure
from solver.substitution import check_value

logger = logging.getLogger("polysolve")

PROMPT = 'Enter the polynomial equation (e.g. "5 * X^0 + 4 * X^1 - 9.3 * X^2 = 1 * X^0"): '


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polysolve",
        description="Reduce and solve a polynomial equation of degree 0, 1 or 2.",
    )
    parser.add_argument("equation", nargs="?",
                        help='e.g. "5 * X^0 + 4 * X^1 - 9.3 * X^2 = 1 * X^0"')
    parser.add_argument("--check", metavar="VALUE",
                        help="also check whether X = VALUE satisfies the equation")
    parser.add_argument("--plot", metavar="FILE", help="save a graph of P(X) to FILE")
    parser.add_argument("--no-history", action="store_true",
                        help="do not record this equation in the history")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def render(result: dict) -> str:
    """Format *result* the way it is printed on the terminal."""
    solution = result["solution"]
    lines = [
        f"Reduced form: {result['reduced_form']}",
        f"Polynomial degree: {result['degree']}",
    ]
    if solution["discriminant"] is not None:
        lines.append(f"Discriminant: {exact_num(solution['discriminant'])}")
    lines.append(solution["description"])
    if solution["roots"]:
        lines.append(result["final_answer"])
    return "\n".join(lines)


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    equation = args.equation
    if equation is None:
        try:
            equation = input(PROMPT)
        except EOFError:
            equation = ""

    settings = storage.get_settings()
    try:
        result = solve_equation(equation, precision=settings["complex_precision"])
        checked = check_value(equation, args.check) if args.check else None
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(render(result))
    if checked is not None:
        verdict = "is" if checked["holds"] else "is not"
        print(f"X = {checked['value']} {verdict} a solution "
              f"(LHS = {checked['lhs']}, RHS = {checked['rhs']})")

    if args.plot:
        fig = build_figure(result, span=settings["plot_span"])
        if fig is None:
            print("No graph for this degree.", file=sys.stderr)
        else:
            fig.savefig(args.plot)
            logger.debug("Graph written to %s", args.plot)

    if settings["save_history"] and not args.no_history:
        try:
            storage.add_history(result["equation"], result["reduced_form"],
                                result["final_answer"])
        except OSError:
            logger.warning("Could not record history", exc_info=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
