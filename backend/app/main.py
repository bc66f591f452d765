import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from solver import FormatError, solve_equation
from solver.substitution import check_value

logger = logging.getLogger(__name__)

app = FastAPI(title="polysolve API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class EquationRequest(BaseModel):
    equation: str


class CheckRequest(BaseModel):
    equation: str
    value: str


class StepInfo(BaseModel):
    description: str
    expression: str
    explanation: str


class RootInfo(BaseModel):
    kind: str
    display: str
    value: float | None = None
    real: float | None = None
    imag: float | None = None


class SolutionInfo(BaseModel):
    degree: int
    nominal_degree: int | None = None
    description: str
    discriminant: float | None = None
    roots: list[RootInfo]


class SolveResponse(BaseModel):
    equation: str
    reduced_form: str
    degree: int
    coefficients: dict[int, float]
    solution: SolutionInfo
    steps: list[StepInfo]
    final_answer: str
    verification_steps: list[StepInfo]


class CheckResponse(BaseModel):
    equation: str
    value: str
    lhs: str
    rhs: str
    holds: bool
    steps: list[StepInfo]


def _require(equation: str) -> str:
    equation = equation.strip()
    if not equation:
        raise HTTPException(status_code=400, detail="Equation cannot be empty.")
    return equation


@app.post("/api/solve", response_model=SolveResponse)
def solve(req: EquationRequest):
    equation = _require(req.equation)

    try:
        result = solve_equation(equation)
    except FormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Solver failed on %r", equation)
        raise HTTPException(status_code=500, detail=f"Solver error: {str(e)}")

    return result


@app.post("/api/check", response_model=CheckResponse)
def check(req: CheckRequest):
    equation = _require(req.equation)

    try:
        result = check_value(equation, req.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Substitution failed on %r", equation)
        raise HTTPException(status_code=500, detail=f"Solver error: {str(e)}")

    return result
