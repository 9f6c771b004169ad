import math
from typing import NamedTuple


class Grade(NamedTuple):
    letter: str
    color_class: str


GRADE_BANDS = [
    (0.90, Grade('A', 'bg-green-700')),
    (0.75, Grade('B', 'bg-yellow-500')),
    (0.60, Grade('C', 'bg-orange-500')),
]
LOWEST_GRADE = Grade('D', 'bg-red-600')


def cap(x: float) -> float:
    return max(0.0, min(1.0, x))


def grade(score: float) -> Grade:
    """Letter grade for a 0..1 score; out-of-range values are clamped first."""
    if not math.isfinite(score):
        raise ValueError(f"cannot grade non-finite score {score!r}")
    score = cap(score)
    for cutoff, g in GRADE_BANDS:
        if score >= cutoff:
            return g
    return LOWEST_GRADE


def format_score(score: float) -> str:
    # half-up, not banker's rounding: 0.125 -> 13/100
    return f"{int(math.floor(cap(score) * 100 + 0.5))}/100"
