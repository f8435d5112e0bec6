from typing import Dict, List, Optional, Tuple


GRADE_THRESHOLDS: List[Tuple[int, str]] = [
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
]

FAILING_GRADE = "F"

MIN_MARKS = 0
MAX_MARKS = 100

# Flet colour names per grade badge.
GRADE_COLORS: Dict[str, str] = {
    "A+": "green700",
    "A": "green400",
    "B": "lightblue400",
    "C": "amber400",
    "D": "orange400",
    "F": "red400",
}


def derive_grade(marks: int) -> str:
    if marks < MIN_MARKS or marks > MAX_MARKS:
        raise ValueError(f"Marks must be between {MIN_MARKS} and {MAX_MARKS}, got {marks}")
    for threshold, letter in GRADE_THRESHOLDS:
        if marks >= threshold:
            return letter
    return FAILING_GRADE


def grade_color(grade: Optional[str]) -> Optional[str]:
    if not grade:
        return None
    return GRADE_COLORS.get(grade)
