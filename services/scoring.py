"""
Pure arithmetic for internal-assessment and component totals.

Part A is questions 1-2, Part B is questions 3-4. The better question of
each part counts, the other is discarded, and the sum is rounded half up.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple

PART_A = (1, 2)
PART_B = (3, 4)
QUESTION_NUMBERS = PART_A + PART_B

ASSIGNMENT_COMPONENTS = ("A1", "A2")
QUIZ_COMPONENTS = ("QZ",)
SEMINAR_COMPONENTS = ("SM",)


class InternalScore(NamedTuple):
    best_part_a: float
    best_part_b: float
    total: int


class OverallScore(NamedTuple):
    cie_total: float
    assignment: float
    quiz: float
    seminar: float
    overall_total: float


def round_half_up(value):
    # round() would give 2 for 2.5
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def is_scored_question(question_no):
    return question_no in QUESTION_NUMBERS


def question_totals(marks, question_for_subq):
    """
    Sum a student's marks per question number.

    ``marks`` is an iterable of ``(subq_id, marks)`` pairs and
    ``question_for_subq`` maps a subquestion id to its question number.
    Marks on unknown subquestions, or on subquestions without a question
    number in 1-4, contribute nothing. Every question 1-4 is present in
    the result, defaulting to 0.
    """
    totals = {question_no: 0.0 for question_no in QUESTION_NUMBERS}
    for subq_id, value in marks:
        question_no = question_for_subq.get(subq_id)
        if not is_scored_question(question_no) or value is None:
            continue
        totals[question_no] += float(value)
    return totals


def score_internal(totals):
    best_part_a = max(totals.get(q, 0.0) for q in PART_A)
    best_part_b = max(totals.get(q, 0.0) for q in PART_B)
    return InternalScore(
        best_part_a=best_part_a,
        best_part_b=best_part_b,
        total=round_half_up(best_part_a + best_part_b),
    )


def _sum_components(component_marks, components):
    return sum((float(marks) for component, _attempt, marks in component_marks if component in components), 0.0)


def _within_attempt_limits(component_marks, attempt_limits):
    # attempts beyond the configured count, or on an unconfigured component, do not count
    return [
        (component, attempt_no, marks)
        for component, attempt_no, marks in component_marks
        if attempt_no <= attempt_limits.get(component, 0)
    ]


def score_overall(cie_totals, component_marks, attempt_limits=None):
    """
    Plain summation: every CIE total and every counted attempt of every component.

    ``component_marks`` is an iterable of ``(component, attempt_no, marks)``.
    ``attempt_limits`` maps a component to its configured attempt count;
    when given, only attempts 1..count of configured components are summed.
    """
    component_marks = list(component_marks)
    if attempt_limits is not None:
        component_marks = _within_attempt_limits(component_marks, attempt_limits)
    cie_total = float(sum(cie_totals))
    assignment = _sum_components(component_marks, ASSIGNMENT_COMPONENTS)
    quiz = _sum_components(component_marks, QUIZ_COMPONENTS)
    seminar = _sum_components(component_marks, SEMINAR_COMPONENTS)
    return OverallScore(
        cie_total=cie_total,
        assignment=assignment,
        quiz=quiz,
        seminar=seminar,
        overall_total=cie_total + assignment + quiz + seminar,
    )
