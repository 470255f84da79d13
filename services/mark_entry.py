import logging

from services.component_totals import update_overall_total
from services.internal_totals import update_student_total
from utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

MAX_MARK_VALUE = 100


def save_single_mark(store, subq_id, usn, marks):
    """
    Record one sub-question mark and recompute the student's totals.

    ``marks=None`` clears the entry. The mark, the CIE total and the
    subject's overall total are committed together.
    """
    subq = store.get_subquestion(subq_id)
    if subq is None:
        raise NotFoundError("Sub-question not found")

    student = store.get_student_by_usn(usn)
    if student is None:
        raise NotFoundError(f"Student with USN {usn} not found")

    if marks is None:
        store.delete_subquestion_mark(subq.subq_id, student.student_id)
    else:
        if marks < 0 or marks > MAX_MARK_VALUE:
            raise ValidationError(f"Marks must be between 0 and {MAX_MARK_VALUE}")
        if marks > float(subq.max_marks):
            raise ValidationError(f"Marks cannot exceed maximum marks ({subq.max_marks:g})")
        store.upsert_subquestion_mark(subq.subq_id, student.student_id, marks)

    key, score = update_student_total(store, subq.blueprint, student.student_id)
    _, overall = update_overall_total(store, student.student_id, key.subject_id)
    store.commit()

    logger.info(
        "Saved mark %s for %s on sub-question %s; CIE %s total is now %s",
        marks, usn, subq_id, key.cie_no, score.total
    )
    return {
        "subq_id": subq_id,
        "usn": usn,
        "marks": marks,
        "best_part_a": score.best_part_a,
        "best_part_b": score.best_part_b,
        "total": score.total,
        "overall_total": overall.overall_total
    }


def get_marks_grid(store, subject_id, cie_no):
    blueprint = store.get_blueprint(subject_id, cie_no)
    if blueprint is None:
        raise NotFoundError("Blueprint not found for this subject and CIE")

    subject = store.get_subject(subject_id)
    if subject is None:
        raise NotFoundError("Subject not found")

    students = store.students_for_subject(subject)
    subquestions = store.subquestions(blueprint.blueprint_id)

    recorded = {
        (m.student_id, m.subq_id): m.marks
        for m in store.marks_for_students(
            [s.student_id for s in students],
            [sq.subq_id for sq in subquestions]
        )
    }

    return {
        "students": [
            {"student_id": s.student_id, "usn": s.usn, "name": s.name}
            for s in students
        ],
        "cols": [
            {
                "subq_id": sq.subq_id,
                "question_no": sq.question_no,
                "label": sq.label,
                "max_marks": sq.max_marks
            }
            for sq in subquestions
        ],
        "rows": [
            {
                "usn": s.usn,
                "marks": [
                    {"subq_id": sq.subq_id, "marks": recorded.get((s.student_id, sq.subq_id))}
                    for sq in subquestions
                ]
            }
            for s in students
        ]
    }


def get_internal_totals(store, subject_id, cie_no):
    return [
        {
            "student_id": student.student_id,
            "usn": student.usn,
            "name": student.name,
            "best_part_a": total.best_part_a,
            "best_part_b": total.best_part_b,
            "total": total.total
        }
        for total, student in store.internal_totals(subject_id, cie_no)
    ]
