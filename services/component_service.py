import logging
import math

from models import COMPONENTS
from services.component_totals import update_overall_total
from utils.errors import NotFoundError, ValidationError
from utils.validation import require_int

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 2


def parse_component(data):
    component = (data.get("component") or "").strip().upper()
    if component not in COMPONENTS:
        raise ValidationError(f"component must be one of {', '.join(COMPONENTS)}")
    return component


def serialize_config(config):
    return {
        "subject_id": config.subject_id,
        "component": config.component,
        "max_marks": config.max_marks,
        "attempt_count": config.attempt_count
    }


def configure_component(store, data):
    subject_id = require_int(data, "subject_id", minimum=1)
    component = parse_component(data)
    max_marks = require_int(data, "max_marks", minimum=1)
    attempt_count = require_int(data, "attempt_count", minimum=1, maximum=MAX_ATTEMPTS)

    if store.get_subject(subject_id) is None:
        raise NotFoundError("Subject not found")

    config = store.upsert_component_config(subject_id, component, max_marks, attempt_count)
    store.commit()
    logger.info("Configured %s for subject %s: max %s, %s attempt(s)", component, subject_id, max_marks, attempt_count)
    return config


def _configured(store, subject_id, component):
    config = store.get_component_config(subject_id, component)
    if config is None:
        raise NotFoundError(f"Component {component} not configured for subject ID {subject_id}")
    return config


def save_component_mark(store, usn, subject_id, component, attempt_no, marks):
    """Upsert one attempt's mark, then refresh the student's overall total in the same commit."""
    config = _configured(store, subject_id, component)

    if attempt_no > config.attempt_count:
        raise ValidationError(f"Attempt {attempt_no} exceeds the {config.attempt_count} configured for {component}")
    if marks < 0 or marks > config.max_marks:
        raise ValidationError(f"Marks ({marks:g}) exceed maximum allowed ({config.max_marks})")

    student = store.get_student_by_usn(usn)
    if student is None:
        raise NotFoundError(f"Student with USN {usn} not found")

    store.upsert_component_mark(student.student_id, subject_id, component, attempt_no, marks)
    _, score = update_overall_total(store, student.student_id, subject_id)
    store.commit()

    logger.info("Saved %s attempt %s = %s for %s in subject %s", component, attempt_no, marks, usn, subject_id)
    return {"usn": usn, "subject_id": subject_id, **score._asdict()}


def _pagination(page, size, total_count):
    return {
        "page": page,
        "size": size,
        "total_count": total_count,
        "total_pages": math.ceil(total_count / size) if size else 0
    }


def get_component_grid(store, subject_id, component, attempt_no, page, size):
    config = _configured(store, subject_id, component)

    subject = store.get_subject(subject_id)
    if subject is None:
        raise NotFoundError("Subject not found")

    students = store.students_for_subject(subject, offset=(page - 1) * size, limit=size)
    total_count = store.count_students_for_subject(subject)

    recorded = {
        m.student_id: m.marks
        for m in store.component_marks([s.student_id for s in students], subject_id, component, attempt_no)
    }

    return {
        "data": [
            {
                "usn": s.usn,
                "name": s.name,
                "marks": recorded.get(s.student_id),
                "max_marks": config.max_marks
            }
            for s in students
        ],
        "pagination": _pagination(page, size, total_count),
        "max_marks": config.max_marks
    }


def get_overall_rows(store, subject, offset=None, limit=None):
    students = store.students_for_subject(subject, offset=offset, limit=limit)
    totals = {
        t.student_id: t
        for t in store.overall_totals([s.student_id for s in students], subject.subject_id)
    }

    rows = []
    for s in students:
        total = totals.get(s.student_id)
        rows.append({
            "usn": s.usn,
            "name": s.name,
            "cie_total": total.cie_total if total else 0,
            "assignment": total.assignment if total else 0,
            "quiz": total.quiz if total else 0,
            "seminar": total.seminar if total else 0,
            "overall_total": total.overall_total if total else 0
        })
    return rows


def get_overall_totals(store, subject_id, page, size):
    subject = store.get_subject(subject_id)
    if subject is None:
        raise NotFoundError("Subject not found")

    rows = get_overall_rows(store, subject, offset=(page - 1) * size, limit=size)
    return {
        "data": rows,
        "pagination": _pagination(page, size, store.count_students_for_subject(subject))
    }
