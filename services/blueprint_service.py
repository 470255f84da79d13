import logging

from services.component_totals import update_overall_total
from services.keys import OverallTotalKey
from services.scoring import QUESTION_NUMBERS
from utils.errors import ConflictError, NotFoundError, ValidationError
from utils.validation import require_int, require_str

logger = logging.getLogger(__name__)

MAX_CIE_NO = 3
MAX_LABEL_LENGTH = 10


def parse_questions(data):
    questions = data.get("questions")
    if not isinstance(questions, list) or not questions:
        raise ValidationError("questions must be a non-empty list")

    parsed = []
    for question in questions:
        if not isinstance(question, dict):
            raise ValidationError("Invalid question entry")
        question_no = require_int(question, "question_no", minimum=min(QUESTION_NUMBERS), maximum=max(QUESTION_NUMBERS))
        subs = question.get("subs")
        if not isinstance(subs, list):
            raise ValidationError(f"subs for question {question_no} must be a list")

        parsed_subs = []
        for sub in subs:
            if not isinstance(sub, dict):
                raise ValidationError(f"Invalid sub-question for question {question_no}")
            parsed_subs.append({
                "label": require_str(sub, "label", max_length=MAX_LABEL_LENGTH),
                "max_marks": require_int(sub, "max_marks", minimum=1)
            })
        parsed.append({"question_no": question_no, "subs": parsed_subs})

    labels = [sub["label"] for q in parsed for sub in q["subs"]]
    if len(labels) != len(set(labels)):
        raise ValidationError("Sub-question labels must be unique")
    return parsed


def parse_blueprint_payload(data):
    return {
        "subject_id": require_int(data, "subject_id", minimum=1),
        "cie_no": require_int(data, "cie_no", minimum=1, maximum=MAX_CIE_NO),
        "questions": parse_questions(data)
    }


def _add_subquestions(store, blueprint, questions):
    for question in questions:
        for sub in question["subs"]:
            store.add_subquestion(
                blueprint.blueprint_id,
                question["question_no"],
                sub["label"],
                sub["max_marks"]
            )
    store.flush()


def create_blueprint(store, payload, created_by=None):
    subject = store.get_subject(payload["subject_id"])
    if subject is None:
        raise NotFoundError("Subject not found")

    if store.get_blueprint(payload["subject_id"], payload["cie_no"]):
        raise ConflictError("Blueprint already exists for this subject and CIE")

    blueprint = store.add_blueprint(payload["subject_id"], payload["cie_no"], created_by)
    _add_subquestions(store, blueprint, payload["questions"])
    store.commit()

    logger.info("Created blueprint %s for subject %s, CIE %s", blueprint.blueprint_id, blueprint.subject_id, blueprint.cie_no)
    return blueprint


def update_blueprint(store, blueprint_id, questions):
    """
    Replace all sub-questions of a blueprint.

    Marks on the old sub-questions go with them, and so do the internal
    totals built from those marks. Overall totals that summed the dropped
    CIE totals are refreshed in the same commit.
    """
    blueprint = store.get_blueprint_by_id(blueprint_id)
    if blueprint is None:
        raise NotFoundError("Blueprint not found")
    subject_id, cie_no = blueprint.subject_id, blueprint.cie_no

    store.delete_subquestions(blueprint)
    _add_subquestions(store, blueprint, questions)

    student_ids = store.delete_internal_totals(subject_id, cie_no)
    for student_id in student_ids:
        if store.get_overall_total(OverallTotalKey(student_id, subject_id)) is not None:
            update_overall_total(store, student_id, subject_id)
    store.commit()

    logger.info(
        "Replaced sub-questions of blueprint %s; cleared %d CIE %s totals for subject %s",
        blueprint_id, len(student_ids), cie_no, subject_id
    )
    return blueprint


def serialize_blueprint(store, blueprint):
    questions = {}
    for sq in store.subquestions(blueprint.blueprint_id):
        entry = questions.setdefault(sq.question_no, {"question_no": sq.question_no, "subs": []})
        entry["subs"].append({
            "subq_id": sq.subq_id,
            "label": sq.label,
            "max_marks": sq.max_marks
        })

    subject = blueprint.subject
    return {
        "blueprint_id": blueprint.blueprint_id,
        "subject_id": blueprint.subject_id,
        "cie_no": blueprint.cie_no,
        "created_by": blueprint.created_by,
        "created_at": blueprint.created_at.isoformat() if blueprint.created_at else None,
        "subject": {
            "subject_code": subject.subject_code,
            "subject_name": subject.subject_name
        } if subject else None,
        "questions": list(questions.values())
    }
