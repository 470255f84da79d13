"""
Best-of-part rollup of sub-question marks into student_internal_totals.

Totals are derived data: every run recomputes them from the recorded
marks and overwrites the row for (student, subject, CIE), so a run can be
repeated, or resumed after a partial failure, without drift.
"""
import logging

from services.keys import InternalTotalKey
from services.report import RollupReport, RollupResult
from services.scoring import is_scored_question, question_totals, score_internal

logger = logging.getLogger(__name__)


def _question_map(subquestions):
    return {sq.subq_id: sq.question_no for sq in subquestions}


def _write_total(store, key, question_for_subq):
    marks = store.marks_for_student(key.student_id, list(question_for_subq))
    score = score_internal(question_totals(marks, question_for_subq))
    store.upsert_internal_total(key, score)
    return score


def update_student_total(store, blueprint, student_id):
    """Compute and upsert one student's total without committing."""
    question_for_subq = _question_map(store.subquestions(blueprint.blueprint_id))
    key = InternalTotalKey(student_id, blueprint.subject_id, blueprint.cie_no)
    return key, _write_total(store, key, question_for_subq)


def _recompute_key(store, key, question_for_subq):
    try:
        score = _write_total(store, key, question_for_subq)
        store.commit()
    except Exception as exc:
        store.rollback()
        logger.exception(
            "Failed to update internal total for student %s, subject %s, CIE %s",
            key.student_id, key.subject_id, key.cie_no
        )
        return RollupResult(key=key, ok=False, error=str(exc))

    logger.debug(
        "Updated totals for student %s, subject %s, CIE %s: bestPartA=%s, bestPartB=%s, total=%s",
        key.student_id, key.subject_id, key.cie_no,
        score.best_part_a, score.best_part_b, score.total
    )
    return RollupResult(key=key, ok=True, score=score)


def recompute_student(store, blueprint, student_id):
    key = InternalTotalKey(student_id, blueprint.subject_id, blueprint.cie_no)
    try:
        question_for_subq = _question_map(store.subquestions(blueprint.blueprint_id))
    except Exception as exc:
        store.rollback()
        logger.exception("Failed to load subquestions of blueprint for subject %s, CIE %s", key.subject_id, key.cie_no)
        return RollupResult(key=key, ok=False, error=str(exc))
    return _recompute_key(store, key, question_for_subq)


def recompute_blueprint(store, blueprint):
    """
    Recompute every student who has at least one mark on ``blueprint``.

    Students are processed one after another and committed individually;
    a failing student is rolled back, reported and skipped. Students with
    no marks are not touched.
    """
    report = RollupReport()
    # commits expire the blueprint and its subquestions, so work from plain values
    subject_id, cie_no = blueprint.subject_id, blueprint.cie_no

    subquestions = store.subquestions(blueprint.blueprint_id)
    if not subquestions:
        logger.info("Blueprint for subject %s, CIE %s has no subquestions, skipping", subject_id, cie_no)
        report.skipped_blueprints.append((subject_id, cie_no))
        return report

    for sq in subquestions:
        if not is_scored_question(sq.question_no):
            logger.warning(
                "Subquestion %s (%s) of subject %s, CIE %s has question number %r and is ignored",
                sq.subq_id, sq.label, subject_id, cie_no, sq.question_no
            )
    question_for_subq = _question_map(subquestions)

    student_ids = store.students_with_marks(list(question_for_subq))
    logger.info(
        "Processing blueprint for subject %s, CIE %s: %d students with marks",
        subject_id, cie_no, len(student_ids)
    )

    for student_id in student_ids:
        key = InternalTotalKey(student_id, subject_id, cie_no)
        report.add(_recompute_key(store, key, question_for_subq))

    return report


def fill_internal_totals(store, subject_id=None, cie_no=None):
    """Recompute internal totals for every blueprint matching the filters."""
    report = RollupReport()

    blueprints = store.list_blueprints(subject_id=subject_id, cie_no=cie_no)
    if not blueprints:
        logger.info("No blueprints found for subject %s, CIE %s", subject_id, cie_no)
        return report

    logger.info("Found %d blueprints to process", len(blueprints))

    for blueprint in blueprints:
        pair = (blueprint.subject_id, blueprint.cie_no)
        try:
            report.merge(recompute_blueprint(store, blueprint))
        except Exception:
            store.rollback()
            logger.exception("Failed to process blueprint for subject %s, CIE %s", *pair)
            report.failed_blueprints.append(pair)

    logger.info("Internal totals run finished: %s", report.summary())
    return report
