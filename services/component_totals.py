import logging

from services.keys import OverallTotalKey
from services.report import RollupReport, RollupResult
from services.scoring import score_overall

logger = logging.getLogger(__name__)


def update_overall_total(store, student_id, subject_id):
    """Sum CIE totals and component attempts into one overall row, without committing."""
    key = OverallTotalKey(student_id, subject_id)
    attempt_limits = {c.component: c.attempt_count for c in store.component_configs(subject_id)}
    score = score_overall(
        store.cie_totals_for(student_id, subject_id),
        store.component_marks_for(student_id, subject_id),
        attempt_limits
    )
    store.upsert_overall_total(key, score)
    return key, score


def recompute_overall(store, student_id, subject_id):
    key = OverallTotalKey(student_id, subject_id)
    try:
        key, score = update_overall_total(store, student_id, subject_id)
        store.commit()
    except Exception as exc:
        store.rollback()
        logger.exception(
            "Failed to update overall total for student %s, subject %s",
            key.student_id, key.subject_id
        )
        return RollupResult(key=key, ok=False, error=str(exc))

    logger.debug(
        "Updated overall total for student %s, subject %s: cie=%s assignment=%s quiz=%s seminar=%s overall=%s",
        key.student_id, key.subject_id, score.cie_total, score.assignment,
        score.quiz, score.seminar, score.overall_total
    )
    return RollupResult(key=key, ok=True, score=score)


def fill_overall_totals(store, subject_id=None):
    report = RollupReport()

    pairs = store.overall_pairs(subject_id=subject_id)
    logger.info("Found %d student/subject pairs to total", len(pairs))

    for student_id, pair_subject_id in pairs:
        report.add(recompute_overall(store, student_id, pair_subject_id))

    logger.info("Overall totals run finished: %s", report.summary())
    return report
