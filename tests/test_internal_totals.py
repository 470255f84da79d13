from sqlalchemy import event

from extensions import db
from models import StudentInternalTotal
from services.internal_totals import fill_internal_totals, recompute_blueprint, recompute_student
from services.keys import InternalTotalKey
from services.marks_store import MarksStore


def _total(store, student, subject, cie_no=1):
    return store.get_internal_total(InternalTotalKey(student.student_id, subject.subject_id, cie_no))


def test_full_marks_use_best_question_of_each_part(store, subject, students, blueprint, record_marks):
    record_marks(blueprint, students[0], {"1a": 1.5, "1b": 1.5, "2a": 4.5, "3a": 5, "4a": 2})

    report = fill_internal_totals(store)

    assert report.ok
    assert report.succeeded == 1
    row = _total(store, students[0], subject)
    assert row.best_part_a == 4.5
    assert row.best_part_b == 5
    assert row.total == 10


def test_only_q1_submitted(store, subject, students, blueprint, record_marks):
    record_marks(blueprint, students[0], {"1a": 2})

    fill_internal_totals(store)

    row = _total(store, students[0], subject)
    assert (row.best_part_a, row.best_part_b, row.total) == (2, 0, 2)


def test_q1_and_q3_only(store, subject, students, blueprint, record_marks):
    record_marks(blueprint, students[0], {"1a": 4, "1b": 3, "3a": 6})

    fill_internal_totals(store)

    row = _total(store, students[0], subject)
    assert row.best_part_a == 7
    assert row.best_part_b == 6
    assert row.total == 13


def test_half_mark_total_rounds_up(store, subject, students, blueprint, record_marks):
    record_marks(blueprint, students[0], {"1a": 2.5})

    fill_internal_totals(store)

    assert _total(store, students[0], subject).total == 3


def test_rerun_is_idempotent(store, subject, students, blueprint, record_marks):
    record_marks(blueprint, students[0], {"1a": 3, "2a": 4.5, "3a": 5, "4a": 2})
    record_marks(blueprint, students[1], {"2a": 8, "4a": 9})

    fill_internal_totals(store)
    first = sorted(
        (r.student_id, r.subject_id, r.cie_no, r.best_part_a, r.best_part_b, r.total)
        for r in StudentInternalTotal.query.all()
    )
    fill_internal_totals(store)
    second = sorted(
        (r.student_id, r.subject_id, r.cie_no, r.best_part_a, r.best_part_b, r.total)
        for r in StudentInternalTotal.query.all()
    )

    assert first == second
    assert len(second) == 2


def test_updated_mark_overwrites_the_existing_row(store, subject, students, blueprint, record_marks):
    record_marks(blueprint, students[0], {"1a": 3, "2a": 4.5, "3a": 5, "4a": 2})
    fill_internal_totals(store)

    record_marks(blueprint, students[0], {"2a": 5})
    fill_internal_totals(store)

    rows = StudentInternalTotal.query.filter_by(student_id=students[0].student_id).all()
    assert len(rows) == 1
    assert rows[0].best_part_a == 5
    assert rows[0].total == 10


def test_student_without_marks_gets_no_row(store, subject, students, blueprint, record_marks):
    record_marks(blueprint, students[0], {"1a": 3})

    report = fill_internal_totals(store)

    assert [r.key.student_id for r in report.results] == [students[0].student_id]
    assert _total(store, students[1], subject) is None


def test_previous_total_is_left_alone_when_marks_disappear(store, subject, students, blueprint, record_marks):
    record_marks(blueprint, students[0], {"1a": 3, "3a": 4})
    fill_internal_totals(store)

    for sq in store.subquestions(blueprint.blueprint_id):
        store.delete_subquestion_mark(sq.subq_id, students[0].student_id)
    store.commit()

    report = fill_internal_totals(store)

    assert report.results == []
    row = _total(store, students[0], subject)
    assert row.total == 7


def test_unnumbered_subquestion_contributes_nothing(store, subject, students, blueprint, record_marks):
    extra = store.add_subquestion(blueprint.blueprint_id, None, "bonus", 5)
    store.commit()
    store.upsert_subquestion_mark(extra.subq_id, students[0].student_id, 5)
    store.commit()
    record_marks(blueprint, students[0], {"1a": 2})

    fill_internal_totals(store)

    assert _total(store, students[0], subject).total == 2


def test_blueprint_without_subquestions_is_skipped(store, subject, students, blueprint, record_marks):
    store.add_blueprint(subject.subject_id, 2)
    store.commit()
    record_marks(blueprint, students[0], {"1a": 3})

    report = fill_internal_totals(store)

    assert report.skipped_blueprints == [(subject.subject_id, 2)]
    assert report.succeeded == 1
    assert report.ok


def test_missing_blueprint_yields_empty_report(store, subject):
    report = fill_internal_totals(store, subject_id=subject.subject_id, cie_no=3)

    assert report.results == []
    assert report.skipped_blueprints == []
    assert report.ok


def test_filters_restrict_to_one_cie(store, subject, students, blueprint_factory, record_marks):
    cie1 = blueprint_factory(cie_no=1)
    cie2 = blueprint_factory(cie_no=2)
    record_marks(cie1, students[0], {"1a": 3})
    record_marks(cie2, students[0], {"1a": 4})

    report = fill_internal_totals(store, subject_id=subject.subject_id, cie_no=2)

    assert [r.key.cie_no for r in report.results] == [2]
    assert _total(store, students[0], subject, cie_no=1) is None
    assert _total(store, students[0], subject, cie_no=2).total == 4


def test_recompute_student_returns_score(store, subject, students, blueprint, record_marks):
    record_marks(blueprint, students[1], {"2a": 6, "4a": 3.5})

    result = recompute_student(store, blueprint, students[1].student_id)

    assert result.ok
    assert result.key == InternalTotalKey(students[1].student_id, subject.subject_id, 1)
    assert result.score.total == 10


def test_subquestions_are_loaded_once_per_blueprint(store, students, blueprint, record_marks):
    for student in students[:3]:
        record_marks(blueprint, student, {"1a": 2, "3a": 4})
    statements = []

    def capture(conn, cursor, statement, parameters, context, executemany):
        if "FROM internal_sub_questions" in statement:
            statements.append(statement)

    event.listen(db.engine, "before_cursor_execute", capture)
    try:
        report = fill_internal_totals(store)
    finally:
        event.remove(db.engine, "before_cursor_execute", capture)

    assert report.succeeded == 3
    assert len(statements) == 1


class FailingStore(MarksStore):
    def __init__(self, session, fail_student_ids=(), fail_blueprint_ids=()):
        super().__init__(session)
        self.fail_student_ids = set(fail_student_ids)
        self.fail_blueprint_ids = set(fail_blueprint_ids)

    def upsert_internal_total(self, key, score):
        if key.student_id in self.fail_student_ids:
            raise RuntimeError("database unavailable")
        return super().upsert_internal_total(key, score)

    def subquestions(self, blueprint_id):
        if blueprint_id in self.fail_blueprint_ids:
            raise RuntimeError("cannot load blueprint")
        return super().subquestions(blueprint_id)


def test_failing_student_does_not_stop_the_run(subject, students, blueprint, record_marks):
    for student in students[:3]:
        record_marks(blueprint, student, {"1a": 3})
    failing = FailingStore(db.session, fail_student_ids=[students[1].student_id])

    report = fill_internal_totals(failing)

    assert report.succeeded == 2
    assert report.failed == 1
    assert not report.ok
    failed = [r for r in report.results if not r.ok][0]
    assert failed.key.student_id == students[1].student_id
    assert failed.error == "database unavailable"
    assert _total(failing, students[0], subject).total == 3
    assert _total(failing, students[1], subject) is None
    assert _total(failing, students[2], subject).total == 3


def test_failing_blueprint_does_not_stop_the_run(subject, students, blueprint_factory, record_marks):
    cie1 = blueprint_factory(cie_no=1)
    cie2 = blueprint_factory(cie_no=2)
    record_marks(cie1, students[0], {"1a": 3})
    record_marks(cie2, students[0], {"1a": 4})
    failing = FailingStore(db.session, fail_blueprint_ids=[cie1.blueprint_id])

    report = fill_internal_totals(failing)

    assert report.failed_blueprints == [(subject.subject_id, 1)]
    assert report.succeeded == 1
    assert _total(failing, students[0], subject, cie_no=2).total == 4


def test_recompute_blueprint_reports_each_student(store, students, blueprint, record_marks):
    record_marks(blueprint, students[0], {"1a": 1})
    record_marks(blueprint, students[2], {"3a": 9})

    report = recompute_blueprint(store, blueprint)

    assert [r.key.student_id for r in report.results] == [students[0].student_id, students[2].student_id]
    assert report.as_dict()["succeeded"] == 2
