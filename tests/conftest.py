import pytest

from app import create_app
from config.config import TestingConfig
from extensions import db
from models import Branch, Student, Subject
from services.blueprint_service import create_blueprint, parse_blueprint_payload
from services.marks_store import MarksStore

BLUEPRINT_QUESTIONS = [
    {"question_no": 1, "subs": [{"label": "1a", "max_marks": 5}, {"label": "1b", "max_marks": 5}]},
    {"question_no": 2, "subs": [{"label": "2a", "max_marks": 10}]},
    {"question_no": 3, "subs": [{"label": "3a", "max_marks": 10}]},
    {"question_no": 4, "subs": [{"label": "4a", "max_marks": 10}]},
]


@pytest.fixture()
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app):
    return MarksStore(db.session)


@pytest.fixture()
def subject(store):
    branch = Branch(branch_code="CSE", branch_name="Computer Science and Engineering")
    db.session.add(branch)
    db.session.flush()

    subject = Subject(
        subject_code="CS501",
        subject_name="Compiler Design",
        semester=5,
        branch_id=branch.branch_id
    )
    db.session.add(subject)
    db.session.commit()
    return subject


@pytest.fixture()
def students(subject):
    rows = [
        Student(usn="4CS22CS001", name="Asha Rao", branch_id=subject.branch_id, semester=5),
        Student(usn="4CS22CS002", name="Bharath K", branch_id=subject.branch_id, semester=5),
        Student(usn="4CS22CS003", name="Chaitra M", branch_id=subject.branch_id, semester=5),
        # different semester, never part of the subject's class list
        Student(usn="4CS23CS001", name="Deepak S", branch_id=subject.branch_id, semester=3),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return rows


def make_blueprint(store, subject, cie_no=1, questions=None):
    payload = parse_blueprint_payload({
        "subject_id": subject.subject_id,
        "cie_no": cie_no,
        "questions": questions or BLUEPRINT_QUESTIONS
    })
    return create_blueprint(store, payload)


@pytest.fixture()
def blueprint(store, subject):
    return make_blueprint(store, subject)


@pytest.fixture()
def record_marks(store):
    """Store sub-question marks by label: record_marks(blueprint, student, {"1a": 3, "2a": 4.5})."""
    def record(blueprint, student, marks_by_label):
        subq_ids = {sq.label: sq.subq_id for sq in store.subquestions(blueprint.blueprint_id)}
        for label, value in marks_by_label.items():
            store.upsert_subquestion_mark(subq_ids[label], student.student_id, value)
        store.commit()
    return record


@pytest.fixture()
def blueprint_factory(store, subject):
    def factory(cie_no=1, questions=None):
        return make_blueprint(store, subject, cie_no=cie_no, questions=questions)
    return factory
