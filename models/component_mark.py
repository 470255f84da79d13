from extensions import db
from models.component_config import COMPONENTS


class StudentComponentMark(db.Model):
    __tablename__ = "student_component_marks"

    mark_id = db.Column(db.Integer, primary_key=True)

    student_id = db.Column(
        db.Integer,
        db.ForeignKey("students.student_id"),
        nullable=False
    )

    subject_id = db.Column(
        db.Integer,
        db.ForeignKey("subjects.subject_id"),
        nullable=False
    )

    component = db.Column(db.Enum(*COMPONENTS, name="component_type"), nullable=False)
    attempt_no = db.Column(db.Integer, nullable=False, default=1)
    marks = db.Column(db.Numeric(5, 2, asdecimal=False), nullable=False)

    __table_args__ = (
        db.UniqueConstraint(
            "student_id", "subject_id", "component", "attempt_no",
            name="unique_student_subject_component_attempt"
        ),
    )

    def __repr__(self):
        return f"<StudentComponentMark student={self.student_id} {self.component}#{self.attempt_no}>"
