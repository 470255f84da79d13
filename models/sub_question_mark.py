from extensions import db

class StudentSubQuestionMark(db.Model):
    __tablename__ = "student_sub_question_marks"

    mark_id = db.Column(db.Integer, primary_key=True)

    subq_id = db.Column(
        db.Integer,
        db.ForeignKey("internal_sub_questions.subq_id"),
        nullable=False
    )

    student_id = db.Column(
        db.Integer,
        db.ForeignKey("students.student_id"),
        nullable=False
    )

    marks = db.Column(db.Numeric(5, 2, asdecimal=False), nullable=False)

    __table_args__ = (
        db.UniqueConstraint("subq_id", "student_id", name="unique_subq_student"),
    )

    def __repr__(self):
        return f"<StudentSubQuestionMark student={self.student_id} subq={self.subq_id}>"
