from extensions import db

class StudentOverallTotal(db.Model):
    __tablename__ = "student_overall_totals"

    overall_id = db.Column(db.Integer, primary_key=True)

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

    cie_total = db.Column(db.Numeric(7, 2, asdecimal=False), nullable=False, default=0)
    assignment = db.Column(db.Numeric(7, 2, asdecimal=False), nullable=False, default=0)
    quiz = db.Column(db.Numeric(7, 2, asdecimal=False), nullable=False, default=0)
    seminar = db.Column(db.Numeric(7, 2, asdecimal=False), nullable=False, default=0)
    overall_total = db.Column(db.Numeric(7, 2, asdecimal=False), nullable=False, default=0)

    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.now(),
        onupdate=db.func.now()
    )

    __table_args__ = (
        db.UniqueConstraint("student_id", "subject_id", name="unique_student_subject"),
    )

    def __repr__(self):
        return f"<StudentOverallTotal student={self.student_id} subject={self.subject_id}>"
