from extensions import db

class StudentInternalTotal(db.Model):
    __tablename__ = "student_internal_totals"

    total_id = db.Column(db.Integer, primary_key=True)

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

    cie_no = db.Column(db.Integer, nullable=False)

    best_part_a = db.Column(db.Numeric(6, 2, asdecimal=False), nullable=False, default=0)
    best_part_b = db.Column(db.Numeric(6, 2, asdecimal=False), nullable=False, default=0)
    total = db.Column(db.Integer, nullable=False, default=0)

    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.now(),
        onupdate=db.func.now()
    )

    __table_args__ = (
        db.UniqueConstraint("student_id", "subject_id", "cie_no", name="unique_student_subject_cie"),
    )

    def __repr__(self):
        return f"<StudentInternalTotal student={self.student_id} subject={self.subject_id} CIE-{self.cie_no}>"
