from extensions import db

class Student(db.Model):
    __tablename__ = "students"

    student_id = db.Column(db.Integer, primary_key=True)
    usn = db.Column(db.String(20), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)

    branch_id = db.Column(
        db.Integer,
        db.ForeignKey("branches.branch_id"),
        nullable=False
    )

    semester = db.Column(db.Integer, nullable=False)
    section = db.Column(db.String(5), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    subquestion_marks = db.relationship("StudentSubQuestionMark", backref="student", lazy=True)
    component_marks = db.relationship("StudentComponentMark", backref="student", lazy=True)

    def __repr__(self):
        return f"<Student {self.usn}>"
