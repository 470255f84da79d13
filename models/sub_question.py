from extensions import db

class InternalSubQuestion(db.Model):
    __tablename__ = "internal_sub_questions"

    subq_id = db.Column(db.Integer, primary_key=True)

    blueprint_id = db.Column(
        db.Integer,
        db.ForeignKey("internal_exam_blueprints.blueprint_id"),
        nullable=False
    )

    # 1-2 is Part A, 3-4 is Part B
    question_no = db.Column(db.Integer, nullable=True)
    label = db.Column(db.String(10), nullable=False)
    max_marks = db.Column(db.Numeric(5, 2, asdecimal=False), nullable=False)

    marks = db.relationship(
        "StudentSubQuestionMark",
        backref="subquestion",
        lazy=True,
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<InternalSubQuestion Q{self.question_no} {self.label}>"
