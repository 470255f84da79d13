from extensions import db

class InternalExamBlueprint(db.Model):
    __tablename__ = "internal_exam_blueprints"

    blueprint_id = db.Column(db.Integer, primary_key=True)

    subject_id = db.Column(
        db.Integer,
        db.ForeignKey("subjects.subject_id"),
        nullable=False
    )

    cie_no = db.Column(db.Integer, nullable=False)

    created_by = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id"),
        nullable=True
    )

    created_at = db.Column(db.DateTime, server_default=db.func.now())

    subquestions = db.relationship(
        "InternalSubQuestion",
        backref="blueprint",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="InternalSubQuestion.subq_id"
    )

    __table_args__ = (
        db.UniqueConstraint("subject_id", "cie_no", name="unique_subject_cie"),
    )

    def __repr__(self):
        return f"<InternalExamBlueprint subject={self.subject_id} CIE-{self.cie_no}>"
