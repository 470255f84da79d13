from extensions import db

# A1/A2 assignments, QZ quiz, SM seminar
COMPONENTS = ("A1", "A2", "QZ", "SM")


class SubjectComponentConfig(db.Model):
    __tablename__ = "subject_component_configs"

    config_id = db.Column(db.Integer, primary_key=True)

    subject_id = db.Column(
        db.Integer,
        db.ForeignKey("subjects.subject_id"),
        nullable=False
    )

    component = db.Column(db.Enum(*COMPONENTS, name="component_type"), nullable=False)
    max_marks = db.Column(db.Integer, nullable=False)
    attempt_count = db.Column(db.Integer, nullable=False, default=1)

    __table_args__ = (
        db.UniqueConstraint("subject_id", "component", name="unique_subject_component"),
    )

    def __repr__(self):
        return f"<SubjectComponentConfig subject={self.subject_id} {self.component}>"
