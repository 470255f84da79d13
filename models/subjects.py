# models/subjects.py
from extensions import db
from datetime import datetime

class Subject(db.Model):
    __tablename__ = 'subjects'

    subject_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    subject_code = db.Column(db.String(20), nullable=False, unique=True)
    subject_name = db.Column(db.String(100), nullable=False)
    semester = db.Column(db.Integer, nullable=False)
    section = db.Column(db.String(5), nullable=True)
    branch_id = db.Column(db.Integer, db.ForeignKey('branches.branch_id'), nullable=False)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    blueprints = db.relationship('InternalExamBlueprint', backref='subject', lazy=True)
    component_configs = db.relationship('SubjectComponentConfig', backref='subject', lazy=True)

    def __repr__(self):
        return f"<Subject {self.subject_code}>"
