from models import (
    InternalExamBlueprint,
    InternalSubQuestion,
    Student,
    StudentComponentMark,
    StudentInternalTotal,
    StudentOverallTotal,
    StudentSubQuestionMark,
    Subject,
    SubjectComponentConfig,
)


class MarksStore:
    """
    Data access for the marks module, bound to one SQLAlchemy session.

    The rollup and entry services receive a store instead of reaching for
    ``db.session`` themselves, so a caller decides which session (and
    which transaction) a run uses.
    """

    def __init__(self, session):
        self.session = session

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    def flush(self):
        self.session.flush()

    # ---------------------------------------------------------
    # Subjects and students
    # ---------------------------------------------------------
    def get_subject(self, subject_id):
        return self.session.get(Subject, subject_id)

    def get_student_by_usn(self, usn):
        return self.session.query(Student).filter_by(usn=usn).first()

    def _subject_students_query(self, subject):
        query = self.session.query(Student).filter(
            Student.branch_id == subject.branch_id,
            Student.semester == subject.semester,
            Student.is_active.is_(True)
        )
        if subject.section:
            query = query.filter(Student.section == subject.section)
        return query

    def students_for_subject(self, subject, offset=None, limit=None):
        query = self._subject_students_query(subject).order_by(Student.usn.asc())
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        return query.all()

    def count_students_for_subject(self, subject):
        return self._subject_students_query(subject).count()

    # ---------------------------------------------------------
    # Blueprints and subquestions
    # ---------------------------------------------------------
    def list_blueprints(self, subject_id=None, cie_no=None):
        query = self.session.query(InternalExamBlueprint)
        if subject_id is not None:
            query = query.filter(InternalExamBlueprint.subject_id == subject_id)
        if cie_no is not None:
            query = query.filter(InternalExamBlueprint.cie_no == cie_no)
        return query.order_by(
            InternalExamBlueprint.subject_id.asc(),
            InternalExamBlueprint.cie_no.asc()
        ).all()

    def get_blueprint(self, subject_id, cie_no):
        return self.session.query(InternalExamBlueprint).filter_by(
            subject_id=subject_id,
            cie_no=cie_no
        ).first()

    def get_blueprint_by_id(self, blueprint_id):
        return self.session.get(InternalExamBlueprint, blueprint_id)

    def add_blueprint(self, subject_id, cie_no, created_by=None):
        blueprint = InternalExamBlueprint(
            subject_id=subject_id,
            cie_no=cie_no,
            created_by=created_by
        )
        self.session.add(blueprint)
        self.session.flush()
        return blueprint

    def add_subquestion(self, blueprint_id, question_no, label, max_marks):
        subq = InternalSubQuestion(
            blueprint_id=blueprint_id,
            question_no=question_no,
            label=label,
            max_marks=max_marks
        )
        self.session.add(subq)
        return subq

    def delete_subquestions(self, blueprint):
        for subq in list(blueprint.subquestions):
            blueprint.subquestions.remove(subq)
        self.session.flush()

    def subquestions(self, blueprint_id):
        return self.session.query(InternalSubQuestion).filter_by(
            blueprint_id=blueprint_id
        ).order_by(
            InternalSubQuestion.question_no.asc(),
            InternalSubQuestion.subq_id.asc()
        ).all()

    def get_subquestion(self, subq_id):
        return self.session.get(InternalSubQuestion, subq_id)

    # ---------------------------------------------------------
    # Sub-question marks
    # ---------------------------------------------------------
    def students_with_marks(self, subq_ids):
        if not subq_ids:
            return []
        rows = self.session.query(StudentSubQuestionMark.student_id).filter(
            StudentSubQuestionMark.subq_id.in_(subq_ids)
        ).distinct().order_by(StudentSubQuestionMark.student_id.asc()).all()
        return [student_id for (student_id,) in rows]

    def marks_for_student(self, student_id, subq_ids):
        if not subq_ids:
            return []
        rows = self.session.query(
            StudentSubQuestionMark.subq_id,
            StudentSubQuestionMark.marks
        ).filter(
            StudentSubQuestionMark.student_id == student_id,
            StudentSubQuestionMark.subq_id.in_(subq_ids)
        ).all()
        return [(subq_id, marks) for subq_id, marks in rows]

    def marks_for_students(self, student_ids, subq_ids):
        if not student_ids or not subq_ids:
            return []
        return self.session.query(StudentSubQuestionMark).filter(
            StudentSubQuestionMark.student_id.in_(student_ids),
            StudentSubQuestionMark.subq_id.in_(subq_ids)
        ).all()

    def get_subquestion_mark(self, subq_id, student_id):
        return self.session.query(StudentSubQuestionMark).filter_by(
            subq_id=subq_id,
            student_id=student_id
        ).first()

    def upsert_subquestion_mark(self, subq_id, student_id, marks):
        row = self.get_subquestion_mark(subq_id, student_id)
        if row is None:
            row = StudentSubQuestionMark(subq_id=subq_id, student_id=student_id)
            self.session.add(row)
        row.marks = marks
        self.session.flush()
        return row

    def delete_subquestion_mark(self, subq_id, student_id):
        row = self.get_subquestion_mark(subq_id, student_id)
        if row is not None:
            self.session.delete(row)
            self.session.flush()
        return row

    # ---------------------------------------------------------
    # Internal totals
    # ---------------------------------------------------------
    def get_internal_total(self, key):
        return self.session.query(StudentInternalTotal).filter_by(**key.as_filter()).first()

    def upsert_internal_total(self, key, score):
        row = self.get_internal_total(key)
        if row is None:
            row = StudentInternalTotal(**key.as_filter())
            self.session.add(row)
        row.best_part_a = score.best_part_a
        row.best_part_b = score.best_part_b
        row.total = score.total
        self.session.flush()
        return row

    def delete_internal_totals(self, subject_id, cie_no):
        """Remove every stored total for one (subject, CIE); returns the affected student ids."""
        rows = self.session.query(StudentInternalTotal).filter_by(
            subject_id=subject_id,
            cie_no=cie_no
        ).all()
        student_ids = [row.student_id for row in rows]
        for row in rows:
            self.session.delete(row)
        self.session.flush()
        return student_ids

    def internal_totals(self, subject_id, cie_no):
        return self.session.query(StudentInternalTotal, Student).join(
            Student, StudentInternalTotal.student_id == Student.student_id
        ).filter(
            StudentInternalTotal.subject_id == subject_id,
            StudentInternalTotal.cie_no == cie_no
        ).order_by(Student.usn.asc()).all()

    def cie_totals_for(self, student_id, subject_id):
        rows = self.session.query(StudentInternalTotal.total).filter_by(
            student_id=student_id,
            subject_id=subject_id
        ).order_by(StudentInternalTotal.cie_no.asc()).all()
        return [total for (total,) in rows]

    # ---------------------------------------------------------
    # Components
    # ---------------------------------------------------------
    def component_configs(self, subject_id):
        return self.session.query(SubjectComponentConfig).filter_by(
            subject_id=subject_id
        ).order_by(SubjectComponentConfig.component.asc()).all()

    def get_component_config(self, subject_id, component):
        return self.session.query(SubjectComponentConfig).filter_by(
            subject_id=subject_id,
            component=component
        ).first()

    def upsert_component_config(self, subject_id, component, max_marks, attempt_count):
        row = self.get_component_config(subject_id, component)
        if row is None:
            row = SubjectComponentConfig(subject_id=subject_id, component=component)
            self.session.add(row)
        row.max_marks = max_marks
        row.attempt_count = attempt_count
        self.session.flush()
        return row

    def upsert_component_mark(self, student_id, subject_id, component, attempt_no, marks):
        row = self.session.query(StudentComponentMark).filter_by(
            student_id=student_id,
            subject_id=subject_id,
            component=component,
            attempt_no=attempt_no
        ).first()
        if row is None:
            row = StudentComponentMark(
                student_id=student_id,
                subject_id=subject_id,
                component=component,
                attempt_no=attempt_no
            )
            self.session.add(row)
        row.marks = marks
        self.session.flush()
        return row

    def component_marks_for(self, student_id, subject_id):
        rows = self.session.query(
            StudentComponentMark.component,
            StudentComponentMark.attempt_no,
            StudentComponentMark.marks
        ).filter_by(
            student_id=student_id,
            subject_id=subject_id
        ).order_by(
            StudentComponentMark.component.asc(),
            StudentComponentMark.attempt_no.asc()
        ).all()
        return [(component, attempt_no, marks) for component, attempt_no, marks in rows]

    def component_marks(self, student_ids, subject_id, component, attempt_no):
        if not student_ids:
            return []
        return self.session.query(StudentComponentMark).filter(
            StudentComponentMark.student_id.in_(student_ids),
            StudentComponentMark.subject_id == subject_id,
            StudentComponentMark.component == component,
            StudentComponentMark.attempt_no == attempt_no
        ).all()

    # ---------------------------------------------------------
    # Overall totals
    # ---------------------------------------------------------
    def get_overall_total(self, key):
        return self.session.query(StudentOverallTotal).filter_by(**key.as_filter()).first()

    def upsert_overall_total(self, key, score):
        row = self.get_overall_total(key)
        if row is None:
            row = StudentOverallTotal(**key.as_filter())
            self.session.add(row)
        row.cie_total = score.cie_total
        row.assignment = score.assignment
        row.quiz = score.quiz
        row.seminar = score.seminar
        row.overall_total = score.overall_total
        self.session.flush()
        return row

    def overall_totals(self, student_ids, subject_id):
        if not student_ids:
            return []
        return self.session.query(StudentOverallTotal).filter(
            StudentOverallTotal.student_id.in_(student_ids),
            StudentOverallTotal.subject_id == subject_id
        ).all()

    def overall_pairs(self, subject_id=None):
        """(student_id, subject_id) pairs that have component marks or internal totals."""
        component_query = self.session.query(
            StudentComponentMark.student_id,
            StudentComponentMark.subject_id
        )
        internal_query = self.session.query(
            StudentInternalTotal.student_id,
            StudentInternalTotal.subject_id
        )
        if subject_id is not None:
            component_query = component_query.filter(StudentComponentMark.subject_id == subject_id)
            internal_query = internal_query.filter(StudentInternalTotal.subject_id == subject_id)

        pairs = {tuple(row) for row in component_query.distinct().all()}
        pairs.update(tuple(row) for row in internal_query.distinct().all())
        return sorted(pairs)
