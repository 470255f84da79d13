"""create marks tables

Revision ID: 3a7d9e2b1c40
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3a7d9e2b1c40"
down_revision = None
branch_labels = None
depends_on = None

COMPONENT_TYPE = sa.Enum("A1", "A2", "QZ", "SM", name="component_type")


def upgrade():
    op.create_table(
        "branches",
        sa.Column("branch_id", sa.Integer(), primary_key=True),
        sa.Column("branch_code", sa.String(length=10), nullable=False, unique=True),
        sa.Column("branch_name", sa.String(length=100), nullable=False),
    )
    op.create_table(
        "roles",
        sa.Column("role_id", sa.Integer(), primary_key=True),
        sa.Column("role_name", sa.String(length=20), nullable=False, unique=True),
    )
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("branch_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["role_id"], ["roles.role_id"]),
        sa.ForeignKeyConstraint(["branch_id"], ["branches.branch_id"]),
    )
    op.create_table(
        "students",
        sa.Column("student_id", sa.Integer(), primary_key=True),
        sa.Column("usn", sa.String(length=20), nullable=False, unique=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("branch_id", sa.Integer(), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False),
        sa.Column("section", sa.String(length=5), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.text("1")),
        sa.ForeignKeyConstraint(["branch_id"], ["branches.branch_id"]),
    )
    op.create_table(
        "subjects",
        sa.Column("subject_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("subject_code", sa.String(length=20), nullable=False, unique=True),
        sa.Column("subject_name", sa.String(length=100), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False),
        sa.Column("section", sa.String(length=5), nullable=True),
        sa.Column("branch_id", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["branch_id"], ["branches.branch_id"]),
    )
    op.create_table(
        "internal_exam_blueprints",
        sa.Column("blueprint_id", sa.Integer(), primary_key=True),
        sa.Column("subject_id", sa.Integer(), nullable=False),
        sa.Column("cie_no", sa.Integer(), nullable=False),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.subject_id"]),
        sa.ForeignKeyConstraint(["created_by"], ["users.user_id"]),
        sa.UniqueConstraint("subject_id", "cie_no", name="unique_subject_cie"),
    )
    op.create_table(
        "internal_sub_questions",
        sa.Column("subq_id", sa.Integer(), primary_key=True),
        sa.Column("blueprint_id", sa.Integer(), nullable=False),
        sa.Column("question_no", sa.Integer(), nullable=True),
        sa.Column("label", sa.String(length=10), nullable=False),
        sa.Column("max_marks", sa.Numeric(5, 2), nullable=False),
        sa.ForeignKeyConstraint(["blueprint_id"], ["internal_exam_blueprints.blueprint_id"]),
    )
    op.create_table(
        "student_sub_question_marks",
        sa.Column("mark_id", sa.Integer(), primary_key=True),
        sa.Column("subq_id", sa.Integer(), nullable=False),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("marks", sa.Numeric(5, 2), nullable=False),
        sa.ForeignKeyConstraint(["subq_id"], ["internal_sub_questions.subq_id"]),
        sa.ForeignKeyConstraint(["student_id"], ["students.student_id"]),
        sa.UniqueConstraint("subq_id", "student_id", name="unique_subq_student"),
    )
    op.create_table(
        "student_internal_totals",
        sa.Column("total_id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("subject_id", sa.Integer(), nullable=False),
        sa.Column("cie_no", sa.Integer(), nullable=False),
        sa.Column("best_part_a", sa.Numeric(6, 2), nullable=False),
        sa.Column("best_part_b", sa.Numeric(6, 2), nullable=False),
        sa.Column("total", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["student_id"], ["students.student_id"]),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.subject_id"]),
        sa.UniqueConstraint("student_id", "subject_id", "cie_no", name="unique_student_subject_cie"),
    )
    op.create_table(
        "subject_component_configs",
        sa.Column("config_id", sa.Integer(), primary_key=True),
        sa.Column("subject_id", sa.Integer(), nullable=False),
        sa.Column("component", COMPONENT_TYPE, nullable=False),
        sa.Column("max_marks", sa.Integer(), nullable=False),
        sa.Column("attempt_count", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.subject_id"]),
        sa.UniqueConstraint("subject_id", "component", name="unique_subject_component"),
    )
    op.create_table(
        "student_component_marks",
        sa.Column("mark_id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("subject_id", sa.Integer(), nullable=False),
        sa.Column("component", COMPONENT_TYPE, nullable=False),
        sa.Column("attempt_no", sa.Integer(), nullable=False),
        sa.Column("marks", sa.Numeric(5, 2), nullable=False),
        sa.ForeignKeyConstraint(["student_id"], ["students.student_id"]),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.subject_id"]),
        sa.UniqueConstraint(
            "student_id", "subject_id", "component", "attempt_no",
            name="unique_student_subject_component_attempt"
        ),
    )
    op.create_table(
        "student_overall_totals",
        sa.Column("overall_id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("subject_id", sa.Integer(), nullable=False),
        sa.Column("cie_total", sa.Numeric(7, 2), nullable=False),
        sa.Column("assignment", sa.Numeric(7, 2), nullable=False),
        sa.Column("quiz", sa.Numeric(7, 2), nullable=False),
        sa.Column("seminar", sa.Numeric(7, 2), nullable=False),
        sa.Column("overall_total", sa.Numeric(7, 2), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["student_id"], ["students.student_id"]),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.subject_id"]),
        sa.UniqueConstraint("student_id", "subject_id", name="unique_student_subject"),
    )


def downgrade():
    op.drop_table("student_overall_totals")
    op.drop_table("student_component_marks")
    op.drop_table("subject_component_configs")
    op.drop_table("student_internal_totals")
    op.drop_table("student_sub_question_marks")
    op.drop_table("internal_sub_questions")
    op.drop_table("internal_exam_blueprints")
    op.drop_table("subjects")
    op.drop_table("students")
    op.drop_table("users")
    op.drop_table("roles")
    op.drop_table("branches")
