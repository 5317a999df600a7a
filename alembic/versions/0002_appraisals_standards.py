"""Appraisals and standards

Revision ID: 0002_appraisals_standards
Revises: 0001_initial
Create Date: 2026-10-19 12:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0002_appraisals_standards"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    ]


def _org_id():
    return sa.Column("org_id", sa.Integer, sa.ForeignKey("organizations.id"), nullable=False, index=True)


def upgrade():
    op.create_table(
        "standards",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("domain_id", sa.Integer, sa.ForeignKey("competency_domains.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        sa.Column("definition", sa.Text, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "appraisal_questions",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("key", sa.String(120), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("how_to_measure", sa.Text),
        sa.Column("good_indicator", sa.Text),
        sa.Column("red_flag", sa.Text),
        sa.Column("rating_criteria", sa.Text),
        sa.Column("position", sa.Integer, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("org_id", "key", name="uq_appraisal_question_key"),
    )

    op.create_table(
        "appraisals",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("employee_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        sa.Column("assessor_id", sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL"), index=True),
        sa.Column("started_at", sa.DateTime),
        sa.Column("completed_at", sa.DateTime),
        *_timestamps(),
    )

    op.create_table(
        "appraisal_responses",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("appraisal_id", sa.Integer, sa.ForeignKey("appraisals.id", ondelete="CASCADE"),
                  nullable=False, index=True),
        sa.Column("question_id", sa.Integer, sa.ForeignKey("appraisal_questions.id"), nullable=False),
        sa.Column("employee_rating", sa.Integer),
        sa.Column("employee_comment", sa.Text),
        sa.Column("assessor_rating", sa.Integer),
        sa.Column("assessor_comment", sa.Text),
        *_timestamps(),
        sa.UniqueConstraint("appraisal_id", "question_id", name="uq_appraisal_response_question"),
    )


def downgrade():
    for name in ("appraisal_responses", "appraisals", "appraisal_questions", "standards"):
        op.drop_table(name)
