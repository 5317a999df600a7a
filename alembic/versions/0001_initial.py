"""Initial schema

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial"
down_revision = None
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
        "organizations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(120), nullable=False, unique=True),
        sa.Column("email", sa.String(255)),
        sa.Column("logo_url", sa.String(1024)),
        sa.Column("address", sa.Text),
        *_timestamps(),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("org_id", sa.Integer, sa.ForeignKey("organizations.id"), nullable=False, index=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(120)),
        sa.Column("last_name", sa.String(120)),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("phone", sa.String(50)),
        sa.Column("profile_picture_url", sa.String(1024)),
        sa.Column("is_locked_until", sa.DateTime),
        sa.Column("onboarding_completed", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint("org_id", "email", name="uq_users_org_email"),
    )

    op.create_table(
        "departments",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("department_id", sa.Integer, sa.ForeignKey("departments.id", ondelete="SET NULL")),
        *_timestamps(),
    )

    op.create_table(
        "competency_domains",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("domain_name", sa.String(255), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "competency_categories",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("domain_id", sa.Integer, sa.ForeignKey("competency_domains.id", ondelete="CASCADE"), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "competencies",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("category_id", sa.Integer, sa.ForeignKey("competency_categories.id", ondelete="CASCADE"), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "proficiency_levels",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("level_number", sa.Integer, nullable=False),
        sa.Column("label", sa.String(120), nullable=False),
        sa.Column("description", sa.Text),
        *_timestamps(),
    )

    op.create_table(
        "job_competencies",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("job_id", sa.Integer, sa.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("competency_id", sa.Integer, sa.ForeignKey("competencies.id", ondelete="CASCADE"), nullable=False),
        sa.Column("required_level", sa.Integer, nullable=False),
    )

    op.create_table(
        "employee_job_assignments",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("employee_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("job_id", sa.Integer, sa.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_date", sa.DateTime),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.UniqueConstraint("org_id", "employee_id", "job_id", name="uq_job_assignment"),
    )

    op.create_table(
        "assessor_assignments",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("assessor_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("employee_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.UniqueConstraint("org_id", "assessor_id", "employee_id", name="uq_assessor_assignment"),
    )

    op.create_table(
        "assessments",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("employee_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("assessor_id", sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL"), index=True),
        sa.Column("started_at", sa.DateTime),
        sa.Column("completed_at", sa.DateTime),
        *_timestamps(),
    )

    op.create_table(
        "assessment_ratings",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("assessment_id", sa.Integer, sa.ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("competency_id", sa.Integer, sa.ForeignKey("competencies.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rating", sa.Integer, nullable=False, server_default="0"),
        sa.Column("comment", sa.Text),
        *_timestamps(),
        sa.UniqueConstraint("assessment_id", "competency_id", name="uq_rating_assessment_competency"),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_rating_range"),
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer, primary_key=True),
        _org_id(),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL")),
        sa.Column("type", sa.String(50)),
        sa.Column("sent_to", sa.String(255)),
        sa.Column("subject", sa.String(255)),
        sa.Column("body", sa.Text),
        sa.Column("provider_message_id", sa.String(255)),
        sa.Column("status", sa.String(20)),
        sa.Column("sent_at", sa.DateTime),
        *_timestamps(),
    )


def downgrade():
    for name in (
        "notifications",
        "assessment_ratings",
        "assessments",
        "assessor_assignments",
        "employee_job_assignments",
        "job_competencies",
        "proficiency_levels",
        "competencies",
        "competency_categories",
        "competency_domains",
        "jobs",
        "departments",
        "users",
        "organizations",
    ):
        op.drop_table(name)
