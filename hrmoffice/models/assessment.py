from ..extensions import db
from ..services.lifecycle import STATUSES as ASSESSMENT_STATUSES, TERMINAL_STATUSES  # noqa: F401
from .base import OrgScopedMixin, TimestampMixin, iso

ASSESSMENT_TYPES = ("SELF", "ASSESSOR", "CONSENSUS")


class Assessment(db.Model, OrgScopedMixin, TimestampMixin):
    __tablename__ = "assessments"
    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(20), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="PENDING")
    employee_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assessor_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), index=True)
    started_at = db.Column(db.DateTime)
    completed_at = db.Column(db.DateTime)

    ratings = db.relationship(
        "AssessmentRating",
        backref="assessment",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="AssessmentRating.id",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "status": self.status,
            "employee_id": self.employee_id,
            "assessor_id": self.assessor_id,
            "created_at": iso(self.created_at),
            "started_at": iso(self.started_at),
            "completed_at": iso(self.completed_at),
            "ratings": [r.to_dict() for r in self.ratings],
        }

    def __repr__(self) -> str:
        return f"<Assessment id={self.id} type={self.type} status={self.status} employee_id={self.employee_id}>"


class AssessmentRating(db.Model, OrgScopedMixin, TimestampMixin):
    __tablename__ = "assessment_ratings"
    __table_args__ = (
        db.UniqueConstraint("assessment_id", "competency_id", name="uq_rating_assessment_competency"),
        db.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_rating_range"),
    )
    id = db.Column(db.Integer, primary_key=True)
    assessment_id = db.Column(db.Integer, db.ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False, index=True)
    competency_id = db.Column(db.Integer, db.ForeignKey("competencies.id", ondelete="CASCADE"), nullable=False)
    # 0 = not yet rated
    rating = db.Column(db.Integer, nullable=False, default=0)
    comment = db.Column(db.Text)

    def to_dict(self):
        return {
            "id": self.id,
            "assessment_id": self.assessment_id,
            "competency_id": self.competency_id,
            "rating": self.rating,
            "comment": self.comment,
        }
