from ..extensions import db
from ..services.lifecycle import STATUSES as APPRAISAL_STATUSES  # noqa: F401
from .base import OrgScopedMixin, TimestampMixin, iso

APPRAISAL_TYPES = ("SELF", "ASSESSOR")


class AppraisalQuestion(db.Model, OrgScopedMixin, TimestampMixin):
    """One performance criterion; each organization gets the default set on first use."""
    __tablename__ = "appraisal_questions"
    __table_args__ = (db.UniqueConstraint("org_id", "key", name="uq_appraisal_question_key"),)
    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(120), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    how_to_measure = db.Column(db.Text)
    good_indicator = db.Column(db.Text)
    red_flag = db.Column(db.Text)
    rating_criteria = db.Column(db.Text)
    position = db.Column(db.Integer, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "key": self.key,
            "title": self.title,
            "description": self.description,
            "how_to_measure": self.how_to_measure,
            "good_indicator": self.good_indicator,
            "red_flag": self.red_flag,
            "rating_criteria": self.rating_criteria,
            "order": self.position,
        }


class Appraisal(db.Model, OrgScopedMixin, TimestampMixin):
    __tablename__ = "appraisals"
    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(20), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="PENDING")
    employee_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assessor_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), index=True)
    started_at = db.Column(db.DateTime)
    completed_at = db.Column(db.DateTime)

    employee = db.relationship("User", foreign_keys=[employee_id], lazy="joined")
    assessor = db.relationship("User", foreign_keys=[assessor_id], lazy="joined")
    responses = db.relationship(
        "AppraisalResponse",
        backref="appraisal",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="AppraisalResponse.id",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "status": self.status,
            "employee_id": self.employee_id,
            "assessor_id": self.assessor_id,
            "employee": self.employee.to_summary() if self.employee else None,
            "assessor": self.assessor.to_summary() if self.assessor else None,
            "created_at": iso(self.created_at),
            "started_at": iso(self.started_at),
            "completed_at": iso(self.completed_at),
        }


class AppraisalResponse(db.Model, OrgScopedMixin, TimestampMixin):
    """Both sides' answer to one question; the employee and the assessor fill their own half."""
    __tablename__ = "appraisal_responses"
    __table_args__ = (
        db.UniqueConstraint("appraisal_id", "question_id", name="uq_appraisal_response_question"),
    )
    id = db.Column(db.Integer, primary_key=True)
    appraisal_id = db.Column(db.Integer, db.ForeignKey("appraisals.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = db.Column(db.Integer, db.ForeignKey("appraisal_questions.id"), nullable=False)
    employee_rating = db.Column(db.Integer)
    employee_comment = db.Column(db.Text)
    assessor_rating = db.Column(db.Integer)
    assessor_comment = db.Column(db.Text)

    def to_dict(self):
        return {
            "id": self.id,
            "appraisal_id": self.appraisal_id,
            "question_id": self.question_id,
            "employee_rating": self.employee_rating,
            "employee_comment": self.employee_comment,
            "assessor_rating": self.assessor_rating,
            "assessor_comment": self.assessor_comment,
        }
