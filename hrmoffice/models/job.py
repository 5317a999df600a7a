from ..extensions import db
from .base import OrgScopedMixin, TimestampMixin

class Job(db.Model, OrgScopedMixin, TimestampMixin):
    __tablename__ = "jobs"
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    department_id = db.Column(db.Integer, db.ForeignKey("departments.id", ondelete="SET NULL"))

    department = db.relationship("Department", lazy="joined")
    requirements = db.relationship("JobCompetency", cascade="all, delete-orphan", lazy="selectin")

    def to_dict(self, include_requirements=False):
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "department_id": self.department_id,
            "department": self.department.to_dict() if self.department else None,
        }
        if include_requirements:
            data["requirements"] = [r.to_dict() for r in self.requirements]
        return data


class JobCompetency(db.Model, OrgScopedMixin):
    """Required proficiency level of one competency for a job."""
    __tablename__ = "job_competencies"
    id = db.Column(db.Integer, primary_key=True)
    job_id = db.Column(db.Integer, db.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    competency_id = db.Column(db.Integer, db.ForeignKey("competencies.id", ondelete="CASCADE"), nullable=False)
    required_level = db.Column(db.Integer, nullable=False)

    competency = db.relationship("Competency", lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "job_id": self.job_id,
            "competency_id": self.competency_id,
            "required_level": self.required_level,
        }
