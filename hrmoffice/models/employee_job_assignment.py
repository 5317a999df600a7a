from ..extensions import db
from .base import OrgScopedMixin, iso

class EmployeeJobAssignment(db.Model, OrgScopedMixin):
    __tablename__ = "employee_job_assignments"
    __table_args__ = (db.UniqueConstraint("org_id", "employee_id", "job_id", name="uq_job_assignment"),)
    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = db.Column(db.Integer, db.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    start_date = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    job = db.relationship("Job", lazy="joined")
    employee = db.relationship("User", lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "job_id": self.job_id,
            "start_date": iso(self.start_date),
            "created_at": iso(self.created_at),
            "job": self.job.to_dict() if self.job else None,
            "employee": self.employee.to_summary() if self.employee else None,
        }
