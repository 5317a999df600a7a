from ..extensions import db
from .base import OrgScopedMixin

class AssessorAssignment(db.Model, OrgScopedMixin):
    __tablename__ = "assessor_assignments"
    __table_args__ = (db.UniqueConstraint("org_id", "assessor_id", "employee_id", name="uq_assessor_assignment"),)
    id = db.Column(db.Integer, primary_key=True)
    assessor_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    assessor = db.relationship("User", foreign_keys=[assessor_id], lazy="joined")
    employee = db.relationship("User", foreign_keys=[employee_id], lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "assessor_id": self.assessor_id,
            "employee_id": self.employee_id,
            "assessor": self.assessor.to_summary() if self.assessor else None,
            "employee": self.employee.to_summary() if self.employee else None,
        }
