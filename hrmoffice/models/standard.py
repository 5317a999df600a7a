from ..extensions import db
from .base import OrgScopedMixin, TimestampMixin


class Standard(db.Model, OrgScopedMixin, TimestampMixin):
    """Named performance standard defined within a competency domain."""
    __tablename__ = "standards"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    domain_id = db.Column(db.Integer, db.ForeignKey("competency_domains.id", ondelete="CASCADE"), nullable=False, index=True)
    definition = db.Column(db.Text, nullable=False)

    domain = db.relationship("CompetencyDomain", lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "definition": self.definition,
            "domain_id": self.domain_id,
            "domain": self.domain.to_dict() if self.domain else None,
        }
