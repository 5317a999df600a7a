from ..extensions import db
from .base import OrgScopedMixin, TimestampMixin

class CompetencyDomain(db.Model, OrgScopedMixin, TimestampMixin):
    __tablename__ = "competency_domains"
    id = db.Column(db.Integer, primary_key=True)
    domain_name = db.Column(db.String(255), nullable=False)

    def to_dict(self):
        return {"id": self.id, "domain_name": self.domain_name}


class CompetencyCategory(db.Model, OrgScopedMixin, TimestampMixin):
    __tablename__ = "competency_categories"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    domain_id = db.Column(db.Integer, db.ForeignKey("competency_domains.id", ondelete="CASCADE"), nullable=False)

    domain = db.relationship("CompetencyDomain", lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "domain_id": self.domain_id,
            "domain": self.domain.to_dict() if self.domain else None,
        }


class Competency(db.Model, OrgScopedMixin, TimestampMixin):
    __tablename__ = "competencies"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    category_id = db.Column(db.Integer, db.ForeignKey("competency_categories.id", ondelete="CASCADE"), nullable=False)

    category = db.relationship("CompetencyCategory", lazy="joined")

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category_id": self.category_id,
            "category": self.category.to_dict() if self.category else None,
        }


class ProficiencyLevel(db.Model, OrgScopedMixin, TimestampMixin):
    __tablename__ = "proficiency_levels"
    id = db.Column(db.Integer, primary_key=True)
    level_number = db.Column(db.Integer, nullable=False)
    label = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text)

    def to_dict(self):
        return {
            "id": self.id,
            "level_number": self.level_number,
            "label": self.label,
            "description": self.description,
        }
