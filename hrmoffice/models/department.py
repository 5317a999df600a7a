from ..extensions import db
from .base import OrgScopedMixin, TimestampMixin

class Department(db.Model, OrgScopedMixin, TimestampMixin):
    __tablename__ = "departments"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)

    def to_dict(self):
        return {"id": self.id, "name": self.name}
