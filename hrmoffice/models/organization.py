from ..extensions import db
from .base import TimestampMixin

class Organization(db.Model, TimestampMixin):
    __tablename__ = "organizations"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(120), unique=True, nullable=False)
    email = db.Column(db.String(255))
    logo_url = db.Column(db.String(1024))
    address = db.Column(db.Text)

    def to_dict(self, public=False):
        data = {"id": self.id, "name": self.name, "slug": self.slug, "logo_url": self.logo_url}
        if not public:
            data["email"] = self.email
            data["address"] = self.address
        return data
