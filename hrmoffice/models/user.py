from ..extensions import db
from flask_login import UserMixin
from .base import TimestampMixin, iso
from werkzeug.security import generate_password_hash, check_password_hash

ROLES = ("HR", "ASSESSOR", "EMPLOYEE")

class User(db.Model, UserMixin, TimestampMixin):
    __tablename__ = "users"
    __table_args__ = (db.UniqueConstraint("org_id", "email", name="uq_users_org_email"),)
    id = db.Column(db.Integer, primary_key=True)
    org_id = db.Column(db.Integer, db.ForeignKey("organizations.id"), nullable=False, index=True)
    email = db.Column(db.String(255), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(120), default="")
    last_name = db.Column(db.String(120), default="")
    role = db.Column(db.String(20), nullable=False, default="EMPLOYEE")
    phone = db.Column(db.String(50))
    profile_picture_url = db.Column(db.String(1024))
    # profile edit gate
    is_locked_until = db.Column(db.DateTime)
    onboarding_completed = db.Column(db.Boolean, nullable=False, default=False)

    def set_password(self, raw):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw):
        return check_password_hash(self.password_hash, raw)

    def to_summary(self):
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role,
        }

    def to_dict(self):
        data = self.to_summary()
        data.update({
            "phone": self.phone,
            "profile_picture_url": self.profile_picture_url,
            "is_locked_until": iso(self.is_locked_until),
            "onboarding_completed": bool(self.onboarding_completed),
        })
        return data
