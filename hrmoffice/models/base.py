from ..extensions import db

class OrgScopedMixin:
    org_id = db.Column(db.Integer, db.ForeignKey("organizations.id"), nullable=False, index=True)

class TimestampMixin:
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())


def iso(value):
    return value.isoformat() if value is not None else None
