from flask import jsonify, request, abort
from flask_login import login_required, current_user
from . import bp
from .forms import OrganizationForm
from ...extensions import db
from ...models.organization import Organization
from ...utils.api import validate_or_400, commit_or_abort
from ...utils.decorators import hr_required


@bp.get("/public")
def list_public():
    """Organizations for the login picker."""
    orgs = Organization.query.order_by(Organization.name.asc()).all()
    return jsonify([o.to_dict(public=True) for o in orgs])


@bp.get("/me")
@login_required
def org_me():
    org = db.session.get(Organization, current_user.org_id)
    if not org:
        abort(404, description="Organization not found")
    return jsonify(org.to_dict())


@bp.put("/me")
@hr_required
def update_org():
    org = db.session.get(Organization, current_user.org_id)
    if not org:
        abort(404, description="Organization not found")
    form = validate_or_400(OrganizationForm())
    payload = request.get_json(silent=True) or {}
    for name in ("name", "email", "logo_url", "address"):
        if name in payload:
            setattr(org, name, getattr(form, name).data or None)
    if not org.name:
        abort(400, description="name: This field is required.")
    commit_or_abort(failure="Failed to update organization")
    return jsonify(org.to_dict())
