from flask import jsonify, abort
from flask_login import login_user, logout_user, login_required, current_user
from . import bp
from ...extensions import db, rq
from .forms import LoginForm, OrgSignupForm, UserSignupForm
from ...models.organization import Organization
from ...models.user import User
from ...jobs.notify import notify_user
from ...utils.api import validate_or_400, commit_or_abort
from ...utils.decorators import hr_required


@bp.post("/org/signup")
def org_signup():
    """Create an organization together with its first HR user."""
    form = validate_or_400(OrgSignupForm())
    if Organization.query.filter_by(slug=form.slug.data).first():
        abort(409, description="Organization slug already exists")

    org = Organization(name=form.organization_name.data, email=form.organization_email.data,
                       slug=form.slug.data, logo_url=form.logo_url.data or None,
                       address=form.address.data or None)
    db.session.add(org)
    db.session.flush()
    admin = User(org_id=org.id, email=form.admin_email.data, role="HR",
                 first_name=form.first_name.data or "", last_name=form.last_name.data or "")
    admin.set_password(form.admin_password.data)
    db.session.add(admin)
    commit_or_abort(conflict="An account with this email already exists", failure="Failed to create organization")

    rq.enqueue(notify_user, admin.id, "welcome")
    return jsonify({
        "user": {"id": admin.id, "email": admin.email, "role": admin.role, "org_id": org.id},
        "organization": org.to_dict(public=True),
    }), 201


@bp.post("/login")
def login():
    form = validate_or_400(LoginForm())
    org = Organization.query.filter_by(slug=form.slug.data).first()
    if not org:
        abort(404, description="Organization not found")
    user = User.query.filter_by(org_id=org.id, email=form.email.data).first()
    if not user or not user.check_password(form.password.data):
        abort(401, description="Invalid credentials")
    login_user(user)
    return jsonify({"user": user.to_dict(), "organization": org.to_dict(public=True)})


@bp.post("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"success": True})


@bp.get("/me")
@login_required
def me():
    data = current_user.to_dict()
    data["org_id"] = current_user.org_id
    return jsonify(data)


@bp.post("/signup")
@hr_required
def user_signup():
    """HR creates a user of any role in their organization."""
    form = validate_or_400(UserSignupForm())
    user = User(org_id=current_user.org_id, email=form.email.data, role=form.role.data,
                first_name=form.first_name.data, last_name=form.last_name.data)
    user.set_password(form.password.data)
    db.session.add(user)
    commit_or_abort(conflict="An account with this email already exists in the organization",
                    failure="Failed to create user")
    rq.enqueue(notify_user, user.id, "account")
    return jsonify({"id": user.id, "email": user.email, "role": user.role}), 201
