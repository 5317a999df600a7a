from flask import jsonify, request, abort, current_app
from flask_login import login_required, current_user
from werkzeug.exceptions import Locked
from . import bp
from .forms import ProfileForm, RoleForm
from ...extensions import db
from ...models.user import User
from ...services import profile_gate
from ...utils.api import org_row_or_404, validate_or_400, commit_or_abort
from ...utils.decorators import hr_required, staff_required

PROFILE_FIELDS = ("first_name", "last_name", "phone", "profile_picture_url")


def profile_payload(user, now=None):
    data = user.to_dict()
    data.update(profile_gate.describe(user.onboarding_completed, user.is_locked_until, now or profile_gate.utcnow()))
    return data


def ensure_self_edit_allowed(user, now):
    """Employees may only edit themselves, and only while the gate is open."""
    if current_user.id != user.id:
        abort(403, description="Forbidden")
    state = profile_gate.evaluate(user.onboarding_completed, user.is_locked_until, now)
    if not state.editable:
        raise Locked(description=f"Profile locked. Try again in {profile_gate.format_remaining(state.locked_until, now)}.")


@bp.get("")
@staff_required
def list_users():
    users = User.query.filter_by(org_id=current_user.org_id).order_by(User.first_name.asc()).all()
    return jsonify([u.to_summary() for u in users])


@bp.get("/<int:user_id>")
@login_required
def get_user(user_id):
    user = org_row_or_404(User, user_id, "User not found")
    if current_user.role == "EMPLOYEE" and current_user.id != user.id:
        abort(403, description="Forbidden")
    return jsonify(profile_payload(user))


@bp.put("/<int:user_id>")
@login_required
def update_user(user_id):
    user = org_row_or_404(User, user_id, "User not found")
    if current_user.role not in ("HR", "EMPLOYEE"):
        abort(403, description="Forbidden")

    now = profile_gate.utcnow()
    if current_user.role == "EMPLOYEE":
        ensure_self_edit_allowed(user, now)

    form = validate_or_400(ProfileForm())
    payload = request.get_json(silent=True) or {}
    for name in PROFILE_FIELDS:
        if name in payload:
            setattr(user, name, getattr(form, name).data or None)

    if current_user.role == "EMPLOYEE":
        profile_gate.apply_self_edit(user, now, current_app.config.get("PROFILE_LOCK_HOURS", profile_gate.DEFAULT_LOCK_HOURS))
    commit_or_abort(failure="Failed to update user")
    return jsonify(profile_payload(user, now))


@bp.delete("/<int:user_id>")
@hr_required
def delete_user(user_id):
    user = org_row_or_404(User, user_id, "User not found")
    if user.id == current_user.id:
        abort(400, description="You cannot delete your own account")
    db.session.delete(user)
    commit_or_abort(failure="Failed to delete user")
    return jsonify({"success": True})


@bp.put("/<int:user_id>/role")
@hr_required
def update_role(user_id):
    user = org_row_or_404(User, user_id, "User not found")
    form = validate_or_400(RoleForm())
    user.role = form.role.data
    commit_or_abort(failure="Failed to update role")
    return jsonify({"id": user.id, "role": user.role})
