import secrets
from flask import jsonify, request, abort, current_app
from flask_login import login_required, current_user
from . import bp
from .forms import EmployeeForm
from ..users.routes import ensure_self_edit_allowed
from ...extensions import db, rq
from ...models.user import User
from ...models.department import Department
from ...models.job import Job
from ...models.employee_job_assignment import EmployeeJobAssignment
from ...jobs.notify import notify_user
from ...services import profile_gate
from ...utils.api import validate_or_400, commit_or_abort
from ...utils.decorators import hr_required


def _departments_of(assignments):
    seen = {}
    for a in assignments:
        dept = a.job.department if a.job else None
        if dept is not None and dept.id not in seen:
            seen[dept.id] = dept
    return list(seen.values())


def employee_payload(user, assignments):
    departments = _departments_of(assignments)
    data = user.to_dict()
    data["department_ids"] = [d.id for d in departments]
    data["departments"] = [d.to_dict() for d in departments]
    return data


@bp.get("")
@login_required
def list_employees():
    users = (User.query.filter_by(org_id=current_user.org_id, role="EMPLOYEE")
             .order_by(User.first_name.asc()).all())
    rows = EmployeeJobAssignment.query.filter_by(org_id=current_user.org_id).all()
    by_employee = {}
    for a in rows:
        by_employee.setdefault(a.employee_id, []).append(a)
    return jsonify([employee_payload(u, by_employee.get(u.id, [])) for u in users])


@bp.post("")
@hr_required
def create_employee():
    """Create an employee with a random initial password; they are notified by mail."""
    form = validate_or_400(EmployeeForm())
    user = User(org_id=current_user.org_id, email=form.email.data, role="EMPLOYEE",
                first_name=form.first_name.data, last_name=form.last_name.data,
                phone=form.phone.data or None, profile_picture_url=form.profile_picture_url.data or None)
    user.set_password(secrets.token_urlsafe(18))
    db.session.add(user)
    commit_or_abort(conflict="An account with this email already exists in the organization",
                    failure="Failed to create employee")
    rq.enqueue(notify_user, user.id, "account")
    return jsonify(employee_payload(user, [])), 201


@bp.put("/<int:employee_id>/departments")
@login_required
def update_departments(employee_id):
    """Replace the employee's departments with one job assignment per department.

    When employees save their own departments the first save completes
    onboarding and later saves are subject to the profile lock.
    """
    payload = request.get_json(silent=True) or {}
    department_ids = payload.get("department_ids")
    if not isinstance(department_ids, list):
        abort(400, description="department_ids must be an array")

    user = User.query.filter_by(id=employee_id, org_id=current_user.org_id, role="EMPLOYEE").first()
    if user is None:
        abort(404, description="Employee not found")

    now = profile_gate.utcnow()
    if current_user.role == "EMPLOYEE":
        ensure_self_edit_allowed(user, now)
    elif current_user.role != "HR":
        abort(403, description="Forbidden")

    valid = Department.query.filter(Department.org_id == current_user.org_id,
                                    Department.id.in_(department_ids)).all() if department_ids else []
    wanted = {d.id for d in valid}

    current = EmployeeJobAssignment.query.filter_by(org_id=current_user.org_id, employee_id=user.id).all()
    have = set()
    for a in current:
        dept_id = a.job.department_id if a.job else None
        if dept_id is None:
            continue
        if dept_id in wanted:
            have.add(dept_id)
        else:
            db.session.delete(a)

    for dept_id in wanted - have:
        job = Job.query.filter_by(org_id=current_user.org_id, department_id=dept_id).first()
        if job is None:
            job = Job(org_id=current_user.org_id, department_id=dept_id, title="General",
                      description="Auto-created for department assignment")
            db.session.add(job)
            db.session.flush()
        db.session.add(EmployeeJobAssignment(org_id=current_user.org_id, employee_id=user.id, job_id=job.id))

    if current_user.role == "EMPLOYEE":
        profile_gate.apply_self_edit(user, now,
                                     current_app.config.get("PROFILE_LOCK_HOURS", profile_gate.DEFAULT_LOCK_HOURS),
                                     completes_onboarding=True)
    commit_or_abort(failure="Failed to update employee departments")

    assignments = EmployeeJobAssignment.query.filter_by(org_id=current_user.org_id, employee_id=user.id).all()
    data = employee_payload(user, assignments)
    data.update(profile_gate.describe(user.onboarding_completed, user.is_locked_until, now))
    return jsonify(data)
