from flask import jsonify, request, abort
from flask_login import login_required, current_user
from . import bp
from .forms import JobAssignmentForm, JobAssignmentUpdateForm
from ...extensions import db
from ...models.employee_job_assignment import EmployeeJobAssignment
from ...models.job import Job
from ...models.user import User
from ...utils.api import org_row_or_404, validate_or_400, commit_or_abort, parse_datetime
from ...utils.decorators import hr_required

DUPLICATE = "Assignment already exists for employee and job"


def _employee_or_400(employee_id):
    if not User.query.filter_by(id=employee_id, org_id=current_user.org_id).first():
        abort(400, description="Invalid employee")
    return employee_id


def _job_or_400(job_id):
    if not Job.query.filter_by(id=job_id, org_id=current_user.org_id).first():
        abort(400, description="Invalid job")
    return job_id


@bp.get("")
@login_required
def list_job_assignments():
    query = EmployeeJobAssignment.query.filter_by(org_id=current_user.org_id)
    if current_user.role == "EMPLOYEE":
        query = query.filter_by(employee_id=current_user.id)
    employee_id = request.args.get("employee_id", type=int)
    job_id = request.args.get("job_id", type=int)
    if employee_id:
        query = query.filter_by(employee_id=employee_id)
    if job_id:
        query = query.filter_by(job_id=job_id)
    rows = query.order_by(EmployeeJobAssignment.created_at.desc(), EmployeeJobAssignment.id.desc()).all()
    return jsonify([a.to_dict() for a in rows])


@bp.post("")
@hr_required
def create_job_assignment():
    form = validate_or_400(JobAssignmentForm())
    row = EmployeeJobAssignment(
        org_id=current_user.org_id,
        employee_id=_employee_or_400(form.employee_id.data),
        job_id=_job_or_400(form.job_id.data),
        start_date=parse_datetime(form.start_date.data),
    )
    db.session.add(row)
    commit_or_abort(conflict=DUPLICATE, failure="Failed to create job assignment")
    return jsonify(row.to_dict()), 201


@bp.put("/<int:assignment_id>")
@hr_required
def update_job_assignment(assignment_id):
    row = org_row_or_404(EmployeeJobAssignment, assignment_id, "Job assignment not found")
    form = validate_or_400(JobAssignmentUpdateForm())
    if form.employee_id.data is not None:
        row.employee_id = _employee_or_400(form.employee_id.data)
    if form.job_id.data is not None:
        row.job_id = _job_or_400(form.job_id.data)
    if form.start_date.data:
        row.start_date = parse_datetime(form.start_date.data)
    commit_or_abort(conflict=DUPLICATE, failure="Failed to update job assignment")
    return jsonify(row.to_dict())


@bp.delete("/<int:assignment_id>")
@hr_required
def delete_job_assignment(assignment_id):
    row = org_row_or_404(EmployeeJobAssignment, assignment_id, "Job assignment not found")
    db.session.delete(row)
    commit_or_abort(failure="Failed to delete job assignment")
    return jsonify({"success": True})
