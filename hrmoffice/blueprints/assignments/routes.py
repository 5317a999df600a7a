from flask import jsonify, request, abort
from flask_login import login_required, current_user
from . import bp
from .forms import AssignmentForm, AssignmentUpdateForm
from ...extensions import db
from ...models.assessor_assignment import AssessorAssignment
from ...models.user import User
from ...utils.api import org_row_or_404, validate_or_400, commit_or_abort
from ...utils.decorators import hr_required

DUPLICATE = "Assignment already exists for assessor and employee"


def _member_with_role(user_id, role, label):
    user = User.query.filter_by(id=user_id, org_id=current_user.org_id).first()
    if user is None:
        abort(400, description=f"Invalid {label}")
    if user.role != role:
        abort(400, description=f"Selected user is not an {label}")
    return user


@bp.get("")
@login_required
def list_assignments():
    query = AssessorAssignment.query.filter_by(org_id=current_user.org_id)
    # assessors see their own employees, employees see their own assessors
    if current_user.role == "ASSESSOR":
        query = query.filter_by(assessor_id=current_user.id)
    elif current_user.role == "EMPLOYEE":
        query = query.filter_by(employee_id=current_user.id)
    employee_id = request.args.get("employee_id", type=int)
    assessor_id = request.args.get("assessor_id", type=int)
    if employee_id:
        query = query.filter_by(employee_id=employee_id)
    if assessor_id:
        query = query.filter_by(assessor_id=assessor_id)
    return jsonify([a.to_dict() for a in query.order_by(AssessorAssignment.id.asc()).all()])


@bp.post("")
@hr_required
def create_assignment():
    form = validate_or_400(AssignmentForm())
    assessor = _member_with_role(form.assessor_id.data, "ASSESSOR", "assessor")
    employee = _member_with_role(form.employee_id.data, "EMPLOYEE", "employee")
    row = AssessorAssignment(org_id=current_user.org_id, assessor_id=assessor.id, employee_id=employee.id)
    db.session.add(row)
    commit_or_abort(conflict=DUPLICATE, failure="Failed to create assignment")
    return jsonify(row.to_dict()), 201


@bp.put("/<int:assignment_id>")
@hr_required
def update_assignment(assignment_id):
    row = org_row_or_404(AssessorAssignment, assignment_id, "Assignment not found")
    form = validate_or_400(AssignmentUpdateForm())
    if form.assessor_id.data is not None:
        row.assessor_id = _member_with_role(form.assessor_id.data, "ASSESSOR", "assessor").id
    if form.employee_id.data is not None:
        row.employee_id = _member_with_role(form.employee_id.data, "EMPLOYEE", "employee").id
    commit_or_abort(conflict=DUPLICATE, failure="Failed to update assignment")
    return jsonify(row.to_dict())


@bp.delete("/<int:assignment_id>")
@hr_required
def delete_assignment(assignment_id):
    row = org_row_or_404(AssessorAssignment, assignment_id, "Assignment not found")
    db.session.delete(row)
    commit_or_abort(failure="Failed to delete assignment")
    return jsonify({"success": True})
