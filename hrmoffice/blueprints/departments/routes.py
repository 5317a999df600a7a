from flask import jsonify
from flask_login import login_required, current_user
from . import bp
from .forms import DepartmentForm
from ...extensions import db
from ...models.department import Department
from ...utils.api import org_row_or_404, validate_or_400, commit_or_abort
from ...utils.decorators import hr_required


@bp.get("")
@login_required
def list_departments():
    rows = Department.query.filter_by(org_id=current_user.org_id).order_by(Department.name.asc()).all()
    return jsonify([d.to_dict() for d in rows])


@bp.post("")
@hr_required
def create_department():
    form = validate_or_400(DepartmentForm())
    dep = Department(org_id=current_user.org_id, name=form.name.data)
    db.session.add(dep)
    commit_or_abort(failure="Failed to create department")
    return jsonify(dep.to_dict()), 201


@bp.put("/<int:department_id>")
@hr_required
def update_department(department_id):
    dep = org_row_or_404(Department, department_id, "Department not found")
    form = validate_or_400(DepartmentForm())
    dep.name = form.name.data
    commit_or_abort(failure="Failed to update department")
    return jsonify(dep.to_dict())


@bp.delete("/<int:department_id>")
@hr_required
def delete_department(department_id):
    dep = org_row_or_404(Department, department_id, "Department not found")
    db.session.delete(dep)
    commit_or_abort(failure="Failed to delete department")
    return jsonify({"success": True})
