from flask import jsonify, abort
from flask_login import login_required, current_user
from . import bp
from .forms import JobForm, RequirementForm, RequirementUpdateForm
from ...extensions import db
from ...models.job import Job, JobCompetency
from ...models.department import Department
from ...models.competency import Competency
from ...models.employee_job_assignment import EmployeeJobAssignment
from ...utils.api import org_row_or_404, validate_or_400, commit_or_abort
from ...utils.decorators import staff_required


def _department_or_400(department_id):
    if department_id is None:
        return None
    dep = Department.query.filter_by(id=department_id, org_id=current_user.org_id).first()
    if dep is None:
        abort(400, description="Invalid department")
    return dep.id


def _requirement_or_404(job, req_id):
    req = JobCompetency.query.filter_by(id=req_id, job_id=job.id, org_id=current_user.org_id).first()
    if req is None:
        abort(404, description="Requirement not found")
    return req


@bp.get("")
@login_required
def list_jobs():
    rows = Job.query.filter_by(org_id=current_user.org_id).order_by(Job.title.asc()).all()
    return jsonify([j.to_dict(include_requirements=True) for j in rows])


@bp.post("")
@staff_required
def create_job():
    form = validate_or_400(JobForm())
    job = Job(org_id=current_user.org_id, title=form.title.data, description=form.description.data or None,
              department_id=_department_or_400(form.department_id.data))
    db.session.add(job)
    commit_or_abort(failure="Failed to create job")
    return jsonify(job.to_dict(include_requirements=True)), 201


@bp.put("/<int:job_id>")
@staff_required
def update_job(job_id):
    job = org_row_or_404(Job, job_id, "Job not found")
    form = validate_or_400(JobForm())
    job.title = form.title.data
    job.description = form.description.data or None
    job.department_id = _department_or_400(form.department_id.data)
    commit_or_abort(failure="Failed to update job")
    return jsonify(job.to_dict(include_requirements=True))


@bp.delete("/<int:job_id>")
@staff_required
def delete_job(job_id):
    job = org_row_or_404(Job, job_id, "Job not found")
    # assignments first so FK constraints never block the delete; requirements cascade
    EmployeeJobAssignment.query.filter_by(org_id=current_user.org_id, job_id=job.id).delete()
    db.session.delete(job)
    commit_or_abort(failure="Failed to delete job")
    return jsonify({"success": True})


@bp.post("/<int:job_id>/requirements")
@staff_required
def add_requirement(job_id):
    job = org_row_or_404(Job, job_id, "Job not found")
    form = validate_or_400(RequirementForm())
    org_row_or_404(Competency, form.competency_id.data, "Competency not found")
    req = JobCompetency(org_id=current_user.org_id, job_id=job.id,
                        competency_id=form.competency_id.data, required_level=form.required_level.data)
    db.session.add(req)
    commit_or_abort(failure="Failed to add requirement")
    return jsonify(req.to_dict()), 201


@bp.put("/<int:job_id>/requirements/<int:req_id>")
@staff_required
def update_requirement(job_id, req_id):
    job = org_row_or_404(Job, job_id, "Job not found")
    req = _requirement_or_404(job, req_id)
    form = validate_or_400(RequirementUpdateForm())
    if form.required_level.data is not None:
        req.required_level = form.required_level.data
    if form.competency_id.data is not None:
        org_row_or_404(Competency, form.competency_id.data, "Competency not found")
        req.competency_id = form.competency_id.data
    commit_or_abort(failure="Failed to update requirement")
    return jsonify(req.to_dict())


@bp.delete("/<int:job_id>/requirements/<int:req_id>")
@staff_required
def delete_requirement(job_id, req_id):
    job = org_row_or_404(Job, job_id, "Job not found")
    req = _requirement_or_404(job, req_id)
    db.session.delete(req)
    commit_or_abort(failure="Failed to delete requirement")
    return jsonify({"success": True})
