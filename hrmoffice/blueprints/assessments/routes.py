from flask import jsonify, request, abort
from flask_login import login_required, current_user
from . import bp
from .forms import AssessorAssessmentForm, StatusForm, RatingForm
from ...extensions import db, rq
from ...jobs.assessments import fan_out_assessor_assessments
from ...models.assessment import Assessment, AssessmentRating
from ...models.competency import Competency
from ...models.department import Department
from ...models.employee_job_assignment import EmployeeJobAssignment
from ...models.job import Job
from ...models.user import User
from ...services.lifecycle import TransitionError, apply_status, is_closed
from ...services.consensus import ConsensusLookups, build_consensus, build_consensus_views, select_consensus_pairs
from ...services.profile_gate import utcnow
from ...services.ratings import compute_overall, completion_progress, is_valid_rating
from ...utils.api import org_row_or_404, validate_or_400, commit_or_abort
from ...utils.decorators import role_required, staff_required


def _now():
    return utcnow().replace(tzinfo=None)


def _ensure_access(assessment, write=False):
    """Employees only touch their own assessments.

    Assessors read SELF assessments and the ASSESSOR ones they hold; they
    only write to the ones they hold.
    """
    if current_user.role == "EMPLOYEE" and assessment.employee_id != current_user.id:
        abort(403, description="Forbidden")
    if current_user.role == "ASSESSOR" and assessment.assessor_id != current_user.id:
        if write or assessment.type == "ASSESSOR":
            abort(403, description="Forbidden")


def _ensure_open(assessment):
    if is_closed(assessment):
        abort(409, description="Assessment is closed")


def _org_lookups():
    org_id = current_user.org_id
    return ConsensusLookups.from_rows(
        users=User.query.filter_by(org_id=org_id).all(),
        competencies=Competency.query.filter_by(org_id=org_id).all(),
        jobs=Job.query.filter_by(org_id=org_id).all(),
        departments=Department.query.filter_by(org_id=org_id).all(),
        job_assignments=EmployeeJobAssignment.query.filter_by(org_id=org_id).all(),
    )


@bp.get("")
@login_required
def list_assessments():
    query = Assessment.query.filter_by(org_id=current_user.org_id)
    if current_user.role == "EMPLOYEE":
        query = query.filter_by(employee_id=current_user.id)
    for name in ("employee_id", "assessor_id"):
        value = request.args.get(name, type=int)
        if value:
            query = query.filter(getattr(Assessment, name) == value)
    kind = request.args.get("type")
    if kind:
        query = query.filter_by(type=kind.upper())

    total = Competency.query.filter_by(org_id=current_user.org_id).count()
    out = []
    for a in query.order_by(Assessment.created_at.desc(), Assessment.id.desc()).all():
        data = a.to_dict()
        data["overall_rating"] = float(compute_overall(a.ratings))
        data["progress"] = completion_progress(a.ratings, total)
        out.append(data)
    return jsonify(out)


@bp.get("/<int:assessment_id>")
@login_required
def get_assessment(assessment_id):
    a = org_row_or_404(Assessment, assessment_id, "Assessment not found")
    _ensure_access(a)
    data = a.to_dict()
    data["overall_rating"] = float(compute_overall(a.ratings))
    return jsonify(data)


@bp.post("/self")
@role_required("EMPLOYEE")
def create_self_assessment():
    a = Assessment(org_id=current_user.org_id, type="SELF", status="PENDING", employee_id=current_user.id)
    db.session.add(a)
    commit_or_abort(failure="Failed to create assessment")
    return jsonify(a.to_dict()), 201


@bp.post("/assessor")
@staff_required
def create_assessor_assessment():
    form = validate_or_400(AssessorAssessmentForm())
    employee = User.query.filter_by(id=form.employee_id.data, org_id=current_user.org_id).first()
    if employee is None or employee.role != "EMPLOYEE":
        abort(400, description="Invalid employee")
    a = Assessment(
        org_id=current_user.org_id,
        type="ASSESSOR",
        status="PENDING",
        employee_id=employee.id,
        assessor_id=current_user.id,
    )
    db.session.add(a)
    commit_or_abort(failure="Failed to create assessment")
    return jsonify(a.to_dict()), 201


@bp.put("/<int:assessment_id>/status")
@login_required
def update_status(assessment_id):
    a = org_row_or_404(Assessment, assessment_id, "Assessment not found")
    _ensure_access(a, write=True)
    form = validate_or_400(StatusForm())
    try:
        completing = apply_status(a, form.status.data, _now())
    except TransitionError as e:
        abort(409, description=str(e))
    commit_or_abort(failure="Failed to update assessment")

    if completing and a.type == "SELF":
        rq.enqueue(fan_out_assessor_assessments, a.id)
    return jsonify(a.to_dict())


@bp.post("/<int:assessment_id>/ratings")
@login_required
def upsert_rating(assessment_id):
    a = org_row_or_404(Assessment, assessment_id, "Assessment not found")
    _ensure_access(a, write=True)
    _ensure_open(a)
    form = validate_or_400(RatingForm())
    payload = request.get_json(silent=True) or {}
    value = payload.get("rating")
    if not is_valid_rating(value):
        abort(400, description="rating: must be an integer between 0 and 5")
    competency = Competency.query.filter_by(id=form.competency_id.data, org_id=current_user.org_id).first()
    if competency is None:
        abort(400, description="Invalid competency")

    row = AssessmentRating.query.filter_by(assessment_id=a.id, competency_id=competency.id).first()
    created = row is None
    if created:
        row = AssessmentRating(org_id=current_user.org_id, assessment_id=a.id, competency_id=competency.id)
        db.session.add(row)
    row.rating = value
    if "comment" in payload:
        row.comment = form.comment.data
    commit_or_abort(conflict="Rating already exists for competency", failure="Failed to save rating")
    return jsonify(row.to_dict()), 201 if created else 200


@bp.get("/consensus")
@staff_required
def list_consensus():
    assessments = Assessment.query.filter_by(org_id=current_user.org_id).all()
    views = build_consensus_views(assessments, _org_lookups())
    return jsonify([v.to_dict() for v in views])


@bp.get("/consensus/<int:employee_id>")
@login_required
def get_consensus(employee_id):
    if current_user.role == "EMPLOYEE" and current_user.id != employee_id:
        abort(403, description="Forbidden")
    assessments = Assessment.query.filter_by(org_id=current_user.org_id, employee_id=employee_id).all()
    pair = next((p for p in select_consensus_pairs(assessments) if p[0].employee_id == employee_id), None)
    view = build_consensus(*pair, _org_lookups()) if pair else None
    if view is None:
        abort(404, description="No consensus available for employee")
    return jsonify(view.to_dict())
