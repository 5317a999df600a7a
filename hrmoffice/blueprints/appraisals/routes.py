from flask import jsonify, request, abort
from flask_login import login_required, current_user
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from . import bp
from .forms import AssessorAppraisalForm, StatusForm, ResponseForm
from ...extensions import db, rq
from ...jobs.appraisals import fan_out_assessor_appraisals
from ...models.appraisal import Appraisal, AppraisalQuestion, AppraisalResponse
from ...models.assessor_assignment import AssessorAssignment
from ...models.user import User
from ...services.appraisals import appraisal_scores, default_question_rows
from ...services.lifecycle import TransitionError, apply_status, is_closed
from ...services.profile_gate import utcnow
from ...services.ratings import is_valid_rating
from ...utils.api import org_row_or_404, validate_or_400, commit_or_abort
from ...utils.decorators import role_required, staff_required


def _now():
    return utcnow().replace(tzinfo=None)


def _assigned_employee_ids(assessor_id):
    rows = AssessorAssignment.query.filter_by(org_id=current_user.org_id, assessor_id=assessor_id).all()
    return [row.employee_id for row in rows]


def _ensure_read(appraisal):
    """Employees read their own appraisals; assessors read the ones they hold
    and those of employees assigned to them."""
    if current_user.role == "EMPLOYEE" and appraisal.employee_id != current_user.id:
        abort(403, description="Forbidden")
    if current_user.role == "ASSESSOR" and appraisal.assessor_id != current_user.id:
        if appraisal.employee_id not in _assigned_employee_ids(current_user.id):
            abort(403, description="Forbidden")


def _ensure_write(appraisal):
    if current_user.role == "EMPLOYEE" and appraisal.employee_id != current_user.id:
        abort(403, description="Forbidden")
    if current_user.role == "ASSESSOR" and appraisal.assessor_id != current_user.id:
        abort(403, description="Forbidden")


def _with_scores(appraisal):
    data = appraisal.to_dict()
    data.update(appraisal_scores(appraisal.responses))
    return data


def ensure_default_questions(org_id):
    """Seed the default questionnaire the first time an organization asks for it."""
    if AppraisalQuestion.query.filter_by(org_id=org_id).count():
        return
    for row in default_question_rows():
        db.session.add(AppraisalQuestion(org_id=org_id, **row))
    try:
        db.session.commit()
    except IntegrityError:
        # seeded by a concurrent request
        db.session.rollback()


@bp.get("")
@login_required
def list_appraisals():
    query = Appraisal.query.filter_by(org_id=current_user.org_id)
    if current_user.role == "EMPLOYEE":
        query = query.filter_by(employee_id=current_user.id)
    elif current_user.role == "ASSESSOR":
        query = query.filter(or_(
            Appraisal.assessor_id == current_user.id,
            Appraisal.employee_id.in_(_assigned_employee_ids(current_user.id)),
        ))
    kind = request.args.get("type")
    if kind:
        query = query.filter_by(type=kind.upper())
    rows = query.order_by(Appraisal.created_at.desc(), Appraisal.id.desc()).all()
    return jsonify([_with_scores(a) for a in rows])


@bp.get("/questions")
@login_required
def list_questions():
    ensure_default_questions(current_user.org_id)
    rows = (AppraisalQuestion.query.filter_by(org_id=current_user.org_id)
            .order_by(AppraisalQuestion.position.asc()).all())
    return jsonify([q.to_dict() for q in rows])


@bp.get("/<int:appraisal_id>")
@login_required
def get_appraisal(appraisal_id):
    a = org_row_or_404(Appraisal, appraisal_id, "Appraisal not found")
    _ensure_read(a)
    return jsonify(_with_scores(a))


@bp.post("/self")
@role_required("EMPLOYEE")
def create_self_appraisal():
    a = Appraisal(org_id=current_user.org_id, type="SELF", status="PENDING", employee_id=current_user.id)
    db.session.add(a)
    commit_or_abort(failure="Failed to create appraisal")
    return jsonify(a.to_dict()), 201


@bp.post("/assessor")
@staff_required
def create_assessor_appraisal():
    form = validate_or_400(AssessorAppraisalForm())
    employee = User.query.filter_by(id=form.employee_id.data, org_id=current_user.org_id).first()
    if employee is None or employee.role != "EMPLOYEE":
        abort(400, description="Invalid employee")
    a = Appraisal(
        org_id=current_user.org_id,
        type="ASSESSOR",
        status="PENDING",
        employee_id=employee.id,
        assessor_id=current_user.id,
    )
    db.session.add(a)
    commit_or_abort(failure="Failed to create appraisal")
    return jsonify(a.to_dict()), 201


@bp.put("/<int:appraisal_id>/status")
@login_required
def update_status(appraisal_id):
    a = org_row_or_404(Appraisal, appraisal_id, "Appraisal not found")
    _ensure_write(a)
    form = validate_or_400(StatusForm())
    try:
        completing = apply_status(a, form.status.data, _now())
    except TransitionError as e:
        abort(409, description=str(e))
    commit_or_abort(failure="Failed to update appraisal")

    if completing and a.type == "SELF":
        rq.enqueue(fan_out_assessor_appraisals, a.id)
    return jsonify(a.to_dict())


@bp.get("/<int:appraisal_id>/responses")
@login_required
def list_responses(appraisal_id):
    a = org_row_or_404(Appraisal, appraisal_id, "Appraisal not found")
    _ensure_read(a)
    return jsonify([r.to_dict() for r in a.responses])


@bp.post("/<int:appraisal_id>/responses")
@login_required
def upsert_response(appraisal_id):
    """Save one answer. The appraised employee fills the employee half, the
    assessor holding the appraisal fills the assessor half."""
    a = org_row_or_404(Appraisal, appraisal_id, "Appraisal not found")
    if current_user.id == a.employee_id:
        side = "employee"
    elif current_user.id == a.assessor_id:
        side = "assessor"
    else:
        abort(403, description="Forbidden")
    if is_closed(a):
        abort(409, description="Appraisal is closed")
    form = validate_or_400(ResponseForm())
    payload = request.get_json(silent=True) or {}
    value = payload.get("rating")
    if not is_valid_rating(value):
        abort(400, description="rating: must be an integer between 0 and 5")
    question = AppraisalQuestion.query.filter_by(id=form.question_id.data, org_id=current_user.org_id).first()
    if question is None:
        abort(400, description="Invalid question")

    row = AppraisalResponse.query.filter_by(appraisal_id=a.id, question_id=question.id).first()
    created = row is None
    if created:
        row = AppraisalResponse(org_id=current_user.org_id, appraisal_id=a.id, question_id=question.id)
        db.session.add(row)
    setattr(row, f"{side}_rating", value)
    if "comment" in payload:
        setattr(row, f"{side}_comment", form.comment.data)
    commit_or_abort(conflict="Response already exists for question", failure="Failed to save response")
    return jsonify(row.to_dict()), 201 if created else 200
