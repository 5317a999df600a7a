from flask import jsonify, abort
from flask_login import login_required, current_user
from . import bp
from ...models.assessment import Assessment
from ...models.job import Job
from ...models.user import User
from ...services.ratings import UNRATED
from ...utils.api import org_row_or_404


@bp.get("/gap/<int:employee_id>/<int:job_id>")
@login_required
def competency_gap(employee_id, job_id):
    """Required vs. current level for every competency a job asks for.

    The current level comes from the employee's most recent assessment;
    competencies it does not rate count as 0.
    """
    if current_user.role == "EMPLOYEE" and current_user.id != employee_id:
        abort(403, description="Forbidden")
    org_row_or_404(User, employee_id, "Employee not found")
    job = org_row_or_404(Job, job_id, "Job not found")

    latest = (
        Assessment.query.filter_by(org_id=current_user.org_id, employee_id=employee_id)
        .order_by(Assessment.created_at.desc(), Assessment.id.desc())
        .first()
    )
    current = {r.competency_id: r.rating for r in latest.ratings} if latest else {}

    rows = []
    for req in job.requirements:
        level = current.get(req.competency_id, UNRATED)
        rows.append({
            "competency_id": req.competency_id,
            "competency_name": req.competency.name if req.competency else None,
            "required_level": req.required_level,
            "current_level": level,
            "gap": req.required_level - level,
        })
    return jsonify({
        "employee_id": employee_id,
        "job_id": job.id,
        "assessment_id": latest.id if latest else None,
        "competencies": rows,
    })
