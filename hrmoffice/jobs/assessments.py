from ..extensions import db
from ..models.assessment import Assessment
from ..models.user import User
from . import in_app_context
from flask import current_app


def _run_fan_out(self_assessment_id: int):
    """Open a PENDING ASSESSOR assessment for every assessor in the organization
    that does not already have one for this employee."""
    a = db.session.get(Assessment, self_assessment_id)
    if not a or a.type != 'SELF':
        return []
    assessors = User.query.filter_by(org_id=a.org_id, role='ASSESSOR').all()
    existing = {
        row.assessor_id
        for row in Assessment.query.filter_by(org_id=a.org_id, type='ASSESSOR', employee_id=a.employee_id).all()
    }
    created = []
    for assessor in assessors:
        if assessor.id in existing:
            continue
        row = Assessment(org_id=a.org_id, type='ASSESSOR', status='PENDING',
                         employee_id=a.employee_id, assessor_id=assessor.id)
        db.session.add(row)
        created.append(row)
    db.session.commit()
    current_app.logger.info('Opened %d assessor assessments for employee %s', len(created), a.employee_id)
    return [row.id for row in created]


def fan_out_assessor_assessments(self_assessment_id: int):
    """Entrypoint that ensures execution inside a Flask app context for workers."""
    return in_app_context(_run_fan_out, self_assessment_id)
