from ..extensions import db
from ..models.appraisal import Appraisal
from ..models.assessor_assignment import AssessorAssignment
from . import in_app_context
from flask import current_app


def _run_fan_out(self_appraisal_id: int):
    """Open a PENDING ASSESSOR appraisal for each assessor assigned to the
    employee that does not already hold one."""
    a = db.session.get(Appraisal, self_appraisal_id)
    if not a or a.type != 'SELF':
        return []
    assigned = [
        row.assessor_id
        for row in AssessorAssignment.query.filter_by(org_id=a.org_id, employee_id=a.employee_id).all()
    ]
    existing = {
        row.assessor_id
        for row in Appraisal.query.filter_by(org_id=a.org_id, type='ASSESSOR', employee_id=a.employee_id).all()
    }
    created = []
    for assessor_id in assigned:
        if assessor_id in existing:
            continue
        row = Appraisal(org_id=a.org_id, type='ASSESSOR', status='PENDING',
                        employee_id=a.employee_id, assessor_id=assessor_id)
        db.session.add(row)
        created.append(row)
        existing.add(assessor_id)
    db.session.commit()
    current_app.logger.info('Opened %d assessor appraisals for employee %s', len(created), a.employee_id)
    return [row.id for row in created]


def fan_out_assessor_appraisals(self_appraisal_id: int):
    """Entrypoint that ensures execution inside a Flask app context for workers."""
    return in_app_context(_run_fan_out, self_appraisal_id)
