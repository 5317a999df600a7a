from datetime import datetime, timezone
from flask import abort, current_app
from flask_login import current_user
from sqlalchemy.exc import IntegrityError
from ..extensions import db


def org_row_or_404(model, row_id, description=None):
    """Fetch a row of the current user's organization; other orgs look missing."""
    row = model.query.filter_by(id=row_id, org_id=current_user.org_id).first()
    if row is None:
        abort(404, description=description or f"{model.__name__} not found")
    return row


def validate_or_400(form):
    if not form.validate():
        field, errors = next(iter(form.errors.items()))
        msg = errors[0] if isinstance(errors, (list, tuple)) and errors else str(errors)
        abort(400, description=f"{field}: {msg}")
    return form


def commit_or_abort(conflict="Already exists", failure="Database error"):
    """Commit the session; unique violations become 409, anything else 500."""
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        abort(409, description=conflict)
    except Exception:
        db.session.rollback()
        current_app.logger.exception(failure)
        abort(500, description=failure)


def parse_datetime(value):
    """Accept ISO dates/datetimes from JSON bodies; empty means None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    s = str(value).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        abort(400, description=f"Invalid date: {value}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
