from ..extensions import db
from ..services.mail import send_mail, build_welcome_email, build_account_email
from ..models.notification import Notification
from ..models.organization import Organization
from ..models.user import User
from . import in_app_context
from datetime import datetime, timezone
from flask import current_app


def _run_notify(user_id: int, kind: str):
    user = db.session.get(User, user_id)
    if not user:
        return None
    org = db.session.get(Organization, user.org_id)
    org_name = org.name if org else 'HRM Office'
    if kind == 'welcome':
        subject, html = build_welcome_email(org_name)
    else:
        subject, html = build_account_email(org_name, f"{current_app.config.get('FRONTEND_URL', '')}/auth/login")

    try:
        status, headers = send_mail(user.email, subject, html)
        state = 'sent' if status else 'simulated'
    except Exception:
        current_app.logger.exception('Sending %s mail to user %s failed', kind, user_id)
        status, headers, state = None, None, 'failed'

    n = Notification(org_id=user.org_id, user_id=user.id,
                     type=kind, sent_to=user.email, subject=subject,
                     body=html, provider_message_id=str(headers or ""),
                     status=state, sent_at=datetime.now(timezone.utc).replace(tzinfo=None))
    db.session.add(n); db.session.commit()
    return n.id


def notify_user(user_id: int, kind: str = 'account'):
    """Entrypoint that ensures execution inside a Flask app context for workers."""
    return in_app_context(_run_notify, user_id, kind)
