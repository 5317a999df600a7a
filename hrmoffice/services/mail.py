from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail
from flask import current_app


def send_mail(to_email, subject, html):
    """Send through SendGrid; without an API key the message is only logged."""
    api_key = current_app.config.get('SENDGRID_API_KEY')
    if not api_key:
        current_app.logger.info('Simulated email to=%s subject=%s', to_email, subject)
        return None, None
    sg = SendGridAPIClient(api_key=api_key)
    message = Mail(from_email=(current_app.config['MAIL_FROM'], current_app.config['MAIL_FROM_NAME']),
                   to_emails=to_email,
                   subject=subject,
                   html_content=html)
    resp = sg.send(message)
    return resp.status_code, getattr(resp, 'headers', None)


def build_welcome_email(org_name):
    subject = f"Welcome to {org_name}!"
    html = (
        '<div style="font-family: Arial, sans-serif;">'
        f'<h2>Welcome to {org_name}</h2>'
        '<p>Your organization has been created successfully in HRM Office.</p>'
        '<p>You can now sign in and start setting things up.</p>'
        '</div>'
    )
    return subject, html


def build_account_email(org_name, login_url):
    subject = f"{org_name}: Your HRM Office account"
    html = (
        '<div style="font-family: Arial, sans-serif;">'
        f'<h2>An account was created for you at {org_name}</h2>'
        '<p>Sign in to complete your profile and start your self assessment.</p>'
        f'<p><a href="{login_url}">Sign in</a></p>'
        '</div>'
    )
    return subject, html
