from flask import has_app_context


def in_app_context(func, *args):
    """Run ``func`` inside a Flask app context.

    Inline (synchronous) execution already has one; RQ workers build the app.
    """
    if has_app_context():
        return func(*args)
    from hrmoffice import create_app
    app = create_app()
    with app.app_context():
        return func(*args)
