from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from .extensions import db, migrate, login_manager, rq

BLUEPRINTS = (
    ("auth", "/api/auth"),
    ("organizations", "/api/organizations"),
    ("users", "/api/users"),
    ("employees", "/api/employees"),
    ("departments", "/api/departments"),
    ("jobs", "/api/jobs"),
    ("competencies", "/api/competencies"),
    ("assignments", "/api/assignments"),
    ("job_assignments", "/api/job-assignments"),
    ("assessments", "/api/assessments"),
    ("appraisals", "/api/appraisals"),
    ("analytics", "/api/analytics"),
    ("uploads", "/api/uploads"),
)


def create_app(config_object='config.Config'):
    """App factory. ``config_object`` is an import path or a config class."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    rq.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        try:
            return db.session.get(User, int(user_id))
        except (TypeError, ValueError):
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Unauthorized"}), 401

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return handle_http_error(e)
        db.session.rollback()
        app.logger.exception('Unhandled error')
        return jsonify({"error": "Internal server error"}), 500

    import importlib
    for name, prefix in BLUEPRINTS:
        module = importlib.import_module(f".blueprints.{name}", __name__)
        app.register_blueprint(module.bp, url_prefix=prefix)

    @app.get('/health')
    def health():
        return jsonify({"status": "ok", "service": "hrmoffice"})

    @app.get('/')
    def index():
        return jsonify({"status": "ok", "message": "HRM Office API", "base": "/api"})

    return app
