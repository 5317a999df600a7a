from flask import Blueprint

bp = Blueprint("job_assignments", __name__)

from . import routes  # noqa: E402,F401
