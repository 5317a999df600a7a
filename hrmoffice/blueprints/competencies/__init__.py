from flask import Blueprint

bp = Blueprint("competencies", __name__)

from . import routes  # noqa: E402,F401
