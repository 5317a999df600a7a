from flask import Blueprint

bp = Blueprint("appraisals", __name__)

from . import routes  # noqa: E402,F401
