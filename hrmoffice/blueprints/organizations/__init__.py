from flask import Blueprint

bp = Blueprint("organizations", __name__)

from . import routes  # noqa: E402,F401
