from flask import Blueprint

training_bp = Blueprint("training", __name__)

from . import routes  # noqa
