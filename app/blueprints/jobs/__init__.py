"""
Jobs Blueprint
Public job listing, impressions, likes, comments and fit scores
"""
from flask import Blueprint

jobs_bp = Blueprint('jobs', __name__, url_prefix='/jobs')

from app.blueprints.jobs import routes
