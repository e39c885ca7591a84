import hmac
import logging

from flask import Blueprint, current_app, request, jsonify

import cvision.databases as databases
from cvision.services.analysis_ingestor import ingest_analysis
from cvision.services.errors import Unauthenticated

logger = logging.getLogger(__name__)

analysis_bp = Blueprint("analysis_api", __name__, url_prefix="/api/analysis")


def _check_pipeline_key():
    expected = current_app.config.get("ANALYSIS_API_KEY")
    if not expected:
        return
    supplied = request.headers.get("X-Analysis-Key", "")
    if not hmac.compare_digest(supplied, expected):
        logger.warning("Rejected analysis ingest with a bad X-Analysis-Key")
        raise Unauthenticated("Invalid analysis key")


@analysis_bp.route("/applications/<application_id>", methods=["POST"])
def ingest(application_id):
    """Called by the CV analysis pipeline once a resume has been scored."""
    _check_pipeline_key()
    payload = request.get_json(silent=True)

    application = ingest_analysis(application_id, payload)
    return jsonify({
        "status": "success",
        "application_id": application.id,
        "cv_analysis": databases.analysis_to_dict(application.cv_analysis),
        "match_score": application.match_score,
    }), 200
