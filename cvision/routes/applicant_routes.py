from flask import Blueprint, request, jsonify

import cvision.databases as databases
from cvision.routes.identity import require_requester
from cvision.services.errors import InvalidPayload

applicant_bp = Blueprint("applicant_api", __name__, url_prefix="/api")


@applicant_bp.route("/jobs", methods=["GET"])
def list_jobs():
    """Open jobs, newest first."""
    return jsonify({"jobs": databases.get_active_jobs()})


@applicant_bp.route("/jobs/<job_id>", methods=["GET"])
def get_job(job_id):
    job = databases.get_job_by_id(job_id)
    return jsonify({"job": databases.job_to_dict(job)})


@applicant_bp.route("/applications", methods=["POST"])
def apply():
    user_id = require_requester(role="applicant")
    data = request.get_json(silent=True) or {}

    application = databases.submit_application(user_id, data)
    return jsonify({"success": True, "data": databases.application_to_dict(application)}), 201


def _int_arg(name, default):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidPayload(f"{name} must be an integer")


@applicant_bp.route("/applications", methods=["GET"])
def my_applications():
    user_id = require_requester()
    result = databases.get_applications_for_applicant(
        user_id,
        page=_int_arg("page", 1),
        limit=_int_arg("limit", 10),
        status=request.args.get("status") or None,
    )
    return jsonify(result)


@applicant_bp.route("/applications/<application_id>", methods=["GET"])
def application_detail(application_id):
    user_id = require_requester()
    application = databases.get_application_for_viewer(application_id, user_id)
    return jsonify({"application": databases.application_to_dict(application, include_job=True)})
