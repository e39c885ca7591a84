from flask import Blueprint, request, jsonify

import cvision.databases as databases
from cvision.routes.identity import current_requester_id, require_requester
from cvision.services.applicant_query import ApplicantFilters, load_owned_job, query_applicants
from cvision.services.errors import InvalidPayload

recruiter_bp = Blueprint("recruiter_api", __name__, url_prefix="/api/recruiter")


# JOB POSTING ROUTES
@recruiter_bp.route("/jobs", methods=["POST"])
def create_job():
    user_id = require_requester(role="recruiter")
    data = request.get_json(silent=True) or {}

    job = databases.create_job(user_id, data)
    return jsonify({"message": "Job created successfully", "job": databases.job_to_dict(job)}), 201


@recruiter_bp.route("/jobs", methods=["GET"])
def list_my_jobs():
    user_id = require_requester(role="recruiter")
    return jsonify({"jobs": databases.get_jobs_for_recruiter(user_id)})


@recruiter_bp.route("/jobs/<job_id>", methods=["PATCH"])
def update_job(job_id):
    user_id = require_requester()
    data = request.get_json(silent=True)
    if not data:
        raise InvalidPayload("No JSON data provided")

    job = databases.update_job(job_id, user_id, data)
    return jsonify({"message": "Job updated successfully", "job": databases.job_to_dict(job)})


# APPLICANT LISTING ROUTES
@recruiter_bp.route("/jobs/<job_id>/applicants", methods=["GET"])
def get_applicants(job_id):
    """
    Applicants of one job, for its recruiter only.
    Query params: status, search, shortlisted=true|false, score=all|high|medium|low
    """
    requester_id = current_requester_id()
    load_owned_job(job_id, requester_id)
    filters = ApplicantFilters.from_args(request.args)
    listing = query_applicants(job_id, requester_id, filters)

    return jsonify({
        "job": databases.job_summary(listing.job),
        "applicants": [databases.application_to_dict(a) for a in listing.applications],
    })


@recruiter_bp.route("/jobs/<job_id>/shortlist", methods=["GET"])
def get_shortlist(job_id):
    filters = ApplicantFilters(
        search=request.args.get("search"),
        shortlisted_only=True,
        score_band=(request.args.get("score") or "all").strip().lower(),
    )
    listing = query_applicants(job_id, current_requester_id(), filters)

    return jsonify({
        "job": databases.job_summary(listing.job),
        "shortlist_size": listing.job.shortlist_size,
        "filled": len(listing.applications),
        "applicants": [databases.application_to_dict(a) for a in listing.applications],
    })


@recruiter_bp.route("/applications/<application_id>/status", methods=["PATCH"])
def update_application_status(application_id):
    user_id = require_requester()
    data = request.get_json(silent=True) or {}
    status = (data.get("status") or "").strip().lower()

    application = databases.update_application_status(application_id, user_id, status)
    return jsonify({"application": databases.application_to_dict(application)})
