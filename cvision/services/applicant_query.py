# cvision/services/applicant_query.py
"""
Recruiter-facing applicant listing for a single job.

``query_applicants`` checks who is asking, scopes the applications to the
job and returns them in one of two orders:

* default view: newest first, optionally narrowed to one status;
* shortlist view: best match first, cut to the job's shortlist size.

In the shortlist view the cut happens before the search and score-band
filters run, so the shortlist is always the same set of top candidates
and searching only narrows what is shown inside it.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import joinedload

from cvision.extensions import db
from cvision.models import Application, Job, APPLICATION_STATUSES
from cvision.services import ranking
from cvision.services.errors import Forbidden, InvalidPayload, NotFound, Unauthenticated
from cvision.services.shortlist import select_shortlist

logger = logging.getLogger(__name__)


@dataclass
class ApplicantFilters:
    status: str = "all"
    search: Optional[str] = None
    shortlisted_only: bool = False
    score_band: str = "all"

    @classmethod
    def from_args(cls, args):
        """Build filters from request query parameters (status, search, shortlisted, score)."""
        shortlisted = (args.get("shortlisted") or "false").strip().lower()
        if shortlisted not in ("true", "false", "1", "0"):
            raise InvalidPayload("shortlisted must be 'true' or 'false'")

        return cls(
            status=(args.get("status") or "all").strip().lower(),
            search=args.get("search"),
            shortlisted_only=shortlisted in ("true", "1"),
            score_band=(args.get("score") or "all").strip().lower(),
        )

    def validate(self):
        if self.status != "all" and self.status not in APPLICATION_STATUSES:
            raise InvalidPayload(f"Unknown status filter '{self.status}'")
        if self.score_band not in ranking.SCORE_BANDS:
            raise InvalidPayload(f"Unknown score filter '{self.score_band}'")


@dataclass
class ApplicantListing:
    job: Job
    applications: List[Application]


def load_owned_job(job_id, requester_id):
    """Resolve a job and make sure ``requester_id`` is its recruiter."""
    if not requester_id:
        raise Unauthenticated()

    job = db.session.get(Job, job_id) if job_id else None
    if job is None:
        raise NotFound("Job not found")

    if not job.is_owned_by(requester_id):
        logger.warning("User %s denied access to applicants of job %s", requester_id, job_id)
        raise Forbidden("You are not authorized to view applicants for this job")

    return job


def _load_job_applications(job_id):
    """Oldest first; equal timestamps are ordered by application id."""
    return (
        Application.query
        .options(joinedload(Application.applicant), joinedload(Application.cv_analysis))
        .filter(Application.job_id == job_id)
        .order_by(Application.created_at.asc(), Application.id.asc())
        .all()
    )


def query_applicants(job_id, requester_id, filters=None):
    filters = filters or ApplicantFilters()

    # who is asking is settled before the filters are looked at
    job = load_owned_job(job_id, requester_id)
    filters.validate()

    applications = _load_job_applications(job.id)

    if filters.shortlisted_only:
        # status filter deliberately ignored here
        ranked = ranking.rank_by_score(applications)
        result = select_shortlist(job, ranked)
        result = ranking.filter_by_score_band(result, filters.score_band)
    else:
        if filters.status != "all":
            applications = [app for app in applications if app.status == filters.status]
        result = ranking.rank_by_recency(applications)
        result = ranking.filter_by_score_band(result, filters.score_band)

    result = ranking.filter_by_search(result, filters.search)

    logger.info(
        "Listed %d applicants for job %s (shortlisted=%s, status=%s)",
        len(result), job.id, filters.shortlisted_only, filters.status,
    )
    return ApplicantListing(job=job, applications=result)
