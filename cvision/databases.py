import logging
import math

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from cvision.extensions import db
from cvision.models import Job, Application, User, APPLICATION_STATUSES
from cvision.models.job import DEFAULT_SHORTLIST_SIZE
from cvision.services.errors import Conflict, Forbidden, InvalidPayload, NotFound, Unauthenticated
from cvision.services.analysis_ingestor import split_skills
from cvision.services.ranking import as_percentage

logger = logging.getLogger(__name__)

JOB_FIELDS = (
    "title",
    "company",
    "location",
    "description",
    "requirements",
    "salary",
    "job_type",
    "experience_level",
)


# ==================== JOBS ====================

def get_active_jobs():
    """All open jobs, newest first."""
    jobs = Job.query.filter_by(is_active=True).order_by(Job.created_at.desc()).all()
    return [job_to_dict(j) for j in jobs]


def get_job_by_id(job_id):
    """Returns the Job object (not a dict) or raises NotFound."""
    job = db.session.get(Job, job_id) if job_id else None
    if job is None:
        raise NotFound("Job not found")
    return job


def get_jobs_for_recruiter(recruiter_id):
    """Recruiter's own jobs with the number of applications each."""
    counts = (
        db.session.query(Application.job_id, func.count(Application.id).label("application_count"))
        .group_by(Application.job_id)
        .subquery()
    )
    rows = (
        db.session.query(Job, counts.c.application_count)
        .outerjoin(counts, Job.id == counts.c.job_id)
        .filter(Job.recruiter_id == recruiter_id)
        .order_by(Job.created_at.desc())
        .all()
    )

    result = []
    for job, count in rows:
        data = job_to_dict(job)
        data["application_count"] = int(count or 0)
        result.append(data)
    return result


def _shortlist_size(value):
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidPayload("shortlist_size must be a positive integer")
    return value


def create_job(recruiter_id, data):
    if not data.get("title"):
        raise InvalidPayload("title is required")

    job = Job(
        recruiter_id=recruiter_id,
        is_remote=bool(data.get("is_remote", False)),
        is_active=bool(data.get("is_active", True)),
        shortlist_size=_shortlist_size(data.get("shortlist_size", DEFAULT_SHORTLIST_SIZE)),
        **{field: data.get(field) for field in JOB_FIELDS},
    )

    try:
        db.session.add(job)
        db.session.commit()
    except Exception:
        db.session.rollback()  # rollback in case commit failed
        raise

    logger.info("Recruiter %s created job %s", recruiter_id, job.id)
    return job


def update_job(job_id, requester_id, data):
    job = get_job_by_id(job_id)
    if not job.is_owned_by(requester_id):
        raise Forbidden("You are not authorized to edit this job")

    if "title" in data and not data["title"]:
        raise InvalidPayload("title cannot be empty")
    if "shortlist_size" in data:
        shortlist_size = _shortlist_size(data["shortlist_size"])

    for field in JOB_FIELDS:
        if field in data:
            setattr(job, field, data[field])
    if "shortlist_size" in data:
        job.shortlist_size = shortlist_size
    if "is_active" in data:
        job.is_active = bool(data["is_active"])
    if "is_remote" in data:
        job.is_remote = bool(data["is_remote"])

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return job


# ==================== APPLICATIONS ====================

def submit_application(applicant_id, data):
    """
    Create a pending application for an active job.
    One application per (job, applicant).
    """
    job_id = data.get("job_id")
    phone_number = data.get("phone_number")
    resume_url = data.get("resume_url")
    if not job_id or not phone_number or not resume_url:
        raise InvalidPayload("Missing required fields")

    job = Job.query.filter_by(id=job_id, is_active=True).first()
    if not job:
        raise NotFound("Job not found or inactive")

    existing = Application.query.filter_by(job_id=job_id, applicant_id=applicant_id).first()
    if existing:
        raise Conflict("You have already applied to this job")

    application = Application(
        job_id=job_id,
        applicant_id=applicant_id,
        resume_url=resume_url,
        phone_number=phone_number,
        cover_letter=data.get("cover_letter"),
        linkedin_profile=data.get("linkedin_profile"),
        portfolio_website=data.get("portfolio_website"),
        status="pending",
    )

    try:
        db.session.add(application)
        db.session.commit()
    except IntegrityError:
        # lost a race against a concurrent submission for the same pair
        db.session.rollback()
        raise Conflict("You have already applied to this job")
    except Exception:
        db.session.rollback()
        raise

    logger.info("User %s applied to job %s (application %s)", applicant_id, job_id, application.id)
    return application


def get_applications_for_applicant(applicant_id, page=1, limit=10, status=None):
    if page < 1 or limit < 1:
        raise InvalidPayload("page and limit must be positive")
    if status and status not in APPLICATION_STATUSES:
        raise InvalidPayload(f"Unknown status filter '{status}'")

    query = Application.query.filter_by(applicant_id=applicant_id)
    if status:
        query = query.filter_by(status=status)

    total_count = query.count()
    applications = (
        query.order_by(Application.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    total_pages = math.ceil(total_count / limit)

    return {
        "applications": [application_to_dict(a, include_job=True) for a in applications],
        "pagination": {
            "page": page,
            "limit": limit,
            "total_count": total_count,
            "total_pages": total_pages,
            "has_next_page": page < total_pages,
            "has_prev_page": page > 1,
        },
    }


def get_application_for_viewer(application_id, viewer_id):
    """The applicant and the job's recruiter may read an application; nobody else."""
    if not viewer_id:
        raise Unauthenticated()

    application = db.session.get(Application, application_id) if application_id else None
    if application is None:
        raise NotFound("Application not found")

    if application.applicant_id != viewer_id and not application.job.is_owned_by(viewer_id):
        raise Forbidden("You are not authorized to view this application")
    return application


def update_application_status(application_id, requester_id, status):
    if status not in APPLICATION_STATUSES:
        raise InvalidPayload(f"status must be one of: {', '.join(APPLICATION_STATUSES)}")

    application = db.session.get(Application, application_id) if application_id else None
    if application is None:
        raise NotFound("Application not found")
    if not application.job.is_owned_by(requester_id):
        raise Forbidden("You are not authorized to update this application")

    application.status = status
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info("Application %s moved to %s by %s", application.id, status, requester_id)
    return application


# ==================== HELPER FUNCTIONS ====================

def _iso(value):
    return value.isoformat() if value else None


def job_summary(job: Job):
    return {
        "id": job.id,
        "title": job.title,
        "company": job.company,
        "shortlist_size": job.shortlist_size,
    }


def job_to_dict(job: Job):
    return {
        "id": job.id,
        "recruiter_id": job.recruiter_id,
        "title": job.title,
        "company": job.company,
        "location": job.location,
        "description": job.description,
        "requirements": job.requirements,
        "salary": job.salary,
        "job_type": job.job_type,
        "experience_level": job.experience_level,
        "is_remote": job.is_remote,
        "shortlist_size": job.shortlist_size,
        "is_active": job.is_active,
        "created_at": _iso(job.created_at),
        "expires_at": _iso(job.expires_at),
    }


def user_to_dict(user: User):
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "image": user.image,
    }


def analysis_to_dict(analysis):
    if analysis is None:
        return None
    return {
        "similarity": analysis.similarity,
        "reason": analysis.reason,
        "years_of_experience": analysis.years_of_experience,
        "skills": split_skills(analysis.skills),
        "projects": analysis.projects,
        "analyzed_at": _iso(analysis.analyzed_at),
    }


def application_to_dict(application: Application, include_job=False):
    data = {
        "id": application.id,
        "job_id": application.job_id,
        "status": application.status,
        "created_at": _iso(application.created_at),
        "updated_at": _iso(application.updated_at),
        "resume_url": application.resume_url,
        "cover_letter": application.cover_letter,
        "phone_number": application.phone_number,
        "linkedin_profile": application.linkedin_profile,
        "portfolio_website": application.portfolio_website,
        "applicant": user_to_dict(application.applicant) if application.applicant else None,
        "match_score": application.match_score,
        "match_percentage": as_percentage(application.match_score),
        "cv_analysis": analysis_to_dict(application.cv_analysis),
    }
    if include_job:
        data["job"] = job_to_dict(application.job)
    return data
