# cvision/services/analysis_ingestor.py
import logging
import math
import numbers
from datetime import datetime

from cvision.extensions import db
from cvision.models import Application, CVAnalysis
from cvision.services.errors import InvalidPayload, NotFound

logger = logging.getLogger(__name__)


def split_skills(skills):
    """'Go, Rust,  Python ' -> ['Go', 'Rust', 'Python']"""
    if not skills:
        return []
    return [token.strip() for token in skills.split(",") if token.strip()]


def join_skills(tokens):
    return ", ".join(token.strip() for token in tokens if token and token.strip())


def _pick(payload, *keys):
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return None


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def normalize_payload(payload):
    """
    Validate the pipeline payload and return the column values for CVAnalysis.
    Nothing is clamped: anything out of range is rejected.
    """
    if not isinstance(payload, dict):
        raise InvalidPayload("Analysis payload must be a JSON object")

    similarity = _pick(payload, "similarity", "matchScore", "match_score")
    if similarity is None:
        raise InvalidPayload("similarity is required")
    if not _is_number(similarity) or not math.isfinite(similarity):
        raise InvalidPayload("similarity must be a number")
    similarity = float(similarity)
    if not 0.0 <= similarity <= 1.0:
        raise InvalidPayload(f"similarity must be between 0 and 1, got {similarity}")

    reason = _pick(payload, "reason")
    if not isinstance(reason, str) or not reason.strip():
        raise InvalidPayload("reason is required")

    years = _pick(payload, "yearsOfExperience", "years_of_experience")
    if years is None:
        raise InvalidPayload("yearsOfExperience is required")
    if isinstance(years, str) and years.strip().isdigit():
        years = int(years.strip())
    if not _is_number(years) or not math.isfinite(years) or int(years) != years:
        raise InvalidPayload("yearsOfExperience must be a whole number")
    years = int(years)
    if years < 0:
        raise InvalidPayload("yearsOfExperience cannot be negative")

    skills = _pick(payload, "skills")
    if skills is None:
        raise InvalidPayload("skills is required")
    if isinstance(skills, (list, tuple)):
        if not all(isinstance(token, str) for token in skills):
            raise InvalidPayload("skills must be strings")
        skills = join_skills(skills)
    elif not isinstance(skills, str):
        raise InvalidPayload("skills must be a comma-separated string or a list")

    projects = _pick(payload, "projects")
    if projects is not None and not isinstance(projects, str):
        raise InvalidPayload("projects must be text")

    return {
        "similarity": similarity,
        "reason": reason.strip(),
        "years_of_experience": years,
        "skills": skills,
        "projects": projects,
    }


def ingest_analysis(application_id, payload):
    """
    Attach (or replace) the CV analysis of an application.
    Re-ingesting overwrites every field; there is no merge.
    """
    application = db.session.get(Application, application_id) if application_id else None
    if application is None:
        raise NotFound("Application not found")

    values = normalize_payload(payload)

    try:
        analysis = application.cv_analysis
        if analysis is None:
            analysis = CVAnalysis(application_id=application.id)
            application.cv_analysis = analysis

        for column, value in values.items():
            setattr(analysis, column, value)
        analysis.analyzed_at = datetime.utcnow()

        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception("Failed to store analysis for application %s", application_id)
        raise

    logger.info(
        "Stored analysis for application %s (similarity=%.3f, %d skills)",
        application.id, values["similarity"], len(split_skills(values["skills"])),
    )
    return application
