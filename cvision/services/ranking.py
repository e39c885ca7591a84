# cvision/services/ranking.py
"""
Ordering, search and score-band helpers for applicant lists.

Everything here works on already-loaded Application objects and never
touches the session, so the same functions back the recruiter endpoints
and the unit tests.
"""
from datetime import datetime

SCORE_BANDS = ("all", "high", "medium", "low")

HIGH_SCORE = 0.8
MEDIUM_SCORE = 0.5


def score_of(application):
    """Raw similarity in [0, 1], or None when the CV was not analysed yet."""
    return application.match_score


def _created_key(application):
    return application.created_at or datetime.min


def rank_by_recency(applications):
    """Newest application first. Equal timestamps keep their incoming order."""
    return sorted(applications, key=_created_key, reverse=True)


def rank_by_score(applications):
    """
    Highest similarity first, unscored applications last.
    Equal scores fall back to recency (newest first).
    """
    by_recency = rank_by_recency(applications)

    def key(app):
        score = score_of(app)
        if score is None:
            return (1, 0.0)
        return (0, -score)

    # sorted() is stable, so recency survives as the tie-breaker
    return sorted(by_recency, key=key)


def matches_search(application, search):
    """
    Case-insensitive substring match on the applicant's name and email,
    plus the analysis reason/skills/projects when an analysis exists.
    """
    if not search or not search.strip():
        return True

    needle = search.strip().lower()
    fields = []

    applicant = application.applicant
    if applicant is not None:
        fields.append(applicant.name or "")
        fields.append(applicant.email or "")

    if application.cv_analysis is not None:
        fields.append(application.cv_analysis.searchable_text())

    return any(needle in field.lower() for field in fields)


def filter_by_search(applications, search):
    return [app for app in applications if matches_search(app, search)]


def score_band(score):
    """Bucket a raw score. Unscored applications count as 'low'."""
    if score is None:
        return "low"
    if score >= HIGH_SCORE:
        return "high"
    if score >= MEDIUM_SCORE:
        return "medium"
    return "low"


def filter_by_score_band(applications, band):
    if not band or band == "all":
        return list(applications)
    return [app for app in applications if score_band(score_of(app)) == band]


def as_percentage(score):
    """Display value for a raw score (0.734 -> 73). None stays None."""
    if score is None:
        return None
    return int(round(score * 100))
