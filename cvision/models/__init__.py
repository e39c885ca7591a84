from .user import User
from .job import Job
from .application import Application, APPLICATION_STATUSES
from .cv_analysis import CVAnalysis

__all__ = [
    "User",
    "Job",
    "Application",
    "APPLICATION_STATUSES",
    "CVAnalysis",
]
