from cvision.extensions import db
from datetime import datetime
import uuid

APPLICATION_STATUSES = (
    "pending",
    "reviewing",
    "shortlisted",
    "interviewing",
    "accepted",
    "rejected",
)


class Application(db.Model):
    __tablename__ = "applications"
    __table_args__ = (
        db.UniqueConstraint("job_id", "applicant_id", name="uq_applications_job_applicant"),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    job_id = db.Column(db.String(36), db.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    applicant_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = db.Column(db.Enum(*APPLICATION_STATUSES, name="application_status"), default="pending", nullable=False)
    resume_url = db.Column(db.String(512))
    cover_letter = db.Column(db.Text)
    phone_number = db.Column(db.String(50))
    linkedin_profile = db.Column(db.String(255))
    portfolio_website = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    job = db.relationship("Job", back_populates="applications")
    applicant = db.relationship("User", back_populates="applications")
    cv_analysis = db.relationship(
        "CVAnalysis",
        back_populates="application",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def match_score(self):
        """Read-only view of the analysis similarity; None until scored."""
        if self.cv_analysis is None or self.cv_analysis.similarity is None:
            return None
        return float(self.cv_analysis.similarity)

    def __repr__(self):
        return f"<Application {self.id} job={self.job_id} status={self.status}>"
