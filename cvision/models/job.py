from cvision.extensions import db
from datetime import datetime
import uuid

DEFAULT_SHORTLIST_SIZE = 5


class Job(db.Model):
    __tablename__ = "jobs"
    __table_args__ = (
        db.CheckConstraint("shortlist_size > 0", name="shortlist_size_positive"),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    recruiter_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    company = db.Column(db.String(255))
    location = db.Column(db.String(255))
    description = db.Column(db.Text)
    requirements = db.Column(db.Text)
    salary = db.Column(db.String(100))
    job_type = db.Column(db.String(50))
    experience_level = db.Column(db.String(50))
    is_remote = db.Column(db.Boolean, default=False, nullable=False)
    shortlist_size = db.Column(db.Integer, default=DEFAULT_SHORTLIST_SIZE, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    expires_at = db.Column(db.DateTime)

    recruiter = db.relationship("User", back_populates="jobs")
    applications = db.relationship("Application", back_populates="job", cascade="all, delete-orphan")

    def is_owned_by(self, user_id):
        return user_id is not None and self.recruiter_id == str(user_id)

    def __repr__(self):
        return f"<Job {self.title}>"
