from cvision.extensions import db
from datetime import datetime
import uuid


class CVAnalysis(db.Model):
    __tablename__ = "cv_analyses"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    application_id = db.Column(
        db.String(36),
        db.ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    similarity = db.Column(db.Float, nullable=False)
    reason = db.Column(db.Text, nullable=False)
    years_of_experience = db.Column(db.Integer, nullable=False, default=0)
    # comma-delimited, stored as received
    skills = db.Column(db.Text, nullable=False, default="")
    projects = db.Column(db.Text)
    analyzed_at = db.Column(db.DateTime, default=datetime.utcnow)

    application = db.relationship("Application", back_populates="cv_analysis")

    @property
    def skill_list(self):
        from cvision.services.analysis_ingestor import split_skills

        return split_skills(self.skills)

    def searchable_text(self):
        return " ".join(part for part in (self.reason, self.skills, self.projects) if part)
