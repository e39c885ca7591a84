from ..extensions import db
from datetime import datetime
import uuid


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum("applicant", "recruiter", "admin", name="user_roles"), nullable=False)
    image = db.Column(db.String(512))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    jobs = db.relationship("Job", back_populates="recruiter", cascade="all, delete-orphan")
    applications = db.relationship("Application", back_populates="applicant", cascade="all, delete-orphan")

    # for string representation
    def __repr__(self):
        return f"<User {self.email}>"
