"""
Shared fixtures: an app on in-memory SQLite plus small factories.
"""

import itertools
from datetime import datetime, timedelta

import pytest

from config import TestConfig
from cvision import create_app
from cvision.extensions import db, bcrypt
from cvision.models import Application, CVAnalysis, Job, User
from cvision.services.auth import AuthService

BASE_TIME = datetime(2024, 1, 1, 9, 0, 0)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = itertools.count(1)

    def _make_user(name=None, email=None, role="applicant", password="password123"):
        n = next(counter)
        user = User(
            name=name or f"User {n}",
            email=email or f"user{n}@example.com",
            password=bcrypt.generate_password_hash(password).decode("utf-8"),
            role=role,
        )
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def recruiter(make_user):
    return make_user(name="Rita Recruiter", email="rita@example.com", role="recruiter")


@pytest.fixture
def make_job(app, recruiter):
    def _make_job(owner=None, title="Frontend Developer", shortlist_size=5, is_active=True):
        job = Job(
            recruiter_id=(owner or recruiter).id,
            title=title,
            company="TechCorp",
            shortlist_size=shortlist_size,
            is_active=is_active,
        )
        db.session.add(job)
        db.session.commit()
        return job

    return _make_job


@pytest.fixture
def make_application(app, make_user):
    counter = itertools.count(1)

    def _make_application(job, applicant=None, status="pending", similarity=None,
                          minutes=None, reason="Analysed", skills="", projects=None):
        n = next(counter)
        application = Application(
            job_id=job.id,
            applicant_id=(applicant or make_user()).id,
            status=status,
            resume_url=f"uploads/resume-{n}.pdf",
            phone_number="+1 555 0100",
            created_at=BASE_TIME + timedelta(minutes=n if minutes is None else minutes),
        )
        if similarity is not None:
            application.cv_analysis = CVAnalysis(
                similarity=similarity,
                reason=reason,
                years_of_experience=3,
                skills=skills,
                projects=projects,
            )
        db.session.add(application)
        db.session.commit()
        return application

    return _make_application


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        return {"Authorization": f"Bearer {AuthService.issue_token(user)}"}

    return _auth_headers
