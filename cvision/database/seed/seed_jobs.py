from cvision.extensions import db
from cvision.models import Job, User
from datetime import datetime, timedelta

import click


def seed():
    click.echo("🌱 Seeding jobs...")

    recruiter = User.query.filter_by(role="recruiter").first()
    if not recruiter:
        click.echo("⚠️ No recruiter found! Please seed users first.")
        return

    now = datetime.utcnow()
    jobs = [
        Job(
            recruiter_id=recruiter.id,
            title="Frontend Developer",
            company="TechCorp",
            location="San Francisco, CA",
            description="We are looking for a skilled Frontend Developer to build our React dashboards.",
            requirements="React, TypeScript, 3+ years experience",
            salary="$120,000 - $150,000",
            job_type="Full-time",
            experience_level="Mid-level",
            is_remote=True,
            shortlist_size=3,
            expires_at=now + timedelta(days=30),
        ),
        Job(
            recruiter_id=recruiter.id,
            title="Backend Engineer",
            company="DataSys",
            location="New York, NY",
            description="Join our backend team to build scalable APIs.",
            requirements="Python, PostgreSQL, AWS experience",
            salary="$130,000 - $160,000",
            job_type="Full-time",
            experience_level="Senior",
            is_remote=False,
            expires_at=now + timedelta(days=45),
        ),
        Job(
            recruiter_id=recruiter.id,
            title="Data Scientist",
            company="AnalyticsPro",
            location="Remote",
            description="Looking for a data scientist to analyze customer behavior.",
            requirements="Python, SQL, Machine Learning experience",
            salary="$110,000 - $140,000",
            job_type="Contract",
            experience_level="Senior",
            is_remote=True,
            shortlist_size=2,
            expires_at=now + timedelta(days=60),
        ),
    ]

    for job in jobs:
        existing_job = Job.query.filter_by(title=job.title, recruiter_id=recruiter.id).first()
        if existing_job:
            click.echo(f"⚠️ Job '{job.title}' already exists. Skipping insert.")
            continue
        db.session.add(job)

    db.session.commit()
    click.echo("✅ Jobs seeded successfully!")
