from cvision.extensions import db
from cvision.models import Application, Job, User
from cvision.services.analysis_ingestor import ingest_analysis

import click

# email -> (status, analysis payload or None while the pipeline has not run)
SEEDED = {
    "ada@example.com": ("reviewing", {
        "similarity": 0.91,
        "reason": "Strong React and TypeScript background with design-system work.",
        "yearsOfExperience": 5,
        "skills": "React, TypeScript, GraphQL, Storybook",
        "projects": "Component library used across three product teams.",
    }),
    "grace@example.com": ("pending", {
        "similarity": 0.64,
        "reason": "Solid engineering fundamentals, limited frontend exposure.",
        "yearsOfExperience": 8,
        "skills": "COBOL, Python,  SQL ,",
    }),
    "linus@example.com": ("pending", {
        "similarity": 0.38,
        "reason": "Mostly systems programming experience.",
        "yearsOfExperience": 2,
        "skills": "C, Git, Linux",
    }),
    "margaret@example.com": ("pending", None),
}


def seed():
    click.echo("🌱 Seeding applications...")

    job = Job.query.filter_by(title="Frontend Developer").first()
    if not job:
        click.echo("⚠️ No jobs found! Please seed jobs first.")
        return

    for email, (status, analysis) in SEEDED.items():
        applicant = User.query.filter_by(email=email).first()
        if not applicant:
            continue
        if Application.query.filter_by(job_id=job.id, applicant_id=applicant.id).first():
            continue

        application = Application(
            job_id=job.id,
            applicant_id=applicant.id,
            status=status,
            resume_url=f"uploads/{applicant.id}-resume.pdf",
            phone_number="+1 555 0100",
        )
        db.session.add(application)
        db.session.commit()

        if analysis:
            ingest_analysis(application.id, analysis)

    click.echo("✅ Applications seeded successfully!")
