from cvision.extensions import db, bcrypt
from cvision.models import User
from datetime import datetime

import click

DEMO_PASSWORD = "password123"

USERS = [
    ("Demo Recruiter", "recruiter@example.com", "recruiter"),
    ("Ada Lovelace", "ada@example.com", "applicant"),
    ("Grace Hopper", "grace@example.com", "applicant"),
    ("Linus Reactor", "linus@example.com", "applicant"),
    ("Margaret Hamilton", "margaret@example.com", "applicant"),
]


def seed():
    click.echo("🌱 Seeding users...")

    for name, email, role in USERS:
        # prevent duplicates
        if User.query.filter_by(email=email).first():
            continue
        db.session.add(User(
            name=name,
            email=email,
            password=bcrypt.generate_password_hash(DEMO_PASSWORD).decode("utf-8"),
            role=role,
            created_at=datetime.utcnow()
        ))

    db.session.commit()
    click.echo("✅ Users seeded successfully!")
