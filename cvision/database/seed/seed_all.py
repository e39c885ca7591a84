from flask.cli import with_appcontext
from cvision.database.seed.seed_users import seed as seed_users
from cvision.database.seed.seed_jobs import seed as seed_jobs
from cvision.database.seed.seed_applications import seed as seed_applications
from cvision.extensions import db

import click


@click.command("seed-all")
@click.option("--create-tables", is_flag=True, help="Create missing tables before seeding.")
@with_appcontext
def seed_all(create_tables):
    """Run all database seeders."""
    if create_tables:
        db.create_all()
    click.echo("🌱 Seeding database...")
    seed_users()
    seed_jobs()
    seed_applications()
    click.echo("✅ All seeders completed!")
