import click

from edconnect_backend.database import _SessionLocal, init_db
from edconnect_backend.seeder import seed_from_file
from edconnect_backend.settings import settings


@click.command()
def init_database():
    """Create all tables on the configured database."""
    init_db()
    click.echo(f"Schema created at {settings.DATABASE_URL}")


@click.command()
@click.option("--file", "-f", "filename", default=None, help="Seed file, defaults to SEED_FILE")
def seed(filename):
    """Load demo school data into the database."""
    init_db()
    with _SessionLocal() as db:
        created = seed_from_file(db, filename)
    click.echo(f"Seeded {created} rows")
