import logging
import click
import uvicorn

from edconnect_backend.settings import settings


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--seed/--no-seed", "with_seed", default=False, help="Load the seed file (and its demo sessions) before serving")
def serve(host, port, with_seed):
    """Run the portal API."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from edconnect_backend.server import app

    if with_seed:
        from edconnect_backend.database import _SessionLocal, init_db
        from edconnect_backend.seeder import seed_from_file

        init_db()
        with _SessionLocal() as db:
            seed_from_file(db)

    uvicorn.run(app, host=host, port=port, log_level=settings.LOG_LEVEL.lower())
