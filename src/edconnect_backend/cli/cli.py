import click

from .database import init_database, seed
from .server import serve

@click.group()
def cli():
    pass

cli.add_command(init_database,"init-db")
cli.add_command(seed,"seed")
cli.add_command(serve,"serve")

if __name__ == '__main__':
    cli()
