import click
from flask.cli import with_appcontext
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Drop and recreate all tables, then load reference data."""
    from tariffsmart.web.db.seed import seed_reference_data

    db.drop_all()
    db.create_all()
    counts = seed_reference_data()
    click.echo(f"Initialized the database: {counts}")


@click.command("seed-db")
@click.option("--if-empty/--force", default=True, help="Skip seeding when data already exists.")
@with_appcontext
def seed_db_command(if_empty):
    """Load reference data (countries, products, flags, learning content)."""
    from tariffsmart.web.db.seed import seed_reference_data

    db.create_all()
    counts = seed_reference_data(if_empty=if_empty)
    click.echo(f"Seeded: {counts}")
