import click
from coursehub_backend.cli.utils import handle_service_exceptions
from coursehub_backend.database import migrate_db

@click.command()
@handle_service_exceptions
def init():
  """Bring the schema up to the latest migration."""
  migrate_db()
  click.echo("Database initialized")

@click.command()
@click.option("--revision", "-r", default="head", show_default=True, help="Target migration revision")
@handle_service_exceptions
def upgrade(revision):
  """Upgrade the schema to a migration revision."""
  migrate_db(revision=revision)
  click.echo(f"Database upgraded to {revision}")

@click.group()
def db():
    pass

db.add_command(init,"init")
db.add_command(upgrade,"upgrade")
