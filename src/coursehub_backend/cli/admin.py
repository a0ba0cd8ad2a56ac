import click
from coursehub_backend.cli.utils import handle_service_exceptions, open_session
from coursehub_backend.services.users import ensure_admin

@click.command()
@click.option("--email", "-e", "email", prompt=True)
@handle_service_exceptions
def create_admin(email):
  """Create an admin account, or promote an existing one."""

  with open_session() as db:
    user = ensure_admin(email, db)
    click.echo(f"{user.email} ({user.id}) is {click.style(user.role,fg='green')}")

@click.group()
def admin():
    pass

admin.add_command(create_admin,"create")
