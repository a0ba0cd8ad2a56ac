import click
from coursehub_backend.cli.utils import handle_service_exceptions, open_session
from coursehub_backend.permissions.roles import Role
from coursehub_backend.repositories import UserRepository
from coursehub_backend.services.users import set_role

@click.command()
@click.option("--email", "-e", "email", prompt=True)
@click.option("--role", "-r", "role", type=click.Choice(Role.get_all()), prompt=True)
@handle_service_exceptions
def promote(email, role):
  """Raise a user's role. Roles are never lowered."""

  with open_session() as db:
    user = UserRepository(db).find_by_email(email)
    if user is None:
      raise click.ClickException(f"No user with email {email}")

    user = set_role(user.id, role, db)
    click.echo(f"{user.email} is {click.style(user.role,fg='green')}")

@click.group()
def users():
    pass

users.add_command(promote,"promote")
