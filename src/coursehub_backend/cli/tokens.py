import click
from coursehub_backend.cli.utils import handle_service_exceptions, open_session
from coursehub_backend.repositories import SessionRepository, UserRepository
from coursehub_backend.settings import settings

@click.command()
@click.option("--email", "-e", "email", prompt=True)
@click.option("--given-name", "given_name", default=None)
@click.option("--family-name", "family_name", default=None)
@click.option("--hours", "hours", type=click.IntRange(min=1), default=None, help="Token lifetime, defaults to SESSION_TTL_HOURS")
@handle_service_exceptions
def issue(email, given_name, family_name, hours):
  """Issue a bearer token. Creates the user as a student on first use."""

  with open_session() as db:
    user, created = UserRepository(db).get_or_create_by_email(email, given_name, family_name)
    if created:
      click.echo(f"Created user {user.email} ({user.id})", err=True)

    token = SessionRepository(db).issue(user.id, hours or settings.SESSION_TTL_HOURS)
    click.echo(token)

@click.command()
@click.option("--email", "-e", "email", prompt=True)
@handle_service_exceptions
def revoke(email):
  """Revoke every token of a user."""

  with open_session() as db:
    user = UserRepository(db).find_by_email(email)
    if user is None:
      raise click.ClickException(f"No user with email {email}")

    count = SessionRepository(db).revoke_for_user(user.id)
    click.echo(f"Revoked {count} token(s)")

@click.group()
def token():
    pass

token.add_command(issue,"issue")
token.add_command(revoke,"revoke")
