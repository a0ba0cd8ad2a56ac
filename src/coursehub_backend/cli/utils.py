import functools
import click
from alembic.util import CommandError
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from coursehub_backend.database import get_db

def handle_service_exceptions(func):
  @functools.wraps(func)
  def wrapper(*args, **kwargs):
    try:
      return func(*args, **kwargs)
    except HTTPException as e:
      click.echo(f"[{click.style(e.status_code,fg='red')}] {e.detail}")
      raise click.exceptions.Exit(1)
    except SQLAlchemyError as e:
      click.echo(f"[{click.style('503',fg='red')}] Database error: {e}")
      raise click.exceptions.Exit(1)
    except CommandError as e:
      click.echo(f"[{click.style('500',fg='red')}] Migration failed: {e}")
      raise click.exceptions.Exit(1)

  return wrapper

def open_session():
  return next(get_db())
