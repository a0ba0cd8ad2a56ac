import click
from dotenv import load_dotenv

# settings are read at import time
load_dotenv()

from .db import db
from .admin import admin
from .tokens import token
from .users import users

@click.group()
def cli():
    pass

cli.add_command(db,"db")
cli.add_command(admin,"admin")
cli.add_command(token,"token")
cli.add_command(users,"users")

if __name__ == '__main__':
    cli()
