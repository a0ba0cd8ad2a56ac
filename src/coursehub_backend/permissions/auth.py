"""
Authentication and principal resolution.

A request carries ``Authorization: Bearer <token>``. The token is mapped to
a subject id through the session table, and the subject id is resolved to a
Principal from the stored user record. Nothing here is cached; every request
reads the current role from the database.
"""

import datetime
import hashlib
import logging
from typing import Annotated, Optional
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param

from coursehub_backend.database import get_db
from coursehub_backend.model.auth import User, Session as UserSession
from coursehub_backend.api.exceptions import (
    AccountNotFoundException,
    ServiceUnavailableException,
    UnauthorizedException,
)
from coursehub_backend.permissions.principal import Principal

logger = logging.getLogger(__name__)


class BearerCredentials(BaseModel):
    """Bearer token credentials"""
    token: str
    scheme: str = "Bearer"


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def parse_authorization_header(request: Request) -> BearerCredentials:
    """Parse the Authorization header. Only the Bearer scheme is accepted."""

    authorization = request.headers.get("Authorization")
    if not authorization:
        raise UnauthorizedException("No authorization provided")

    scheme, param = get_authorization_scheme_param(authorization)

    if not param:
        raise UnauthorizedException("Invalid authorization format")

    if scheme.lower() != "bearer":
        raise UnauthorizedException(f"Unsupported auth scheme: {scheme}")

    return BearerCredentials(token=param)


def _as_utc(value: datetime.datetime) -> datetime.datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


def resolve_subject(token: str, db: Session) -> str:
    """Map a bearer token to the id of the user it was issued for."""

    try:
        session = (
            db.query(UserSession.user_id, UserSession.expires_at)
            .filter(UserSession.token_hash == hash_token(token))
            .first()
        )
    except SQLAlchemyError as e:
        logger.error(f"Session lookup failed: {e}")
        raise ServiceUnavailableException()

    if session is None:
        logger.debug("Unknown bearer token")
        raise UnauthorizedException("Invalid or expired token")

    user_id, expires_at = session
    now = datetime.datetime.now(datetime.timezone.utc)
    if _as_utc(expires_at) <= now:
        logger.debug(f"Expired token for user {user_id}")
        raise UnauthorizedException("Invalid or expired token")

    return user_id


def resolve_principal(subject_id: Optional[str], db: Session) -> Principal:
    """
    Build the Principal for an authenticated subject.

    Raises:
        UnauthorizedException: no subject id was supplied
        AccountNotFoundException: the subject has no user record
        ServiceUnavailableException: the user record could not be read
    """

    if not subject_id:
        raise UnauthorizedException()

    try:
        user = db.query(User).filter(User.id == subject_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Principal lookup for {subject_id} failed: {e}")
        raise ServiceUnavailableException()

    if user is None:
        logger.info(f"Authenticated subject {subject_id} has no user record")
        raise AccountNotFoundException()

    return Principal.from_user(user)


def get_current_principal(
    credentials: Annotated[BearerCredentials, Depends(parse_authorization_header)],
    db: Session = Depends(get_db)
) -> Principal:
    """Main dependency for getting the current authenticated principal."""

    subject_id = resolve_subject(credentials.token, db)
    return resolve_principal(subject_id, db)
