"""
Delegated authentication against the identity service.

Callers present an opaque access token in the ``X-Access-Token`` header.
The token is forwarded unchanged to the identity service configured by
``AUTHYURL``; a ``200`` response must carry a JSON object whose
``public_id`` field is a UUID.  That UUID, in canonical lowercase form,
becomes the caller's identity for the rest of the request and is stored
on ``request.state.public_id``.

Each request resolves its identity afresh: there is no cache and no
retry, and every failure aborts the request with its own error class so
clients can tell "you are not authenticated" apart from "the identity
service is broken".
"""

import logging
from typing import Optional

import requests
from fastapi import Header, Request

from .config import settings
from .errors import (
    AuthResponseError,
    AuthServiceUnavailable,
    ConfigurationError,
    InvalidCredentials,
    Unauthenticated,
)
from .validation import canonical_uuid, is_valid_uuid

logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "X-Access-Token"


def resolve_identity(access_token: Optional[str]) -> str:
    """Resolve ``access_token`` into the caller's ``public_id``.

    Parameters
    ----------
    access_token : Optional[str]
        Raw value of the ``X-Access-Token`` header.

    Returns
    -------
    str
        The identity returned by the identity service.

    Raises
    ------
    Unauthenticated
        No token was presented.
    ConfigurationError
        ``AUTHYURL`` is not configured.
    AuthServiceUnavailable
        The identity service could not be reached.
    InvalidCredentials
        The identity service rejected the token.
    AuthResponseError
        The identity service answered ``200`` with an unusable body.
    """
    if not access_token:
        raise Unauthenticated()

    authy_url = settings.authy_url
    if not authy_url:
        logger.error("AUTHYURL environment variable not set")
        raise ConfigurationError()

    try:
        response = requests.get(
            authy_url,
            headers={ACCESS_TOKEN_HEADER: access_token},
            timeout=settings.authy_timeout,
        )
    except requests.RequestException as exc:
        logger.error("Failed to call authentication service: %s", exc)
        raise AuthServiceUnavailable() from exc

    if response.status_code != 200:
        logger.warning("Authentication failed with status %s", response.status_code)
        raise InvalidCredentials()

    try:
        body = response.json()
    except ValueError as exc:
        logger.error("Failed to parse authentication response: %s", exc)
        raise AuthResponseError() from exc

    if not isinstance(body, dict):
        logger.error("Authentication response is not a JSON object")
        raise AuthResponseError()

    public_id = body.get("public_id")
    if not public_id:
        logger.error("Authentication service returned empty public_id")
        raise AuthResponseError()

    if not isinstance(public_id, str) or not is_valid_uuid(public_id):
        logger.error("Authentication service returned invalid public_id format: %r", public_id)
        raise AuthResponseError()

    # One user, one document key, however the identity service spells it.
    return canonical_uuid(public_id)


def get_current_identity(
    request: Request,
    access_token: Optional[str] = Header(None, alias=ACCESS_TOKEN_HEADER),
) -> str:
    """Dependency that authenticates the request and returns its identity.

    Declared as a plain function so FastAPI runs the blocking identity
    call in its threadpool.
    """
    public_id = resolve_identity(access_token)
    request.state.public_id = public_id
    logger.info("Authentication successful for %s", public_id)
    return public_id
