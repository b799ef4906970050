"""
Basic-auth authorization gate.

Every mutating endpoint depends on one of two guards:

``require_admin``
    The decoded username and password must both equal the configured
    admin pair.

``require_attendee``
    The password must equal the shared Hackbot password, and the
    username names the attendee Hackbot is acting for.  A username
    containing ``@`` is an attendee ID (email) and must exist.  Anything
    else must look like a Slack user ID (``U`` followed by eight
    uppercase alphanumerics).  An attendee already linked to that Slack
    ID is accepted; otherwise Slack is asked for the user's email and
    the unlinked attendee with that email is linked to the Slack ID.
    The link is written once and never refreshed.

Both guards first run ``require_user``, which only decodes the header:
no header at all is a 401 with a Basic challenge, a header that is not
well-formed basic auth is a 403.  Every later rejection is the same 403
so callers cannot tell which check failed.
"""

import base64
import binascii
import hmac
import logging
import re
from dataclasses import dataclass

from fastapi import Depends, Request
from starlette.concurrency import run_in_threadpool

from .config import Settings
from .db import Database
from .dependencies import get_database, get_identity_provider, get_settings
from .errors import ForbiddenError, UnauthenticatedError
from ..services.attendee_service import AttendeeService
from ..services.identity_service import IdentityLookupError


logger = logging.getLogger(__name__)

SLACK_USER_ID = re.compile(r"U[A-Z0-9]{8}")

ADMIN = "admin"
ATTENDEE = "attendee"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str


@dataclass(frozen=True)
class Caller:
    """An authorised caller: ``role`` is ``ADMIN`` or ``ATTENDEE``."""

    role: str
    username: str


def decode_basic_auth(header: str) -> Credentials:
    """Split a ``Basic <base64(user:pass)>`` header into its credentials.

    Raises ``ForbiddenError`` for any other scheme, undecodable payloads
    and payloads without a colon.
    """
    parts = header.split(" ")
    if len(parts) < 2 or parts[0] != "Basic":
        raise ForbiddenError()
    try:
        decoded = base64.b64decode(parts[1], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise ForbiddenError()
    username, sep, password = decoded.partition(":")
    if not sep:
        raise ForbiddenError()
    return Credentials(username=username, password=password)


def _secret_matches(supplied: str, configured: str) -> bool:
    # An unset secret must never match, not even an empty password.
    if not configured:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), configured.encode("utf-8"))


def require_user(request: Request, settings: Settings = Depends(get_settings)) -> Credentials:
    header = request.headers.get("authorization")
    if header is None:
        raise UnauthenticatedError(settings.auth_realm)
    return decode_basic_auth(header)


def require_admin(
    credentials: Credentials = Depends(require_user),
    settings: Settings = Depends(get_settings),
) -> Caller:
    if not (
        _secret_matches(credentials.username, settings.admin_username)
        and _secret_matches(credentials.password, settings.admin_password)
    ):
        raise ForbiddenError()
    return Caller(role=ADMIN, username=credentials.username)


async def require_attendee(
    credentials: Credentials = Depends(require_user),
    settings: Settings = Depends(get_settings),
    db: Database = Depends(get_database),
    identity_provider=Depends(get_identity_provider),
) -> Caller:
    if not _secret_matches(credentials.password, settings.hackbot_password):
        raise ForbiddenError()
    username = credentials.username
    if await classify_attendee(db, identity_provider, username):
        return Caller(role=ATTENDEE, username=username)
    raise ForbiddenError()


async def classify_attendee(db: Database, identity_provider, username: str) -> bool:
    """Return True when ``username`` resolves to a registered attendee.

    May link the attendee to a Slack ID as a side effect.
    """
    if "@" in username:
        return await AttendeeService.exists(db, username)

    if not SLACK_USER_ID.fullmatch(username):
        return False

    if await AttendeeService.exists_by_slackid(db, username):
        return True

    logger.info('Looking up Slack profile for "%s"...', username)
    try:
        # The Slack client is blocking; keep it off the event loop so a
        # slow lookup only holds up this request.
        profile = await run_in_threadpool(identity_provider.lookup, username)
    except IdentityLookupError as exc:
        logger.error('Could not look-up user "%s" on Slack API: %s', username, exc)
        return False
    except Exception:
        # Any other lookup failure still only rejects this caller.
        logger.exception('Unexpected error looking up user "%s"', username)
        return False
    logger.info('Found "%s" to be "%s"', username, profile.email)

    return await AttendeeService.link_slackid(db, profile.email, profile.external_id)
