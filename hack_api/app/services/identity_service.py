"""
External identity lookups.

Hackbot talks to the API on behalf of Slack users and identifies them by
their Slack user ID.  ``SlackIdentityProvider`` resolves such an ID to
the email address on the user's Slack profile via ``users.info`` so the
authorization gate can match it against registered attendees.

Slack error responses, network problems, non-JSON replies and profiles
without an email all surface as ``IdentityLookupError``.  Lookups are
not retried.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackClientError


logger = logging.getLogger(__name__)


class IdentityLookupError(Exception):
    """The external identity could not be resolved."""


@dataclass(frozen=True)
class ExternalProfile:
    external_id: str
    email: str


class SlackIdentityProvider:
    """Resolve Slack user IDs through the Slack Web API."""

    def __init__(self, token: str, base_url: Optional[str] = None) -> None:
        kwargs = {"token": token or None}
        if base_url:
            # slack_sdk joins method names onto the base URL verbatim.
            kwargs["base_url"] = base_url if base_url.endswith("/") else base_url + "/"
        self._client = WebClient(**kwargs)

    def lookup(self, external_id: str) -> ExternalProfile:
        try:
            # slack_sdk raises ValueError when the response body is not JSON.
            response = self._client.users_info(user=external_id)
        except (SlackClientError, OSError, ValueError) as exc:
            raise IdentityLookupError(str(exc)) from exc

        user = response.get("user") or {}
        email = (user.get("profile") or {}).get("email")
        if not email:
            raise IdentityLookupError(f"Slack profile for {external_id} has no email address")
        return ExternalProfile(external_id=user.get("id") or external_id, email=email)
