"""
FastAPI dependencies exposing the objects built once in ``create_app``.

The settings, database handle, event broadcaster and identity provider
live on ``app.state``; endpoints and the authorization gate receive them
through these accessors rather than importing module globals.

``json_body`` reads the request document.  Write routes declare it after
their authorization dependency, so a caller without credentials gets the
401 challenge before the body is even looked at.
"""

import json
from typing import Any

from fastapi import Request

from .config import Settings
from .db import Database
from .errors import BadRequestError


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_broadcaster(request: Request):
    return request.app.state.broadcaster


def get_identity_provider(request: Request):
    return request.app.state.identity_provider


async def json_body(request: Request) -> Any:
    """Decoded JSON body, or None when the body is empty."""
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        # Covers malformed JSON and bodies that are not UTF-8.
        raise BadRequestError()
