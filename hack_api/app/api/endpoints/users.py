"""
User endpoints.

Reads are public.  Hackbot creates and renames users acting for an
attendee; only admins delete them.  Every user document includes the
user's team and that team's other members.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, status

from ...core.db import Database
from ...core.dependencies import get_broadcaster, get_database, json_body
from ...core.responses import JSONApiResponse, no_content
from ...core.security import Caller, require_admin, require_attendee
from ...services.user_service import UserService


router = APIRouter()


@router.get("")
async def list_users(request: Request, db: Database = Depends(get_database)) -> JSONApiResponse:
    """List users, optionally filtered with ``filter[name]``."""
    name_filter = request.query_params.get("filter[name]")
    return JSONApiResponse(await UserService.list_users(db, name_filter))


@router.options("")
async def options_users():
    return no_content()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
) -> JSONApiResponse:
    document = await UserService.create_user(db, broadcaster, payload)
    return JSONApiResponse(document, status_code=status.HTTP_201_CREATED)


@router.get("/{user_id}")
async def get_user(user_id: str, db: Database = Depends(get_database)) -> JSONApiResponse:
    return JSONApiResponse(await UserService.get_user(db, user_id))


@router.options("/{user_id}")
async def options_user(user_id: str):
    return no_content()


@router.patch("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(
    user_id: str,
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await UserService.update_user(db, broadcaster, user_id, payload)
    return no_content()


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    caller: Caller = Depends(require_admin),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await UserService.delete_user(db, broadcaster, user_id)
    return no_content()


@router.get("/{user_id}/team")
async def get_user_team(user_id: str, db: Database = Depends(get_database)) -> JSONApiResponse:
    return JSONApiResponse(await UserService.get_user_team(db, user_id))


@router.options("/{user_id}/team")
async def options_user_team(user_id: str):
    return no_content()
