"""
Attendee endpoints.

Attendee records hold registration emails, so every route other than
``OPTIONS`` requires the admin credentials, reads included.
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from ...core.db import Database
from ...core.dependencies import get_broadcaster, get_database, json_body
from ...core.responses import JSONApiResponse, no_content
from ...core.security import Caller, require_admin
from ...services.attendee_service import AttendeeService


router = APIRouter()


@router.get("")
async def list_attendees(
    caller: Caller = Depends(require_admin),
    db: Database = Depends(get_database),
) -> JSONApiResponse:
    return JSONApiResponse(await AttendeeService.list_attendees(db))


@router.options("")
async def options_attendees():
    return no_content()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_attendee(
    caller: Caller = Depends(require_admin),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
) -> JSONApiResponse:
    document = await AttendeeService.create_attendee(db, broadcaster, payload)
    return JSONApiResponse(document, status_code=status.HTTP_201_CREATED)


@router.get("/{attendee_id}")
async def get_attendee(
    attendee_id: str,
    caller: Caller = Depends(require_admin),
    db: Database = Depends(get_database),
) -> JSONApiResponse:
    return JSONApiResponse(await AttendeeService.get_attendee(db, attendee_id))


@router.options("/{attendee_id}")
async def options_attendee(attendee_id: str):
    return no_content()


@router.delete("/{attendee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attendee(
    attendee_id: str,
    caller: Caller = Depends(require_admin),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await AttendeeService.delete_attendee(db, broadcaster, attendee_id)
    return no_content()
