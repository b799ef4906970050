"""Team endpoints, including the ``members`` and ``entries`` relationships."""

from typing import Any

from fastapi import APIRouter, Depends, Request, status

from ...core.db import Database
from ...core.dependencies import get_broadcaster, get_database, json_body
from ...core.responses import JSONApiResponse, no_content
from ...core.security import Caller, require_admin, require_attendee
from ...services.team_entry_service import TeamEntryService
from ...services.team_member_service import TeamMemberService
from ...services.team_service import TeamService


router = APIRouter()


@router.get("")
async def list_teams(request: Request, db: Database = Depends(get_database)) -> JSONApiResponse:
    """List teams with their members and entries included."""
    name_filter = request.query_params.get("filter[name]")
    return JSONApiResponse(await TeamService.list_teams(db, name_filter))


@router.options("")
async def options_teams():
    return no_content()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_team(
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
) -> JSONApiResponse:
    document = await TeamService.create_team(db, broadcaster, payload)
    return JSONApiResponse(document, status_code=status.HTTP_201_CREATED)


@router.get("/{team_id}")
async def get_team(team_id: str, db: Database = Depends(get_database)) -> JSONApiResponse:
    return JSONApiResponse(await TeamService.get_team(db, team_id))


@router.options("/{team_id}")
async def options_team(team_id: str):
    return no_content()


@router.patch("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_team(
    team_id: str,
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await TeamService.update_team(db, broadcaster, team_id, payload)
    return no_content()


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team(
    team_id: str,
    caller: Caller = Depends(require_admin),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await TeamService.delete_team(db, broadcaster, team_id)
    return no_content()


@router.get("/{team_id}/members")
async def get_team_members(team_id: str, db: Database = Depends(get_database)) -> JSONApiResponse:
    return JSONApiResponse(await TeamService.get_team_relationship(db, team_id, "members"))


@router.options("/{team_id}/members")
async def options_team_members(team_id: str):
    return no_content()


@router.post("/{team_id}/members", status_code=status.HTTP_204_NO_CONTENT)
async def add_team_members(
    team_id: str,
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await TeamMemberService.add(db, broadcaster, team_id, payload)
    return no_content()


@router.delete("/{team_id}/members", status_code=status.HTTP_204_NO_CONTENT)
async def remove_team_members(
    team_id: str,
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await TeamMemberService.remove(db, broadcaster, team_id, payload)
    return no_content()


@router.get("/{team_id}/entries")
async def get_team_entries(team_id: str, db: Database = Depends(get_database)) -> JSONApiResponse:
    return JSONApiResponse(await TeamService.get_team_relationship(db, team_id, "entries"))


@router.options("/{team_id}/entries")
async def options_team_entries(team_id: str):
    return no_content()


@router.post("/{team_id}/entries", status_code=status.HTTP_204_NO_CONTENT)
async def add_team_entries(
    team_id: str,
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await TeamEntryService.add(db, broadcaster, team_id, payload)
    return no_content()


@router.delete("/{team_id}/entries", status_code=status.HTTP_204_NO_CONTENT)
async def remove_team_entries(
    team_id: str,
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await TeamEntryService.remove(db, broadcaster, team_id, payload)
    return no_content()
