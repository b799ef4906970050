"""Hack endpoints, including the ``team`` and ``challenges`` relationships."""

from typing import Any

from fastapi import APIRouter, Depends, Request, status

from ...core.db import Database
from ...core.dependencies import get_broadcaster, get_database, json_body
from ...core.responses import JSONApiResponse, no_content
from ...core.security import Caller, require_admin, require_attendee
from ...services.hack_challenge_service import HackChallengeService
from ...services.hack_service import HackService


router = APIRouter()


@router.get("")
async def list_hacks(request: Request, db: Database = Depends(get_database)) -> JSONApiResponse:
    name_filter = request.query_params.get("filter[name]")
    return JSONApiResponse(await HackService.list_hacks(db, name_filter))


@router.options("")
async def options_hacks():
    return no_content()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_hack(
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
) -> JSONApiResponse:
    document = await HackService.create_hack(db, broadcaster, payload)
    return JSONApiResponse(document, status_code=status.HTTP_201_CREATED)


@router.get("/{hack_id}")
async def get_hack(hack_id: str, db: Database = Depends(get_database)) -> JSONApiResponse:
    return JSONApiResponse(await HackService.get_hack(db, hack_id))


@router.options("/{hack_id}")
async def options_hack(hack_id: str):
    return no_content()


@router.patch("/{hack_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_hack(
    hack_id: str,
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await HackService.update_hack(db, broadcaster, hack_id, payload)
    return no_content()


@router.delete("/{hack_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hack(
    hack_id: str,
    caller: Caller = Depends(require_admin),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await HackService.delete_hack(db, broadcaster, hack_id)
    return no_content()


@router.get("/{hack_id}/team")
async def get_hack_team(hack_id: str, db: Database = Depends(get_database)) -> JSONApiResponse:
    return JSONApiResponse(await HackService.get_hack_relationship(db, hack_id, "team"))


@router.options("/{hack_id}/team")
async def options_hack_team(hack_id: str):
    return no_content()


@router.get("/{hack_id}/challenges")
async def get_hack_challenges(hack_id: str, db: Database = Depends(get_database)) -> JSONApiResponse:
    return JSONApiResponse(await HackService.get_hack_relationship(db, hack_id, "challenges"))


@router.options("/{hack_id}/challenges")
async def options_hack_challenges(hack_id: str):
    return no_content()


@router.post("/{hack_id}/challenges", status_code=status.HTTP_204_NO_CONTENT)
async def add_hack_challenges(
    hack_id: str,
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await HackChallengeService.add(db, broadcaster, hack_id, payload)
    return no_content()


@router.delete("/{hack_id}/challenges", status_code=status.HTTP_204_NO_CONTENT)
async def remove_hack_challenges(
    hack_id: str,
    caller: Caller = Depends(require_attendee),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await HackChallengeService.remove(db, broadcaster, hack_id, payload)
    return no_content()
