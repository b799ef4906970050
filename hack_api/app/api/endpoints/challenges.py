"""Challenge endpoints.  Writes are admin-only."""

from typing import Any

from fastapi import APIRouter, Depends, Request, status

from ...core.db import Database
from ...core.dependencies import get_broadcaster, get_database, json_body
from ...core.responses import JSONApiResponse, no_content
from ...core.security import Caller, require_admin
from ...services.challenge_service import ChallengeService


router = APIRouter()


@router.get("")
async def list_challenges(request: Request, db: Database = Depends(get_database)) -> JSONApiResponse:
    name_filter = request.query_params.get("filter[name]")
    return JSONApiResponse(await ChallengeService.list_challenges(db, name_filter))


@router.options("")
async def options_challenges():
    return no_content()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_challenge(
    caller: Caller = Depends(require_admin),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
) -> JSONApiResponse:
    document = await ChallengeService.create_challenge(db, broadcaster, payload)
    return JSONApiResponse(document, status_code=status.HTTP_201_CREATED)


@router.get("/{challenge_id}")
async def get_challenge(challenge_id: str, db: Database = Depends(get_database)) -> JSONApiResponse:
    return JSONApiResponse(await ChallengeService.get_challenge(db, challenge_id))


@router.options("/{challenge_id}")
async def options_challenge(challenge_id: str):
    return no_content()


@router.patch("/{challenge_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_challenge(
    challenge_id: str,
    caller: Caller = Depends(require_admin),
    payload: Any = Depends(json_body),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await ChallengeService.update_challenge(db, broadcaster, challenge_id, payload)
    return no_content()


@router.delete("/{challenge_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_challenge(
    challenge_id: str,
    caller: Caller = Depends(require_admin),
    db: Database = Depends(get_database),
    broadcaster=Depends(get_broadcaster),
):
    await ChallengeService.delete_challenge(db, broadcaster, challenge_id)
    return no_content()
