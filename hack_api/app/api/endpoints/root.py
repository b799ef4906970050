"""Service root and liveness check."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ...core.responses import JSONApiResponse, no_content
from ...services.serializer import root_document


router = APIRouter()


@router.get("/")
async def get_root() -> JSONApiResponse:
    """Entry document linking to every collection."""
    return JSONApiResponse(root_document())


@router.options("/")
async def options_root():
    return no_content()


@router.get("/api", response_class=PlainTextResponse)
async def liveness() -> str:
    return "Hack24 API is running"
