"""Unversioned diagnostic route."""

from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def home() -> str:
    """Return the current server time as plain text."""
    return str(datetime.now().astimezone())
