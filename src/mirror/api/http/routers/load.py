"""Bulk import router."""

from fastapi import APIRouter, Depends, Response
from loguru import logger

from src.mirror.api.http.deps import get_importer
from src.mirror.core.services import Importer

router = APIRouter(tags=["load"])


@router.get("/load")
async def load(importer: Importer = Depends(get_importer)) -> Response:
    """Clear the store and reload it from the upstream API.

    Destructive. On failure the store is left partially loaded.
    """
    try:
        await importer.load_all()
    except Exception:
        logger.exception("Error loading data")
        return Response("Error loading data", status_code=500)
    return Response(status_code=200)
