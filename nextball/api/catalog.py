"""
Season and match catalog routes
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from nextball.api.deps import get_catalog
from nextball.api.schemas import ErrorResponse, MatchSummary
from nextball.catalog import Catalog
from nextball.exceptions import CatalogError, FetchFailed

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Catalog"],
    responses={
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)


def catalog_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, CatalogError):
        return HTTPException(status_code=exc.status_code, detail=exc.message)
    # Remote catalog failures surface as a bad gateway
    return HTTPException(status_code=502, detail=exc.message)


@router.get("/seasons", response_model=List[str])
def list_seasons(catalog: Catalog = Depends(get_catalog)):
    """All seasons with match data, newest first"""
    try:
        return catalog.list_seasons()
    except (CatalogError, FetchFailed) as e:
        raise catalog_http_error(e)


@router.get("/matches/{season}", response_model=List[MatchSummary])
def list_matches(season: str, catalog: Catalog = Depends(get_catalog)):
    try:
        return catalog.list_matches(season)
    except (CatalogError, FetchFailed) as e:
        raise catalog_http_error(e)


@router.get("/data/{season}/{match_id}")
def get_match_data(season: str, match_id: str, catalog: Catalog = Depends(get_catalog)):
    """Raw ball-by-ball payload for one match, exactly as stored"""
    try:
        return catalog.get_match_data(season, match_id)
    except (CatalogError, FetchFailed) as e:
        raise catalog_http_error(e)
