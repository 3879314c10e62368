from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from typing import List
import logging

from shortlinks.db import database
from shortlinks.schemas import LinkResponse, MessageResponse, ShortenRequest, ShortenResponse
from shortlinks.services.registry import LinkRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["links"])

# Registered last: its catch-all path would otherwise shadow other routes
redirect_router = APIRouter(tags=["redirect"])


def get_registry(request: Request, db: Session = Depends(database.get_db)) -> LinkRegistry:
    settings = request.app.state.settings
    return LinkRegistry(
        db,
        code_length=settings.SHORT_CODE_LENGTH,
        max_attempts=settings.SHORT_CODE_MAX_ATTEMPTS,
    )


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def shorten_url_endpoint(url_request: ShortenRequest, response: Response,
                         registry: LinkRegistry = Depends(get_registry)):
    db_url, created = registry.create(url_request.original_url)

    body = ShortenResponse.model_validate(db_url)
    if not created:
        response.status_code = status.HTTP_200_OK
        body.message = "URL already shortened"
    return body


@router.get("/urls", response_model=List[LinkResponse])
def list_urls_endpoint(registry: LinkRegistry = Depends(get_registry)):
    return registry.list()


@router.delete("/urls/{record_id}", response_model=MessageResponse)
def delete_url_endpoint(record_id: str, registry: LinkRegistry = Depends(get_registry)):
    registry.delete(record_id)
    return MessageResponse(message="Deleted")


@redirect_router.get("/{short_code}")
def redirect_to_url_endpoint(short_code: str, registry: LinkRegistry = Depends(get_registry)):
    """
    Access the shortened URL and get redirected to the original long URL.
    """
    db_url = registry.resolve_and_increment(short_code)
    logger.info(f"Redirect {short_code} -> {db_url.original_url[:50]} (clicks={db_url.clicks})")
    return RedirectResponse(url=db_url.original_url, status_code=status.HTTP_302_FOUND)
