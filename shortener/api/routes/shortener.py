"""Link creation endpoint.

The body is decoded as JSON whatever Content-Type the client sends, so
``curl -d '{"url": ...}'`` works without extra headers.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from shortener.api import schemas
from shortener.api.dependencies import get_base_url, get_settings, get_shortener_service
from shortener.core.config import Settings
from shortener.services.exceptions import StorageUnavailableError
from shortener.services.links import build_short_url
from shortener.services.shortener import ShortenedURLService

router = APIRouter(tags=["shortener"])


async def parse_shorten_request(request: Request) -> schemas.ShortenRequest:
    """Validate the raw body as a ``ShortenRequest``."""
    body = await request.body()
    try:
        return schemas.ShortenRequest.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors())


@router.post(
    "/shorten",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Malformed request body"},
        500: {"model": schemas.ErrorResponse, "description": "Storage unavailable"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schemas.ShortenRequest.model_json_schema()}},
        }
    },
)
async def create_short_url(
    url_data: schemas.ShortenRequest = Depends(parse_shorten_request),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
    base_url: str = Depends(get_base_url),
    settings: Settings = Depends(get_settings),
):
    try:
        url_id = await shortener_service.shorten(url_data.url)
    except StorageUnavailableError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return schemas.ShortenResponse(
        short_url=build_short_url(url_id, base_url, settings.REDIRECT_PREFIX)
    )
