"""URL redirection endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from loguru import logger

from shortener.api.dependencies import get_shortener_service
from shortener.services.exceptions import StorageUnavailableError, URLNotFoundError
from shortener.services.links import location_header
from shortener.services.shortener import ShortenedURLService

# Mounted under the configured redirect prefix
router = APIRouter(tags=["redirect"])


@router.get(
    "/{url_id}",
    response_class=Response,
    status_code=status.HTTP_302_FOUND,
    responses={404: {"description": "Unknown id"}},
)
async def redirect_to_original_url(
    url_id: str,
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    """Redirect to the original URL stored under ``url_id``.

    The stored URL is sent back as given; only characters a header cannot
    carry are escaped.
    """
    try:
        original_url = await shortener_service.resolve(url_id)
    except URLNotFoundError:
        logger.debug("Unknown short link requested", url_id=url_id)
        raise HTTPException(status_code=404, detail="Link not found")
    except StorageUnavailableError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return Response(
        status_code=status.HTTP_302_FOUND,
        headers={"Location": location_header(original_url)},
    )
