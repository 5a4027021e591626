from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from linkanalytics_app.exceptions import LinkNotFoundError
from linkanalytics_app.services.link_service import LinkService
from linkanalytics_app.dependencies import get_link_service

router = APIRouter(tags=["redirect"])


async def _record_visit(identifier: str, request: Request, link_service: LinkService) -> str:
    """Record a hit signed with the client's user agent; 404 for unknown links"""
    try:
        return await link_service.visit(identifier, request.headers.get("user-agent", ""))
    except LinkNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Link not found"
        )


@router.get("/go/{identifier}")
async def redirect_to_destination(
    identifier: str,
    request: Request,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Record the hit, then redirect to the destination.

    The hit is on disk before the redirect is sent.
    """
    destination = await _record_visit(identifier, request, link_service)
    return RedirectResponse(url=destination, status_code=status.HTTP_302_FOUND)


@router.get("/collect/{identifier}", response_class=PlainTextResponse)
async def collect_hit(
    identifier: str,
    request: Request,
    link_service: LinkService = Depends(get_link_service)
):
    """Record the hit without redirecting (tracking pixels, beacons)"""
    await _record_visit(identifier, request, link_service)
    return f"200 OK {identifier}"
