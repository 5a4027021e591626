from fastapi import APIRouter, Depends, HTTPException, status
from linkanalytics_app.exceptions import InvalidDestinationError, LinkNotFoundError
from linkanalytics_app.schemas.link import LinkCreate, LinkResponse, AnalyticsResponse
from linkanalytics_app.services.link_service import LinkService
from linkanalytics_app.dependencies import get_link_service

router = APIRouter(prefix="/links", tags=["links"])


@router.post("/", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
async def create_link(
    link_data: LinkCreate,
    link_service: LinkService = Depends(get_link_service)
):
    """Register a destination (same destination -> same link)"""
    try:
        return await link_service.register_destination(link_data.destination)
    except InvalidDestinationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )


@router.get("/{identifier}", response_model=LinkResponse)
async def get_link_info(
    identifier: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Get a link without recording a hit"""
    try:
        return await link_service.get_link(identifier)
    except LinkNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Link not found"
        )


@router.get("/{identifier}/analytics", response_model=AnalyticsResponse)
async def get_link_analytics(
    identifier: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Get the full hit history of a link"""
    try:
        analytics = await link_service.get_analytics(identifier)
    except LinkNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Link not found"
        )
    return AnalyticsResponse.from_analytics(analytics)
