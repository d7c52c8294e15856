"""Media API endpoints.

Registers assets produced by the upload pipeline so products can
reference them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from storefront.api.dependencies import domain_error_to_http, get_catalog_service
from storefront.api.schemas import ErrorResponse
from storefront.catalog.schemas import MediaCreateRequest, MediaSchema
from storefront.catalog.service import CatalogService
from storefront.domain.exceptions import DomainError

router = APIRouter(prefix="/media", tags=["Media"])


@router.post(
    "",
    response_model=MediaSchema,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Register media",
    description="Register an uploaded media asset.",
)
async def create_media(
    request: MediaCreateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> MediaSchema:
    """Register a media asset.

    Raises:
        HTTPException: 422 if the MIME type is not accepted.
    """
    try:
        doc = await service.create_media(request.model_dump(by_alias=True))
    except DomainError as e:
        raise domain_error_to_http(e) from e

    return MediaSchema.model_validate(doc)
