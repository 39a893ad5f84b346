"""
API v1 safe house routes.

CRUD endpoints for safe house locations. No uniqueness rule applies,
so create never returns 409.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from src.api.dependencies import get_safe_house_service
from src.api.models import (
    ErrorResponse,
    SafeHouseCreateRequest,
    SafeHouseResponse,
    SafeHouseUpdateRequest,
)
from src.api.v1.identities import ID_MISMATCH_DETAIL
from src.domain.services import SafeHouseService

router = APIRouter(prefix="/safe-houses", tags=["safe-houses"])


@router.get("", response_model=list[SafeHouseResponse], summary="List safe houses")
def list_safe_houses(
    service: SafeHouseService = Depends(get_safe_house_service),
) -> list[SafeHouseResponse]:
    return [SafeHouseResponse.from_entity(e) for e in service.get_all()]


@router.get(
    "/{id}",
    response_model=SafeHouseResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get safe house by id",
)
def get_safe_house(
    id: uuid.UUID,
    service: SafeHouseService = Depends(get_safe_house_service),
) -> SafeHouseResponse:
    return SafeHouseResponse.from_entity(service.get_by_id(id))


@router.post(
    "",
    response_model=SafeHouseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid field"},
        422: {"description": "Validation error"},
    },
    summary="Create safe house",
)
def create_safe_house(
    request_data: SafeHouseCreateRequest,
    request: Request,
    response: Response,
    service: SafeHouseService = Depends(get_safe_house_service),
) -> SafeHouseResponse:
    entity = service.create(request_data.postal_code, request_data.number, request_data.complement)
    response.headers["Location"] = str(request.url_for("get_safe_house", id=str(entity.id)))
    return SafeHouseResponse.from_entity(entity)


@router.put(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse, "description": "Id mismatch or invalid field"},
        404: {"model": ErrorResponse},
    },
    summary="Replace safe house",
)
def update_safe_house(
    id: uuid.UUID,
    request_data: SafeHouseUpdateRequest,
    service: SafeHouseService = Depends(get_safe_house_service),
) -> Response:
    if id != request_data.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ID_MISMATCH_DETAIL)
    service.update(id, request_data.postal_code, request_data.number, request_data.complement)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete safe house",
)
def delete_safe_house(
    id: uuid.UUID,
    service: SafeHouseService = Depends(get_safe_house_service),
) -> Response:
    service.delete(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
