"""
API v1 identity routes - Administrators and users.

Both resources expose the same endpoints, so one builder produces a
router per identity kind, bound to that kind's service dependency:

- GET    /{resource}               - List records
- GET    /{resource}/{id}          - Fetch one record
- POST   /{resource}               - Create a record (409 on duplicate email)
- PUT    /{resource}/{id}          - Replace a record
- DELETE /{resource}/{id}          - Delete a record
- POST   /{resource}/authenticate  - Check email and password
"""

import uuid
from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from src.api.dependencies import get_administrator_service, get_user_service
from src.api.models import (
    ErrorResponse,
    IdentityCreateRequest,
    IdentityResponse,
    IdentityUpdateRequest,
    LoginRequest,
)
from src.domain.services import IdentityService

ID_MISMATCH_DETAIL = "id in path does not match id in body"


def build_identity_router(
    resource: str,
    label: str,
    get_service: Callable[..., IdentityService],
) -> APIRouter:
    """
    Build the CRUD + authenticate router for one identity kind.

    Args:
        resource: URL segment, e.g. "administrators"
        label: Singular name used in summaries and route names
        get_service: FastAPI dependency returning the kind's IdentityService
    """
    router = APIRouter(prefix=f"/{resource}", tags=[resource])
    detail_route = f"get_{label.lower()}"

    @router.get(
        "",
        response_model=list[IdentityResponse],
        summary=f"List {resource}",
    )
    def list_identities(
        service: IdentityService = Depends(get_service),
    ) -> list[IdentityResponse]:
        return [IdentityResponse.from_entity(e) for e in service.get_all()]

    @router.post(
        "/authenticate",
        response_model=IdentityResponse,
        responses={
            401: {"model": ErrorResponse, "description": "Invalid email or password"},
        },
        summary=f"Authenticate {label.lower()}",
        description="Check an email and password sent as a JSON body.",
    )
    def authenticate(
        request_data: LoginRequest,
        service: IdentityService = Depends(get_service),
    ) -> IdentityResponse:
        entity = service.authenticate(request_data.email, request_data.password)
        return IdentityResponse.from_entity(entity)

    @router.get(
        "/{id}",
        name=detail_route,
        response_model=IdentityResponse,
        responses={404: {"model": ErrorResponse}},
        summary=f"Get {label.lower()} by id",
    )
    def get_identity(
        id: uuid.UUID,
        service: IdentityService = Depends(get_service),
    ) -> IdentityResponse:
        return IdentityResponse.from_entity(service.get_by_id(id))

    @router.post(
        "",
        response_model=IdentityResponse,
        status_code=status.HTTP_201_CREATED,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid field"},
            409: {"model": ErrorResponse, "description": "Email already registered"},
            422: {"description": "Validation error"},
        },
        summary=f"Create {label.lower()}",
    )
    def create_identity(
        request_data: IdentityCreateRequest,
        request: Request,
        response: Response,
        service: IdentityService = Depends(get_service),
    ) -> IdentityResponse:
        entity = service.create(request_data.name, request_data.email, request_data.password)
        response.headers["Location"] = str(request.url_for(detail_route, id=str(entity.id)))
        return IdentityResponse.from_entity(entity)

    @router.put(
        "/{id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses={
            400: {"model": ErrorResponse, "description": "Id mismatch or invalid field"},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Email already registered"},
        },
        summary=f"Replace {label.lower()}",
    )
    def update_identity(
        id: uuid.UUID,
        request_data: IdentityUpdateRequest,
        service: IdentityService = Depends(get_service),
    ) -> Response:
        if id != request_data.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ID_MISMATCH_DETAIL)
        service.update(id, request_data.name, request_data.email, request_data.password)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete(
        "/{id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses={404: {"model": ErrorResponse}},
        summary=f"Delete {label.lower()}",
    )
    def delete_identity(
        id: uuid.UUID,
        service: IdentityService = Depends(get_service),
    ) -> Response:
        service.delete(id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


administrators_router = build_identity_router(
    "administrators", "Administrator", get_administrator_service
)
users_router = build_identity_router("users", "User", get_user_service)
