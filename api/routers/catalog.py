"""
Reference catalog routers.

Exercise types, metcon types and movement types share one set of endpoints:
- GET /{catalog} - Active entries, optionally filtered by category
- GET /{catalog}/{item_id} - Get one entry
- POST /{catalog} - Add an entry
- PUT /{catalog}/{item_id} - Update an entry
- DELETE /{catalog}/{item_id} - Deactivate (or delete, if unused) an entry

Reads need a signed-in user; writes need the admin role.
Catalog reads are served from the cache; writes drop the catalog's entries.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Type

from fastapi import APIRouter, Body, Depends, Query

from api.deps import (
    get_current_user,
    get_exercise_type_service,
    get_metcon_type_service,
    get_movement_type_service,
    require_admin,
)
from application.exceptions import EntityNotFoundError
from application.services import CatalogService
from domain.models import CatalogItem, ExerciseType, MetconType, MovementType

logger = logging.getLogger(__name__)


def build_catalog_router(
    prefix: str,
    tag: str,
    model: Type[CatalogItem],
    get_service: Callable[..., CatalogService],
) -> APIRouter:
    """
    Build the CRUD router for one catalog.

    Args:
        prefix: URL prefix, e.g. "/exercise-types"
        tag: OpenAPI tag
        model: Catalog entity class used as request and response body
        get_service: Dependency provider for the catalog's service
    """
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", response_model=List[model])
    async def list_items(
        category: Optional[str] = Query(None, description="Only entries in this category"),
        include_inactive: bool = Query(False, description="Include deactivated entries"),
        user_id: str = Depends(get_current_user),
        service: CatalogService = Depends(get_service),
    ):
        return await service.list_items(category, include_inactive)

    @router.get("/{item_id}", response_model=model)
    async def get_item(
        item_id: int,
        user_id: str = Depends(get_current_user),
        service: CatalogService = Depends(get_service),
    ):
        return await service.get_item(item_id)

    @router.post("", response_model=model, status_code=201)
    async def create_item(
        item: model,
        user_id: str = Depends(require_admin),
        service: CatalogService = Depends(get_service),
    ):
        logger.info(f"User {user_id} adding to {prefix}")
        return await service.create_item(item.model_copy(update={"id": None}))

    @router.put("/{item_id}", response_model=model)
    async def update_item(
        item_id: int,
        changes: Dict[str, Any] = Body(..., description="Fields to change"),
        user_id: str = Depends(require_admin),
        service: CatalogService = Depends(get_service),
    ):
        logger.info(f"User {user_id} updating {prefix}/{item_id}")
        return await service.update_item(item_id, changes)

    @router.delete("/{item_id}")
    async def deactivate_item(
        item_id: int,
        user_id: str = Depends(require_admin),
        service: CatalogService = Depends(get_service),
    ):
        logger.info(f"User {user_id} deactivating {prefix}/{item_id}")
        if not await service.deactivate_item(item_id):
            raise EntityNotFoundError(f"{service.label} with ID {item_id} not found")
        return {"message": f"{service.label} deactivated successfully"}

    return router


exercise_types_router = build_catalog_router(
    "/exercise-types", "Exercise Types", ExerciseType, get_exercise_type_service
)
metcon_types_router = build_catalog_router(
    "/metcon-types", "Metcon Types", MetconType, get_metcon_type_service
)
movement_types_router = build_catalog_router(
    "/movement-types", "Movement Types", MovementType, get_movement_type_service
)
