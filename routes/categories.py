"""
Category API routes.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
import structlog

from models.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse
)
from services.category_service import get_category_service
from routes.common import handle_error, get_business_id

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=CategoryListResponse)
async def list_categories(business_id: str = Depends(get_business_id)):
    """List all categories of the business, ordered by sort_order."""
    try:
        service = get_category_service()
        return CategoryListResponse.create(service.get_all(business_id))

    except Exception as e:
        return handle_error(e)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, business_id: str = Depends(get_business_id)):
    """
    Get a single category by ID.

    Raises:
        404: Category not found
    """
    try:
        return get_category_service().get_by_id(business_id, category_id)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(data: CategoryCreate, business_id: str = Depends(get_business_id)):
    """Create a new category."""
    try:
        return get_category_service().create(business_id, data)

    except Exception as e:
        return handle_error(e)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    business_id: str = Depends(get_business_id)
):
    """
    Update an existing category.

    Raises:
        404: Category not found
    """
    try:
        return get_category_service().update(business_id, category_id, data)

    except Exception as e:
        return handle_error(e)


@router.delete("/{category_id}", status_code=204)
async def delete_category(category_id: str, business_id: str = Depends(get_business_id)):
    """
    Delete a category.

    Raises:
        404: Category not found
    """
    try:
        get_category_service().delete(business_id, category_id)
        return Response(status_code=204)

    except Exception as e:
        return handle_error(e)
