"""
Product API routes.
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
import structlog

from models.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse
)
from services.product_service import get_product_service
from services.category_service import get_category_service
from services.export_service import get_export_service
from routes.common import handle_error, get_business_id

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.get("", response_model=ProductListResponse)
async def list_products(business_id: str = Depends(get_business_id)):
    """List all products of the business, ordered by name."""
    try:
        service = get_product_service()
        return ProductListResponse.create(service.get_all(business_id))

    except Exception as e:
        return handle_error(e)


@router.get("/export")
async def export_products(business_id: str = Depends(get_business_id)):
    """
    Download the product list as CSV.

    Returns 204 when there is nothing to export.
    """
    try:
        products = get_product_service().get_all(business_id)
        categories = get_category_service().get_all(business_id)

        content = get_export_service().products_csv(products, categories)
        if content is None:
            return Response(status_code=204)

        return Response(
            content=content.encode("utf-8"),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": 'attachment; filename="products.csv"'}
        )

    except Exception as e:
        return handle_error(e)


@router.get("/count/total")
async def count_products(
    include_inactive: bool = Query(False, description="Include inactive"),
    business_id: str = Depends(get_business_id)
):
    """Get total product count."""
    try:
        service = get_product_service()
        count = service.count(business_id, active_only=not include_inactive)
        return {"count": count}

    except Exception as e:
        return handle_error(e)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, business_id: str = Depends(get_business_id)):
    """
    Get a single product by ID.

    Raises:
        404: Product not found
    """
    try:
        return get_product_service().get_by_id(business_id, product_id)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(data: ProductCreate, business_id: str = Depends(get_business_id)):
    """
    Create a new product.

    Raises:
        422: Validation error
    """
    try:
        return get_product_service().create(business_id, data)

    except Exception as e:
        return handle_error(e)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    business_id: str = Depends(get_business_id)
):
    """
    Update an existing product.

    Only provided fields are updated.

    Raises:
        404: Product not found
        422: Validation error
    """
    try:
        return get_product_service().update(business_id, product_id, data)

    except Exception as e:
        return handle_error(e)


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, business_id: str = Depends(get_business_id)):
    """
    Delete a product.

    Raises:
        404: Product not found
    """
    try:
        get_product_service().delete(business_id, product_id)
        return Response(status_code=204)

    except Exception as e:
        return handle_error(e)
