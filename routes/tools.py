"""
Inventory tools: bulk demo data for testing and development.
"""

from fastapi import APIRouter, Depends, Query
import structlog

from exceptions import ValidationError
from models.imports import SeedResult, DeleteAllResult
from services.seed_service import get_seed_service
from services.notification_service import CollectingNotifier
from routes.common import handle_error, get_business_id

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/seed", response_model=SeedResult, status_code=201)
async def seed_random_data(business_id: str = Depends(get_business_id)):
    """Generate 3-5 random categories and 15-20 random products."""
    notifier = CollectingNotifier(business_id=business_id)
    try:
        return get_seed_service().seed(business_id, notifier=notifier)

    except Exception as e:
        return handle_error(e, messages=notifier.messages)


@router.delete("/data", response_model=DeleteAllResult)
async def delete_all_data(
    confirm: bool = Query(False, description="Must be true; deletion cannot be undone"),
    business_id: str = Depends(get_business_id)
):
    """
    Delete ALL products and categories of the business.

    Raises:
        422: confirm flag not set
    """
    notifier = CollectingNotifier(business_id=business_id)
    try:
        if not confirm:
            raise ValidationError(
                "Pass confirm=true to delete all products and categories",
                code="CONFIRMATION_REQUIRED"
            )
        return get_seed_service().delete_all(business_id, notifier=notifier)

    except Exception as e:
        return handle_error(e, messages=notifier.messages)
