"""
Spreadsheet import routes.

Upload an .xlsx/.xls file to add its rows to the business catalog.
"""

from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import StreamingResponse
import structlog

from config import settings
from exceptions import FileTooLargeError
from models.imports import ImportResult
from services.product_import_service import get_product_importer
from services.export_service import get_export_service
from services.notification_service import CollectingNotifier
from routes.common import handle_error, get_business_id

logger = structlog.get_logger(__name__)

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.post("", response_model=ImportResult)
async def import_products(
    file: UploadFile = File(...),
    business_id: str = Depends(get_business_id)
):
    """
    Import products from the first sheet of an Excel file.

    Unknown category names are created on the fly. Every response, success
    or failure, carries the user-facing messages produced along the way.

    Raises:
        409: An import is already running for this business
        422: Unreadable, empty or header-less file
        502: The product insert was rejected by the database
    """
    logger.info(
        "product_import_upload",
        business_id=business_id,
        filename=file.filename,
        content_type=file.content_type
    )

    notifier = CollectingNotifier(business_id=business_id, filename=file.filename)

    try:
        max_bytes = settings.import_max_file_bytes
        # size is None when the client sent no length for the part
        if file.size is not None and file.size > max_bytes:
            raise _too_large(file.size, max_bytes, notifier)

        content = await file.read(max_bytes + 1)
        if len(content) > max_bytes:
            raise _too_large(len(content), max_bytes, notifier)

        importer = get_product_importer()
        return importer.import_file(
            business_id,
            content,
            filename=file.filename or None,
            notifier=notifier
        )

    except Exception as e:
        return handle_error(e, messages=notifier.messages)


@router.get("/template")
async def download_import_template():
    """Download an empty workbook with the expected header row."""
    output = get_export_service().import_template_xlsx()
    return StreamingResponse(
        output,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="product_import_template.xlsx"'}
    )


def _too_large(size_bytes: int, max_bytes: int, notifier: CollectingNotifier) -> FileTooLargeError:
    error = FileTooLargeError(size_bytes, max_bytes)
    notifier.error(f"Import failed: {error.message}")
    return error
